"""Weighted sampling and scoring helpers shared by the sentence graph."""

import random
from typing import Iterable, NamedTuple, Optional, Sequence

from sentencegraph.nodes import Node

CONSTANT_MIN = 0.0625
CONSTANT_MAX = 16.0


class Draw(NamedTuple):
    """Outcome of one weighted draw. ``word`` is None for a termination."""

    word: Optional[str]
    chance: float


def clamp_constant(value: float) -> float:
    return max(CONSTANT_MIN, min(CONSTANT_MAX, float(value)))


def dedupe_keywords(keywords: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for kw in keywords or ():
        low = (kw or "").lower()
        if low and low not in seen:
            seen.append(low)
    return seen


def sample_node(node: Node, rng: random.Random) -> Draw:
    """Pick an outgoing word from *node* proportionally to its frequencies.

    Picks that land past the last edge fall into the termination share of the
    node weight and come back as ``Draw(None, 1.0)``.
    """
    if node.weight <= 0:
        return Draw(None, 1.0)

    pick = rng.randrange(node.weight)
    for word, freq in zip(node.links, node.freqs):
        if pick < freq:
            return Draw(word, freq / node.weight)
        pick -= freq
    return Draw(None, 1.0)


def match_node(node: Node, remaining: Sequence[str], found: Sequence[str]) -> Node:
    """Return a view of *node* restricted to words that hit a remaining keyword.

    Words already in *found* are left out. Keyword matching is a
    case-insensitive substring test; *remaining* is expected in lowercase.
    """
    result = Node()
    for word, freq in zip(node.links, node.freqs):
        if word in found:
            continue
        lowercase = word.lower()
        if any(kw in lowercase for kw in remaining):
            result.links.append(word)
            result.freqs.append(freq)
            result.weight += freq
    return result


def edge_score(chance: float, alpha: float) -> float:
    if chance <= 0.0:
        return 0.0
    return (1.0 / chance) ** alpha
