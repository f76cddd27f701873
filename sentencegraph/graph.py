"""
Order-k Markov chain over word tokens with keyword-biased generation.
"""

import math
import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

from sentencegraph.nodes import EMPTY_TAIL, Node, Tail
from sentencegraph.sampling import (
    clamp_constant,
    dedupe_keywords,
    edge_score,
    match_node,
    sample_node,
)
from sentencegraph.schemas import GraphSnapshot, NodeRecord

SENTENCE_BREAK = " "

TailLike = Union[Tail, str]


@dataclass(frozen=True)
class GenerationResult:
    text: str = ""
    score: float = 0.0

    @classmethod
    def empty(cls) -> "GenerationResult":
        return cls("", 0.0)

    @property
    def ok(self) -> bool:
        return bool(self.text)


def _build_result(parts: Sequence[str], score: float, found_count: int, beta: float) -> GenerationResult:
    return GenerationResult("".join(parts), score * (found_count ** beta))


def _tail_key(tail: TailLike) -> str:
    return tail.key if isinstance(tail, Tail) else str(tail).lower()


class SentenceGraph:
    """A sentence generator based on an order-k Markov chain.

    Contexts are stored arena style: ``_index`` maps a tail key to a slot in
    ``_nodes``. Nodes are only ever created by ``analyze``.
    """

    def __init__(self, order: int = 1):
        self._order = max(1, math.floor(order))
        self._index: dict[str, int] = {}
        self._nodes: list[Node] = []

    @property
    def order(self) -> int:
        return self._order

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, tail: object) -> bool:
        if not isinstance(tail, (Tail, str)):
            return False
        return _tail_key(tail) in self._index

    def items(self) -> Iterator[tuple[str, Node]]:
        for key, slot in self._index.items():
            yield key, self._nodes[slot]

    def node_at(self, tail: TailLike = EMPTY_TAIL) -> Optional[Node]:
        slot = self._index.get(_tail_key(tail))
        return self._nodes[slot] if slot is not None else None

    def _node_for(self, tail: Tail) -> Node:
        key = tail.key
        slot = self._index.get(key)
        if slot is None:
            slot = len(self._nodes)
            self._nodes.append(Node())
            self._index[key] = slot
        return self._nodes[slot]

    def analyze(self, tokens: Iterable[str]) -> None:
        """Record the transitions of one token sequence (one or more sentences)."""
        tokens = list(tokens)
        if not tokens:
            return

        queue: deque[str] = deque(maxlen=self._order)
        for token in tokens:
            self._node_for(Tail.from_tokens(queue)).record(token)
            queue.append(token)

        # The extra weight on the final context is the chance of stopping here.
        self._node_for(Tail.from_tokens(queue)).mark_exit()

    def generate_once(
        self,
        target_length: int,
        max_length: int,
        keywords: Iterable[str],
        alpha: float,
        beta: float,
        rng: Optional[random.Random] = None,
    ) -> GenerationResult:
        """Run a single stochastic generation attempt.

        Walks the chain from the empty context for at most ``max_length``
        steps. Once ``target_length`` steps have passed, the walk may stop at
        any exit context. Edges whose word contains a still-missing keyword are
        preferred whenever the current context has any.

        The score sums ``(1 / chance) ** alpha`` over every draw and is finally
        multiplied by ``found ** beta`` where ``found`` is the number of
        distinct keyword-bearing words emitted. A failed attempt returns the
        empty result.
        """
        rng = rng or random.Random()
        alpha = clamp_constant(alpha)
        beta = clamp_constant(beta)

        keywords = dedupe_keywords(keywords)
        remaining = list(keywords)
        found: list[str] = []

        parts: list[str] = []
        queue: deque[str] = deque(maxlen=self._order)
        score = 0.0

        for step in range(max(0, int(max_length))):
            node = self.node_at(Tail.from_tokens(queue)) or Node()

            if node.weight == 0:
                break
            if step >= target_length and node.is_exit:
                return _build_result(parts, score, len(found), beta)

            if remaining:
                matches = match_node(node, remaining, found)
                if matches.weight > 0:
                    node = matches

            draw = sample_node(node, rng)
            score += edge_score(draw.chance, alpha)

            if draw.word is None:
                if step < target_length:
                    parts.append(SENTENCE_BREAK)
                    queue.clear()
                    continue
                return _build_result(parts, score, len(found), beta)

            word = draw.word
            queue.append(word)
            parts.append(word)

            lowercase = word.lower()
            hit = next((kw for kw in remaining if kw in lowercase), None)
            if hit is not None and word not in found:
                found.append(word)
                remaining.remove(hit)
                if not remaining:
                    remaining = list(keywords)

        return GenerationResult.empty()

    def to_snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            order=self._order,
            graph={
                key: NodeRecord(
                    links=list(node.links),
                    freqs=list(node.freqs),
                    weight=node.weight,
                    is_exit=node.is_exit,
                )
                for key, node in self.items()
            },
        )

    @classmethod
    def from_snapshot(cls, snapshot: Union[GraphSnapshot, dict]) -> "SentenceGraph":
        if not isinstance(snapshot, GraphSnapshot):
            snapshot = GraphSnapshot.model_validate(snapshot)

        graph = cls(snapshot.order)
        for key, record in snapshot.graph.items():
            graph._index[key] = len(graph._nodes)
            graph._nodes.append(
                Node(
                    links=list(record.links),
                    freqs=list(record.freqs),
                    weight=record.weight,
                    is_exit=record.is_exit,
                )
            )
        return graph
