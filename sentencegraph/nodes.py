"""Value types for the sentence graph: context keys and per-context nodes."""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class Tail:
    """The context key: the most recent tokens, lowercased.

    Equality and hashing go through ``key``, the plain concatenation of the
    tokens, so ``("ab", "c")`` and ``("a", "bc")`` name the same context.
    """

    tokens: tuple[str, ...] = ()

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "Tail":
        return cls(tuple(t.lower() for t in tokens))

    @property
    def key(self) -> str:
        return "".join(self.tokens)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tail):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.key


EMPTY_TAIL = Tail()


@dataclass
class Node:
    """Outgoing transitions of one context.

    ``weight`` is the sum of ``freqs`` plus one for every time the context
    ended an analyzed sequence.
    """

    links: list[str] = field(default_factory=list)
    freqs: list[int] = field(default_factory=list)
    weight: int = 0
    is_exit: bool = False

    def record(self, word: str) -> None:
        try:
            index = self.links.index(word)
        except ValueError:
            self.links.append(word)
            self.freqs.append(1)
        else:
            self.freqs[index] += 1
        self.weight += 1

    def mark_exit(self) -> None:
        self.weight += 1
        self.is_exit = True

    @property
    def exit_weight(self) -> int:
        return self.weight - sum(self.freqs)
