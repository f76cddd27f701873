"""Best-of-N sentence sampling on top of a SentenceGraph."""

import random
from typing import Iterable, Optional

from sentencegraph.graph import GenerationResult, SentenceGraph


class SentenceSynthesizer:
    """Runs several independent generation attempts and keeps the best one."""

    def __init__(self, graph: SentenceGraph):
        self.graph = graph

    def generate(
        self,
        target_length: int,
        max_length: int,
        keywords: Iterable[str],
        sample_count: int,
        alpha: float,
        beta: float,
        rng: Optional[random.Random] = None,
    ) -> GenerationResult:
        rng = rng or random.Random()
        keywords = list(keywords or [])

        best = GenerationResult.empty()
        for _ in range(max(0, int(sample_count))):
            result = self.graph.generate_once(target_length, max_length, keywords, alpha, beta, rng=rng)
            if result.score > best.score:
                best = result
        return best
