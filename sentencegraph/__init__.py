"""Keyword-biased Markov chain sentence generation."""

from sentencegraph.graph import GenerationResult, SentenceGraph
from sentencegraph.library import CorpusLibrary
from sentencegraph.nodes import Node, Tail
from sentencegraph.synthesizer import SentenceSynthesizer

__all__ = [
    "CorpusLibrary",
    "GenerationResult",
    "Node",
    "SentenceGraph",
    "SentenceSynthesizer",
    "Tail",
]
