"""
Per-language corpus library.

Owns one SentenceGraph per language together with the record of which queries
and page titles were already studied. Fetching the page text is left to the
caller; ``study`` receives the extracts already downloaded.
"""

import random
import threading
from typing import Iterable, Mapping, Optional, Union

from sentencegraph.config import GeneratorSettings
from sentencegraph.errors import InvalidInputError, UnknownLanguageError
from sentencegraph.graph import GenerationResult, SentenceGraph
from sentencegraph.schemas import LibraryEntry, LibrarySnapshot
from sentencegraph.synthesizer import SentenceSynthesizer
from sentencegraph.telemetry import append_event
from sentencegraph.text_utils import format_segments, parse_words

ALREADY_STUDIED = -1

_ILLEGAL_CHARS = "|"


def _check_legal(*values: str) -> None:
    for value in values:
        if any(ch in (value or "") for ch in _ILLEGAL_CHARS):
            raise InvalidInputError("Illegal characters in the parameters.")


class CorpusLibrary:
    """A stateful, multi-language sentence generator."""

    def __init__(self, settings: Optional[GeneratorSettings] = None):
        self.settings = settings or GeneratorSettings()
        self._graphs: dict[str, SentenceGraph] = {}
        self._queries: dict[str, set[str]] = {}
        self._analyzed: dict[str, set[str]] = {}
        self._lock = threading.RLock()

    @property
    def languages(self) -> list[str]:
        with self._lock:
            return sorted(self._graphs)

    def graph(self, language: str) -> SentenceGraph:
        with self._lock:
            graph = self._graphs.get((language or "").lower())
            if graph is None:
                raise UnknownLanguageError(language)
            return graph

    def study(self, language: str, query: str, pages: Mapping[str, str]) -> int:
        """Analyze downloaded page extracts for *query*.

        Returns the number of tokens analyzed, or ``ALREADY_STUDIED`` when the
        query was seen before for this language.
        """
        language = (language or "").lower()
        with self._lock:
            queries = self._queries.setdefault(language, set())
            analyzed = self._analyzed.setdefault(language, set())
            if query in queries:
                append_event("study_skipped", {"language": language, "query": query})
                return ALREADY_STUDIED

            _check_legal(language, query)

            segments: list[str] = []
            for title, text in pages.items():
                if not title or title in analyzed:
                    continue
                analyzed.add(title)
                if text is None:
                    continue
                segments.extend(format_segments(text, self.settings.min_input_length))

            graph = self._graphs.get(language)
            if graph is None:
                graph = SentenceGraph(self.settings.graph_order)
                self._graphs[language] = graph

            count = 0
            for segment in segments:
                words = parse_words(segment)
                graph.analyze(words)
                count += len(words)

            queries.add(query)

        append_event(
            "study",
            {"language": language, "query": query, "segments": len(segments), "tokens": count},
        )
        return count

    def generate(
        self,
        language: str,
        keywords: Iterable[str],
        settings: Optional[GeneratorSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> GenerationResult:
        settings = settings or self.settings
        keywords = [kw for kw in (keywords or []) if kw]

        with self._lock:
            synthesizer = SentenceSynthesizer(self.graph(language))
            result = synthesizer.generate(
                settings.sentence_length,
                settings.max_length,
                keywords,
                settings.sample_count,
                settings.sentence_alpha,
                settings.sentence_beta,
                rng=rng,
            )

        append_event(
            "generate",
            {
                "language": (language or "").lower(),
                "keywords": keywords,
                "samples": settings.sample_count,
                "score": result.score,
                "chars": len(result.text),
            },
        )
        return result

    def to_snapshot(self) -> LibrarySnapshot:
        with self._lock:
            return LibrarySnapshot(
                settings=self.settings.model_copy(),
                library={
                    lang: LibraryEntry(
                        queries=sorted(self._queries.get(lang, ())),
                        analyzed=sorted(self._analyzed.get(lang, ())),
                    )
                    for lang in set(self._queries) | set(self._analyzed)
                },
                graphs={lang: graph.to_snapshot() for lang, graph in self._graphs.items()},
            )

    @classmethod
    def from_snapshot(cls, snapshot: Union[LibrarySnapshot, dict]) -> "CorpusLibrary":
        if not isinstance(snapshot, LibrarySnapshot):
            snapshot = LibrarySnapshot.model_validate(snapshot)

        library = cls(snapshot.settings.model_copy())
        for lang, entry in snapshot.library.items():
            library._queries[lang] = set(entry.queries)
            library._analyzed[lang] = set(entry.analyzed)
        for lang, graph_snapshot in snapshot.graphs.items():
            library._graphs[lang] = SentenceGraph.from_snapshot(graph_snapshot)
        return library

    def restore(self, snapshot: Union[LibrarySnapshot, dict]) -> None:
        """Replace this library's state in place with the snapshot contents."""
        other = CorpusLibrary.from_snapshot(snapshot)
        with self._lock:
            self.settings = other.settings
            self._graphs = other._graphs
            self._queries = other._queries
            self._analyzed = other._analyzed
