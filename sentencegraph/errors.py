"""Exceptions raised by the corpus library, storage and settings layers.

The generative core (graph, sampling, synthesizer) signals degenerate input by
value and never raises these.
"""


class SentenceGraphError(Exception):
    """Base class for all sentencegraph errors."""


class UnknownLanguageError(SentenceGraphError):
    def __init__(self, language: str):
        super().__init__(f"Unknown language: {language}")
        self.language = language


class InvalidInputError(SentenceGraphError):
    pass


class InvalidFileNameError(SentenceGraphError):
    def __init__(self, name: str):
        super().__init__(f"Invalid file name: {name!r}")
        self.name = name


class SnapshotNotFoundError(SentenceGraphError):
    def __init__(self, name: str):
        super().__init__(f"Snapshot not found: {name}")
        self.name = name


class SettingsError(SentenceGraphError):
    pass
