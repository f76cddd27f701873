"""Shared FastAPI dependencies used across route modules."""

from fastapi import HTTPException

from sentencegraph.config import GeneratorSettings, supported_languages
from sentencegraph.library import CorpusLibrary

_library = CorpusLibrary(GeneratorSettings.from_env())


def get_library() -> CorpusLibrary:
    return _library


def check_language(language: str) -> str:
    lang = (language or "").strip().lower()
    if lang not in supported_languages():
        raise HTTPException(status_code=400, detail=f"Unsupported language: {language}")
    return lang
