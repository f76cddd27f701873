"""Graph routes: list, study page extracts, explain keywords."""

import random

from fastapi import APIRouter, Depends, HTTPException

from sentencegraph.deps import check_language, get_library
from sentencegraph.errors import InvalidInputError, UnknownLanguageError
from sentencegraph.library import CorpusLibrary
from sentencegraph.schemas import (
    ExplainRequest,
    ExplainResponse,
    GraphInfo,
    StudyRequest,
    StudyResponse,
)

router = APIRouter(prefix="/api/graphs", tags=["graphs"])


@router.get("", response_model=list[GraphInfo])
async def list_graphs(library: CorpusLibrary = Depends(get_library)):
    infos = []
    for lang in library.languages:
        graph = library.graph(lang)
        infos.append(GraphInfo(language=lang, order=graph.order, contexts=len(graph)))
    return infos


@router.post("/{language}/study", response_model=StudyResponse)
def study(language: str, request: StudyRequest, library: CorpusLibrary = Depends(get_library)):
    lang = check_language(language)
    if not request.query.strip():
        raise HTTPException(status_code=400, detail="No topic specified.")
    try:
        analyzed = library.study(lang, request.query, request.pages)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return StudyResponse(language=lang, query=request.query, analyzed=analyzed)


@router.post("/{language}/explain", response_model=ExplainResponse)
def explain(language: str, request: ExplainRequest, library: CorpusLibrary = Depends(get_library)):
    lang = check_language(language)
    rng = random.Random(request.seed) if request.seed is not None else None
    try:
        result = library.generate(lang, request.keywords, rng=rng)
    except UnknownLanguageError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return ExplainResponse(language=lang, text=result.text, score=result.score)
