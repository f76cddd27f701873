"""Generator settings routes."""

from fastapi import APIRouter, Depends, HTTPException

from sentencegraph.config import GeneratorSettings
from sentencegraph.deps import get_library
from sentencegraph.errors import SettingsError
from sentencegraph.library import CorpusLibrary
from sentencegraph.schemas import SettingUpdate

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=GeneratorSettings)
async def get_settings(library: CorpusLibrary = Depends(get_library)):
    return library.settings


@router.post("", response_model=GeneratorSettings)
async def update_setting(update: SettingUpdate, library: CorpusLibrary = Depends(get_library)):
    try:
        library.settings = library.settings.with_parameter(update.parameter, update.value)
    except SettingsError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return library.settings
