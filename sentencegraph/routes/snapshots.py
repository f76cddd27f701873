"""Snapshot routes: write the library to disk and load it back."""

from fastapi import APIRouter, Depends, HTTPException, status

from sentencegraph.deps import get_library
from sentencegraph.errors import InvalidFileNameError, SnapshotNotFoundError
from sentencegraph.library import CorpusLibrary
from sentencegraph.schemas import SnapshotResponse
from sentencegraph.storage import read_snapshot, write_snapshot

router = APIRouter(prefix="/api/snapshots", tags=["snapshots"])


@router.post("/{name}", response_model=SnapshotResponse, status_code=status.HTTP_201_CREATED)
def save_snapshot(name: str, library: CorpusLibrary = Depends(get_library)):
    snapshot = library.to_snapshot()
    try:
        write_snapshot(name, snapshot.to_wire())
    except InvalidFileNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except OSError as exc:
        print(f"[snapshot] write failed for {name}: {exc}")
        raise HTTPException(status_code=500, detail=f"Couldn't access file {name}")
    return SnapshotResponse(name=name, languages=sorted(snapshot.graphs))


@router.post("/{name}/load", response_model=SnapshotResponse)
def load_snapshot(name: str, library: CorpusLibrary = Depends(get_library)):
    try:
        library.restore(read_snapshot(name))
    except InvalidFileNameError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SnapshotNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (OSError, ValueError) as exc:
        print(f"[snapshot] read failed for {name}: {exc}")
        raise HTTPException(status_code=500, detail=f"Couldn't access file {name}")
    return SnapshotResponse(name=name, languages=library.languages)
