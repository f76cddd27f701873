"""Gzip-compressed JSON snapshot files."""

import gzip
import json
import re
from pathlib import Path
from typing import Optional, Union

from sentencegraph.config import data_path as default_data_path
from sentencegraph.errors import InvalidFileNameError, SnapshotNotFoundError
from sentencegraph.telemetry import append_event

SNAPSHOT_SUFFIX = ".json.gz"

_UNSAFE_NAME = re.compile(r"[./\\]")


def check_file_name(name: str) -> str:
    if not name or _UNSAFE_NAME.search(name):
        raise InvalidFileNameError(name)
    return name


def snapshot_path(name: str, data_path: Optional[Union[str, Path]] = None) -> Path:
    base = Path(data_path) if data_path is not None else default_data_path()
    return base / f"{check_file_name(name)}{SNAPSHOT_SUFFIX}"


def write_snapshot(name: str, payload: dict, data_path: Optional[Union[str, Path]] = None) -> Path:
    path = snapshot_path(name, data_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    raw = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    path.write_bytes(gzip.compress(raw))
    append_event("snapshot_write", {"name": name, "bytes": path.stat().st_size})
    return path


def read_snapshot(name: str, data_path: Optional[Union[str, Path]] = None) -> dict:
    path = snapshot_path(name, data_path)
    if not path.exists():
        raise SnapshotNotFoundError(name)
    payload = json.loads(gzip.decompress(path.read_bytes()).decode("utf-8"))
    append_event("snapshot_read", {"name": name})
    return payload
