"""Engine telemetry: JSON-lines event logging and a summary reader."""

import json
import os
from collections import deque
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from sentencegraph.config import data_path, env_bool
from sentencegraph.text_utils import normalize_whitespace


def telemetry_path() -> Path:
    name = os.getenv("SENTENCEGRAPH_TELEMETRY_LOG", "sentencegraph_telemetry.log") or "sentencegraph_telemetry.log"
    path = Path(name)
    return path if path.is_absolute() else data_path() / path


def telemetry_enabled() -> bool:
    return env_bool("SENTENCEGRAPH_TELEMETRY_ENABLED", True)


def append_event(event: str, payload: Optional[dict] = None) -> None:
    if not telemetry_enabled():
        return
    try:
        data = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": normalize_whitespace(event or "event"),
            "payload": payload or {},
        }
        path = telemetry_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")
    except Exception:
        # Telemetry must never break studying or generation.
        pass


def _parse_iso_utc(ts_raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(str(ts_raw).replace("Z", "+00:00"))
    except Exception:
        return None


def read_telemetry_summary(hours: int = 24, limit: int = 6) -> dict:
    h = max(1, min(168, int(hours or 24)))
    n = max(1, min(25, int(limit or 6)))
    now_utc = datetime.now(timezone.utc)
    cutoff = now_utc - timedelta(hours=h)

    counts: dict[str, int] = {}
    recent: deque = deque(maxlen=n)
    parse_errors = 0
    path = telemetry_path()
    file_exists = path.exists()

    if file_exists:
        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    raw = (line or "").strip()
                    if not raw:
                        continue
                    try:
                        item = json.loads(raw)
                    except Exception:
                        parse_errors += 1
                        continue
                    ts = _parse_iso_utc(str(item.get("ts") or ""))
                    if not ts or ts < cutoff:
                        continue
                    event = normalize_whitespace(str(item.get("event") or "event")) or "event"
                    counts[event] = counts.get(event, 0) + 1
                    recent.append(
                        {
                            "ts": ts.isoformat(),
                            "event": event,
                            "payload": item.get("payload") or {},
                        }
                    )
        except OSError:
            pass

    return {
        "status": "ok",
        "now_utc": now_utc.isoformat(),
        "window_hours": h,
        "telemetry_enabled": telemetry_enabled(),
        "file_exists": file_exists,
        "file_path": str(path.name),
        "counts": counts,
        "recent": list(recent),
        "parse_errors": parse_errors,
    }
