"""
Runtime configuration for the sentence generator.

Values come from the environment, optionally seeded from a ``.env`` file that
sits next to this package.
"""

import math
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sentencegraph.errors import SettingsError

env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)


def _env_int(name: str, default: int, min_value: int, max_value: int) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_float(name: str, default: float, min_value: float, max_value: float) -> float:
    raw = os.getenv(name)
    try:
        value = float(raw) if raw not in (None, "") else default
    except Exception:
        value = default
    if not math.isfinite(value):
        value = default
    return max(min_value, min(max_value, value))


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def data_path() -> Path:
    return Path(os.getenv("SENTENCEGRAPH_DATA_PATH", "./data") or "./data")


def supported_languages() -> list[str]:
    raw = os.getenv("SENTENCEGRAPH_LANGUAGES", "en") or "en"
    return [lang.strip().lower() for lang in raw.split(",") if lang.strip()]


# Dash-style parameter names accepted by ``with_parameter``.
PARAMETER_FIELDS = {
    "sentence-length": "sentence_length",
    "sentence-sample-count": "sample_count",
    "sentence-constant-alpha": "sentence_alpha",
    "sentence-constant-beta": "sentence_beta",
}


class GeneratorSettings(BaseModel):
    """Tunables for studying text and generating sentences."""

    model_config = ConfigDict(validate_assignment=True)

    graph_order: int = Field(default=4, ge=1)
    min_input_length: int = Field(default=20, ge=0)
    sentence_length: int = Field(default=50, ge=1)
    sample_count: int = Field(default=1000, ge=1)
    sentence_alpha: float = Field(default=2.0, gt=0.0)
    sentence_beta: float = Field(default=1.5, gt=0.0)

    @field_validator("sentence_alpha", "sentence_beta")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be finite")
        return value

    @property
    def max_length(self) -> int:
        return self.sentence_length * 2

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        return cls(
            graph_order=_env_int("SENTENCEGRAPH_ORDER", 4, 1, 16),
            min_input_length=_env_int("SENTENCEGRAPH_MIN_INPUT_LENGTH", 20, 0, 10000),
            sentence_length=_env_int("SENTENCEGRAPH_SENTENCE_LENGTH", 50, 1, 10000),
            sample_count=_env_int("SENTENCEGRAPH_SAMPLE_COUNT", 1000, 1, 1000000),
            sentence_alpha=_env_float("SENTENCEGRAPH_ALPHA", 2.0, 0.0625, 16.0),
            sentence_beta=_env_float("SENTENCEGRAPH_BETA", 1.5, 0.0625, 16.0),
        )

    def with_parameter(self, parameter: str, raw_value: str) -> "GeneratorSettings":
        """Return a copy with one dash-named parameter set from its text form."""
        field_name: Optional[str] = PARAMETER_FIELDS.get((parameter or "").strip().lower())
        if field_name is None:
            raise SettingsError(f"Unknown parameter: {parameter}")

        try:
            value = float(str(raw_value).strip())
        except ValueError:
            raise SettingsError(f"Invalid value for {parameter}: {raw_value}") from None
        if field_name in ("sentence_length", "sample_count"):
            if not value.is_integer():
                raise SettingsError(f"Invalid value for {parameter}: {raw_value}")
            value = int(value)

        data = self.model_dump()
        data[field_name] = value
        try:
            return GeneratorSettings.model_validate(data)
        except ValueError as exc:
            raise SettingsError(f"Invalid value for {parameter}: {raw_value}") from exc
