"""Runtime settings read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .history import DEFAULT_HISTORY_LIMIT

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_PATH = BASE_DIR / "data" / "records.json"
DEFAULT_API_URL = "http://localhost:8000"


def _positive_number(env: Mapping[str, str], name: str, default: float, cast=float):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return cast(default)
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero.")
    return value


def _log_level(raw: Optional[str]) -> int:
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {raw!r}")
    return level


@dataclass(frozen=True)
class Settings:
    data_path: Path = DEFAULT_DATA_PATH
    history_limit: int = DEFAULT_HISTORY_LIMIT
    canvas_width: int = 800
    canvas_height: int = 600
    log_level: int = logging.INFO
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        data_path = env.get("RECTMEASURE_DATA_PATH")
        return cls(
            data_path=Path(data_path) if data_path else DEFAULT_DATA_PATH,
            history_limit=_positive_number(env, "RECTMEASURE_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT, int),
            canvas_width=_positive_number(env, "RECTMEASURE_CANVAS_WIDTH", 800, int),
            canvas_height=_positive_number(env, "RECTMEASURE_CANVAS_HEIGHT", 600, int),
            log_level=_log_level(env.get("RECTMEASURE_LOG_LEVEL")),
            api_url=env.get("BACKEND_API_URL", DEFAULT_API_URL).rstrip("/"),
        )


__all__ = ["DEFAULT_DATA_PATH", "Settings"]
