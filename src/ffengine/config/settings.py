"""Environment-driven settings for the outer layers (store, sources, CLI)."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)

DB_PATH_ENV = "FFENGINE_DB_PATH"
STATS_TTL_ENV = "FFENGINE_STATS_TTL_HOURS"
SLEEPER_URL_ENV = "FFENGINE_SLEEPER_URL"
HTTP_TIMEOUT_ENV = "FFENGINE_HTTP_TIMEOUT"
LOG_LEVEL_ENV = "FFENGINE_LOG_LEVEL"

_STATS_TTL_HOURS_DEFAULT = 6.0
_HTTP_TIMEOUT_DEFAULT = 20.0
_SLEEPER_URL_DEFAULT = "https://api.sleeper.app/v1/players/nfl"


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def db_path() -> Path | str:
    raw = os.getenv(DB_PATH_ENV)
    if raw:
        return raw if raw.startswith("file:") else Path(raw)
    return Path(tempfile.gettempdir()) / "ffengine" / "ffengine.sqlite"


def stats_ttl_seconds() -> float:
    return _env_float(STATS_TTL_ENV, _STATS_TTL_HOURS_DEFAULT, clamp_min=0.0) * 3600.0


def http_timeout() -> float:
    return _env_float(HTTP_TIMEOUT_ENV, _HTTP_TIMEOUT_DEFAULT, clamp_min=1.0)


def sleeper_url() -> str:
    return os.getenv(SLEEPER_URL_ENV) or _SLEEPER_URL_DEFAULT


def log_level() -> str:
    return (os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
