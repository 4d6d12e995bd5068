"""Persistent JSON config helpers.

Stores default refresh interval, clamping preference, and worker limits.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .refresh.executor import DEFAULT_MAX_IN_FLIGHT

APP_NAME = "ratch"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "RATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_INTERVAL_SECONDS = 2.0
DEFAULT_STATUS_SECONDS = 2.0


@dataclass(frozen=True)
class WatchDefaults:
    """Settings the CLI falls back to when a flag is not given."""

    interval: float = DEFAULT_INTERVAL_SECONDS
    constrain: bool = True
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT
    status_seconds: float = DEFAULT_STATUS_SECONDS


def config_path() -> Path:
    """Return config path, honoring the ``RATCH_CONFIG`` override."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_float(value: object, fallback: float) -> float:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if not math.isfinite(value) or value <= 0:
        return fallback
    return float(value)


def _positive_int(value: object, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return fallback
    return value if value >= 1 else fallback


def load_watch_defaults() -> WatchDefaults:
    """Read watch defaults, replacing each invalid entry with its built-in value."""
    data = load_config()
    constrain = data.get("constrain")
    return WatchDefaults(
        interval=_positive_float(data.get("interval"), DEFAULT_INTERVAL_SECONDS),
        constrain=constrain if isinstance(constrain, bool) else True,
        max_in_flight=_positive_int(data.get("max_in_flight"), DEFAULT_MAX_IN_FLIGHT),
        status_seconds=_positive_float(data.get("status_seconds"), DEFAULT_STATUS_SECONDS),
    )
