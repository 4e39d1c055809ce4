from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_MAX_READINGS = 1000

_BUILDING_NAME_ENV = "MONITOR_BUILDING_NAME"
_MAX_READINGS_ENV = "SENSOR_MAX_READINGS"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    building_name: Optional[str]
    max_readings: Optional[int]
    log_level: str


def _read_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_max_readings(default: int) -> Optional[int]:
    value = os.getenv(_MAX_READINGS_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    if parsed == 0:
        # Zero disables eviction entirely.
        return None
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        building_name=_read_optional_env(_BUILDING_NAME_ENV),
        max_readings=_read_max_readings(DEFAULT_MAX_READINGS),
        log_level=_read_log_level("INFO"),
    )
