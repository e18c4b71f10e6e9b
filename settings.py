from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


_STRICT_ENV = "SENSOR_REGISTRY_STRICT"
_SEED_ENV = "SENSOR_REGISTRY_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    strict_registry: bool
    seed_sensors: Tuple[str, ...]
    log_level: str


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_seed_sensors() -> Tuple[str, ...]:
    value = os.getenv(_SEED_ENV)
    if value is None:
        return ()
    seen: dict[str, None] = {}
    for part in value.split(","):
        candidate = part.strip()
        if candidate:
            seen.setdefault(candidate, None)
    return tuple(seen)


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
        strict_registry=_read_bool_env(_STRICT_ENV, False),
        seed_sensors=_read_seed_sensors(),
        log_level=_read_log_level("INFO"),
    )
