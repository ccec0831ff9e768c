"""Storage configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

from .native import SUBSYSTEM

BackendKind = Literal["memory", "file"]

DEFAULT_FILENAME = "logRecords.json"
DEFAULT_LOOKBACK_HOURS = 24

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class StorageConfig:
    backend: BackendKind = "memory"
    filename: str = DEFAULT_FILENAME
    cache_dir: Path | None = None  # None -> per-user cache directory

    # "native" / "legacy"; None picks native only when a subsystem is supplied.
    capability: str | None = None
    lookback_hours: int = DEFAULT_LOOKBACK_HOURS
    subsystem_tag: str = SUBSYSTEM

    # Keep records that were on disk before the backend was created.
    seed_from_disk: bool = False


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _env_bool(name: str, value: str) -> bool:
    low = value.lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false)")


def check_filename(value: str, *, source: str) -> str:
    """Reject names that would place the record file outside the cache directory."""
    if not value or Path(value).name != value or value in (".", ".."):
        raise ValueError(f"{source} must be a bare file name")
    return value


def resolve_storage_config(cfg: StorageConfig | None = None) -> StorageConfig:
    """Return config with ``OST_LOGGER_*`` env overrides applied."""
    if cfg is None:
        cfg = StorageConfig()

    changes: dict[str, object] = {}

    backend = _env("OST_LOGGER_BACKEND")
    if backend is not None:
        backend = backend.lower()
        if backend not in ("memory", "file"):
            raise ValueError("OST_LOGGER_BACKEND must be 'memory' or 'file'")
        changes["backend"] = backend

    cache_dir = _env("OST_LOGGER_CACHE_DIR")
    if cache_dir is not None:
        changes["cache_dir"] = Path(cache_dir).expanduser()

    filename = _env("OST_LOGGER_FILENAME")
    if filename is not None:
        changes["filename"] = check_filename(filename, source="OST_LOGGER_FILENAME")

    capability = _env("OST_LOGGER_CAPABILITY")
    if capability is not None:
        capability = capability.lower()
        if capability not in ("native", "legacy"):
            raise ValueError("OST_LOGGER_CAPABILITY must be 'native' or 'legacy'")
        changes["capability"] = capability

    hours = _env("OST_LOGGER_LOOKBACK_HOURS")
    if hours is not None:
        try:
            value = int(hours)
        except ValueError as exc:
            raise ValueError("OST_LOGGER_LOOKBACK_HOURS must be an integer") from exc
        if value < 1:
            raise ValueError("OST_LOGGER_LOOKBACK_HOURS must be >= 1")
        changes["lookback_hours"] = value

    seed = _env("OST_LOGGER_SEED_FROM_DISK")
    if seed is not None:
        changes["seed_from_disk"] = _env_bool("OST_LOGGER_SEED_FROM_DISK", seed)

    if not changes:
        return cfg
    return replace(cfg, **changes)
