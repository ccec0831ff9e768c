from __future__ import annotations

from pathlib import Path

import pytest

from ost_logger.core.config import StorageConfig, check_filename, resolve_storage_config


def test_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "OST_LOGGER_BACKEND",
        "OST_LOGGER_CACHE_DIR",
        "OST_LOGGER_FILENAME",
        "OST_LOGGER_CAPABILITY",
        "OST_LOGGER_LOOKBACK_HOURS",
        "OST_LOGGER_SEED_FROM_DISK",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = resolve_storage_config()

    assert cfg == StorageConfig()
    assert cfg.lookback_hours == 24
    assert cfg.filename == "logRecords.json"


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OST_LOGGER_BACKEND", "FILE")
    monkeypatch.setenv("OST_LOGGER_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("OST_LOGGER_FILENAME", "x.json")
    monkeypatch.setenv("OST_LOGGER_CAPABILITY", "legacy")
    monkeypatch.setenv("OST_LOGGER_LOOKBACK_HOURS", "6")
    monkeypatch.setenv("OST_LOGGER_SEED_FROM_DISK", "yes")

    cfg = resolve_storage_config()

    assert cfg == StorageConfig(
        backend="file",
        filename="x.json",
        cache_dir=tmp_path,
        capability="legacy",
        lookback_hours=6,
        seed_from_disk=True,
    )


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("OST_LOGGER_BACKEND", "sqlite"),
        ("OST_LOGGER_CAPABILITY", "maybe"),
        ("OST_LOGGER_LOOKBACK_HOURS", "abc"),
        ("OST_LOGGER_LOOKBACK_HOURS", "0"),
        ("OST_LOGGER_SEED_FROM_DISK", "sometimes"),
        ("OST_LOGGER_FILENAME", "../escape.json"),
    ],
)
def test_invalid_env_raises(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        resolve_storage_config()


@pytest.mark.parametrize("value", ["", ".", "..", "a/b.json", "/abs.json"])
def test_check_filename_rejects_paths(value: str) -> None:
    with pytest.raises(ValueError, match="--file"):
        check_filename(value, source="--file")


def test_check_filename_accepts_bare_name() -> None:
    assert check_filename("records.json", source="--file") == "records.json"
