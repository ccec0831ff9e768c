from __future__ import annotations

from pathlib import Path

import pytest

from ost_logger.cli import main


@pytest.fixture(autouse=True)
def cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("OST_LOGGER_CACHE_DIR", str(tmp_path))
    monkeypatch.delenv("OST_LOGGER_FILENAME", raising=False)
    return tmp_path


def test_add_list_clear(cache_dir: Path, capsys) -> None:
    main(["add", "first", "--category", "ui"])
    main(["add", "second", "--type", "error"])
    capsys.readouterr()

    main(["list", "--format", "%Y"])
    out = capsys.readouterr().out

    assert (cache_dir / "logRecords.json").is_file()
    assert "[ui] first" in out
    assert "[debugging] second" in out
    assert "Found 2 log entries." in out

    main(["clear"])
    assert not (cache_dir / "logRecords.json").exists()


def test_list_without_file(capsys) -> None:
    main(["list"])
    assert "Found 0 log entries." in capsys.readouterr().out


def test_clear_without_file_exits_1(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["clear"])

    assert exc.value.code == 1
    assert "Cannot remove" in capsys.readouterr().err


def test_invalid_env_exits_2(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("OST_LOGGER_LOOKBACK_HOURS", "never")

    with pytest.raises(SystemExit) as exc:
        main(["list"])

    assert exc.value.code == 2
    assert "OST_LOGGER_LOOKBACK_HOURS" in capsys.readouterr().err


def test_custom_file_name(cache_dir: Path) -> None:
    main(["--file", "other.json", "add", "m"])
    assert (cache_dir / "other.json").is_file()


@pytest.mark.parametrize("name", ["../escape.json", "/tmp/abs.json", "nested/x.json", ".."])
def test_file_must_stay_in_cache_dir(name: str, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--file", name, "add", "m"])

    assert exc.value.code == 2
    assert "--file must be a bare file name" in capsys.readouterr().err
