from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from ost_logger.core.errors import OSTLoggerError
from ost_logger.core.models import LogEntry, LogType
from ost_logger.core.native import NativeLevel, NativeLogEntry


@pytest.fixture
def make_entry() -> Callable[..., LogEntry]:
    counter = iter(range(1_000_000))

    def _make(
        message: str = "message",
        *,
        level: LogType = LogType.INFO,
        category: str | None = None,
    ) -> LogEntry:
        ts = datetime(2025, 12, 30, 8, 0, 0, tzinfo=UTC) + timedelta(seconds=next(counter))
        return LogEntry.create(message, level=level, category=category, timestamp=ts)

    return _make


@pytest.fixture
def errors() -> list[OSTLoggerError]:
    return []


@pytest.fixture
def record_file(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "logRecords.json"


class FakeSubsystem:
    """In-memory stand-in for the host log facility."""

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.writes: list[tuple[str, str, NativeLevel, str]] = []
        self.stored: list[NativeLogEntry] = []
        self.queries: list[tuple[str, datetime]] = []
        self.fail_with = fail_with

    def write(self, subsystem: str, category: str, level: NativeLevel, message: str) -> None:
        self.writes.append((subsystem, category, level, message))

    def entries(self, subsystem: str, since: datetime) -> list[NativeLogEntry]:
        self.queries.append((subsystem, since))
        if self.fail_with is not None:
            raise self.fail_with
        return [e for e in self.stored if e.timestamp >= since]


@pytest.fixture
def fake_subsystem() -> FakeSubsystem:
    return FakeSubsystem()


@pytest.fixture
def make_subsystem() -> Callable[..., FakeSubsystem]:
    return FakeSubsystem
