"""Native log subsystem contract and the standard-library adapter.

The storage facade only talks to the host logging facility through
``NativeLogSubsystem`` so tests can substitute it. ``StdlibLogSubsystem``
backs the contract with Python's ``logging`` module and keeps a bounded
in-process history so it can be queried like a structured log store.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol

from .errors import NativeSubsystemUnavailable
from .models import GRAY, LIGHT_GRAY, ORANGE, RED, YELLOW, LogColor, LogType

SUBSYSTEM = "com.onsightteam.logger"

NOTICE = 25
FAULT = 60
logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(FAULT, "FAULT")


class NativeLevel(str, Enum):
    UNDEFINED = "undefined"
    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    ERROR = "error"
    FAULT = "fault"


@dataclass(frozen=True, slots=True)
class NativeLogEntry:
    """One entry as reported by the native subsystem."""

    timestamp: datetime
    subsystem: str
    category: str
    level: NativeLevel
    composed_message: str


class NativeLogSubsystem(Protocol):
    """Write/read capability of the host structured logging facility."""

    def write(self, subsystem: str, category: str, level: NativeLevel, message: str) -> None:
        ...

    def entries(self, subsystem: str, since: datetime) -> list[NativeLogEntry]:
        """Return this process's entries at or after ``since``, oldest first."""
        ...


# Capability-rich platforms: info is posted as a notice and warnings share the error level.
_MODERN_WRITE_LEVELS: dict[LogType, NativeLevel] = {
    LogType.INFO: NativeLevel.NOTICE,
    LogType.DEBUG: NativeLevel.DEBUG,
    LogType.WARNING: NativeLevel.ERROR,
    LogType.ERROR: NativeLevel.ERROR,
    LogType.FAULT: NativeLevel.FAULT,
}

_LEGACY_WRITE_LEVELS: dict[LogType, NativeLevel] = {
    LogType.INFO: NativeLevel.INFO,
    LogType.DEBUG: NativeLevel.DEBUG,
    LogType.WARNING: NativeLevel.NOTICE,
    LogType.ERROR: NativeLevel.ERROR,
    LogType.FAULT: NativeLevel.FAULT,
}

_READ_COLORS: dict[NativeLevel, LogColor] = {
    NativeLevel.INFO: GRAY,
    NativeLevel.NOTICE: YELLOW,
    NativeLevel.ERROR: ORANGE,
    NativeLevel.FAULT: RED,
}

_READ_LEVELS: dict[NativeLevel, LogType] = {
    NativeLevel.DEBUG: LogType.DEBUG,
    NativeLevel.INFO: LogType.INFO,
    NativeLevel.NOTICE: LogType.INFO,
    NativeLevel.ERROR: LogType.ERROR,
    NativeLevel.FAULT: LogType.FAULT,
}


def modern_write(level: LogType, message: str) -> tuple[NativeLevel, str]:
    return _MODERN_WRITE_LEVELS[level], message


def legacy_write(level: LogType, message: str) -> tuple[NativeLevel, str]:
    if level is LogType.WARNING:
        message = f"{message} - warning"
    return _LEGACY_WRITE_LEVELS[level], message


def native_color(level: NativeLevel) -> LogColor:
    return _READ_COLORS.get(level, LIGHT_GRAY)


def native_log_type(level: NativeLevel) -> LogType:
    return _READ_LEVELS.get(level, LogType.DEBUG)


_TO_PY_LEVEL: dict[NativeLevel, int] = {
    NativeLevel.DEBUG: logging.DEBUG,
    NativeLevel.INFO: logging.INFO,
    NativeLevel.NOTICE: NOTICE,
    NativeLevel.ERROR: logging.ERROR,
    NativeLevel.FAULT: FAULT,
}


def _from_py_level(levelno: int) -> NativeLevel:
    if levelno <= 0:
        return NativeLevel.UNDEFINED
    if levelno <= logging.DEBUG:
        return NativeLevel.DEBUG
    if levelno <= logging.INFO:
        return NativeLevel.INFO
    if levelno <= logging.WARNING:
        return NativeLevel.NOTICE
    if levelno <= logging.ERROR:
        return NativeLevel.ERROR
    return NativeLevel.FAULT


class _CaptureHandler(logging.Handler):
    """Keep the most recent records in a bounded buffer."""

    def __init__(self, capacity: int) -> None:
        super().__init__(level=logging.DEBUG)
        self._records: deque[logging.LogRecord] = deque(maxlen=capacity)
        self._records_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        with self._records_lock:
            self._records.append(record)

    def snapshot(self) -> list[logging.LogRecord]:
        with self._records_lock:
            return list(self._records)


class StdlibLogSubsystem:
    """``NativeLogSubsystem`` over the standard ``logging`` module.

    Writes go to the logger ``"<subsystem>.<category>"`` and propagate as far
    as the host's logging configuration lets them. History is only what this
    process emitted under ``subsystem`` since the adapter was attached, capped
    at ``capacity`` entries. With ``capture=False`` the adapter is write-only.
    """

    def __init__(
        self,
        subsystem: str = SUBSYSTEM,
        *,
        capacity: int = 10_000,
        capture: bool = True,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._root_name = subsystem
        self._root = logging.getLogger(subsystem)
        self._handler: _CaptureHandler | None = None
        if capture:
            self._handler = _CaptureHandler(capacity)
            self._root.addHandler(self._handler)

    @property
    def captures(self) -> bool:
        return self._handler is not None

    def write(self, subsystem: str, category: str, level: NativeLevel, message: str) -> None:
        name = f"{subsystem}.{category}" if category else subsystem
        py_level = _TO_PY_LEVEL.get(level, logging.INFO)
        target = logging.getLogger(name)
        record = target.makeRecord(name, py_level, "(native)", 0, "%s", (message,), None)

        if target.isEnabledFor(py_level):
            # Propagation reaches the capture handler on the subsystem logger.
            target.handle(record)
        elif self._handler is not None and name.startswith(self._root_name):
            self._handler.handle(record)

    def entries(self, subsystem: str, since: datetime) -> list[NativeLogEntry]:
        if self._handler is None:
            raise NativeSubsystemUnavailable(f"History capture is disabled for {self._root_name}")

        out: list[NativeLogEntry] = []
        for record in self._handler.snapshot():
            if not record.name.startswith(subsystem):
                continue
            ts = datetime.fromtimestamp(record.created, UTC)
            if ts < since:
                continue
            out.append(
                NativeLogEntry(
                    timestamp=ts,
                    subsystem=self._root_name,
                    category=self._category_of(record.name),
                    level=_from_py_level(record.levelno),
                    composed_message=record.getMessage(),
                )
            )
        return out

    def close(self) -> None:
        """Detach the capture handler; history is no longer recorded."""
        if self._handler is None:
            return
        self._root.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> StdlibLogSubsystem:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _category_of(self, name: str) -> str:
        prefix = self._root_name + "."
        return name[len(prefix):] if name.startswith(prefix) else ""
