"""Core data models for collected log records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

DEFAULT_CATEGORY = "debugging"

# Historic display format `yyyy-MM-dd [hh:mm:ss]`: 12-hour clock, no AM/PM marker.
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d [%I:%M:%S]"


class LogType(str, Enum):
    """Severity of a posted log message."""

    INFO = "INFO"
    DEBUG = "DEBUG"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FAULT = "FAULT"


@dataclass(frozen=True, slots=True)
class LogColor:
    """Display color as four normalized channels (0..1)."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 0.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def is_close(self, other: LogColor, *, tol: float = 1e-3) -> bool:
        """Compare channel-wise; persisted floats do not round-trip bit-exact."""
        return all(abs(a - b) <= tol for a, b in zip(self.as_tuple(), other.as_tuple()))


GRAY = LogColor(0.5, 0.5, 0.5, 1.0)
YELLOW = LogColor(1.0, 1.0, 0.0, 1.0)
ORANGE = LogColor(1.0, 0.5, 0.0, 1.0)
RED = LogColor(1.0, 0.0, 0.0, 1.0)
LIGHT_GRAY = LogColor(2 / 3, 2 / 3, 2 / 3, 1.0)

_SEVERITY_COLORS: dict[LogType, LogColor] = {
    LogType.INFO: GRAY,
    LogType.WARNING: YELLOW,
    LogType.ERROR: ORANGE,
    LogType.FAULT: RED,
}


def color_for(level: LogType) -> LogColor:
    """Return the display color for a severity (DEBUG falls back to light gray)."""
    return _SEVERITY_COLORS.get(level, LIGHT_GRAY)


def level_for_color(color: LogColor) -> LogType:
    """Best-effort inverse of `color_for`, used when a stored record has no level."""
    for level, candidate in _SEVERITY_COLORS.items():
        if candidate.is_close(color):
            return level
    return LogType.DEBUG


def format_timestamp(ts: datetime, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Format a timestamp for display. Naive values are assumed to be UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.strftime(fmt)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Log:
    """Log detail posted by callers before it becomes a stored record."""

    message: str
    type: LogType
    category: str = DEFAULT_CATEGORY

    @property
    def color(self) -> LogColor:
        return color_for(self.type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "type": self.type.value,
            "category": self.category,
        }


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One immutable collected log record.

    The color is resolved when the record is created and carried with it, so
    records read back from the native subsystem keep that subsystem's colors.
    """

    timestamp: datetime
    category: str
    message: str
    level: LogType = LogType.INFO
    color: LogColor | None = None  # None -> color_for(level)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if self.color is None:
            object.__setattr__(self, "color", color_for(self.level))

    @classmethod
    def create(
        cls,
        message: str,
        *,
        level: LogType = LogType.INFO,
        category: str | None = None,
        timestamp: datetime | None = None,
    ) -> LogEntry:
        """Build a record stamped with the current time and its severity color."""
        return cls(
            timestamp=timestamp if timestamp is not None else _utcnow(),
            category=category or DEFAULT_CATEGORY,
            message=message,
            level=level,
            color=color_for(level),
        )

    @classmethod
    def from_log(cls, detail: Log, *, timestamp: datetime | None = None) -> LogEntry:
        return cls.create(
            detail.message,
            level=detail.type,
            category=detail.category,
            timestamp=timestamp,
        )

    @property
    def date(self) -> str:
        """Timestamp in the default display format."""
        return format_timestamp(self.timestamp)
