"""Wire models for the persisted record file.

The file is a pretty-printed JSON array. Keys keep the historic order
(id, date, category, message, color) with ``level`` appended so severity
survives a round trip; files written without it are still accepted.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter

from ..models import DEFAULT_TIMESTAMP_FORMAT, LogColor, LogEntry, LogType, level_for_color


class StoredLogColor(BaseModel):
    red: float = Field(ge=0.0, le=1.0)
    green: float = Field(ge=0.0, le=1.0)
    blue: float = Field(ge=0.0, le=1.0)
    alpha: float = Field(ge=0.0, le=1.0)


class StoredLogEntry(BaseModel):
    id: UUID
    date: str = Field(description="ISO-8601 timestamp (legacy display format accepted).")
    category: str
    message: str
    color: StoredLogColor
    level: LogType | None = None

    @classmethod
    def from_entry(cls, entry: LogEntry) -> StoredLogEntry:
        c = entry.color
        return cls(
            id=entry.id,
            date=entry.timestamp.isoformat(),
            category=entry.category,
            message=entry.message,
            color=StoredLogColor(red=c.red, green=c.green, blue=c.blue, alpha=c.alpha),
            level=entry.level,
        )

    def to_entry(self) -> LogEntry:
        color = LogColor(
            red=self.color.red,
            green=self.color.green,
            blue=self.color.blue,
            alpha=self.color.alpha,
        )
        return LogEntry(
            id=self.id,
            timestamp=parse_stored_date(self.date),
            category=self.category,
            message=self.message,
            level=self.level if self.level is not None else level_for_color(color),
            color=color,
        )


_DOCUMENT = TypeAdapter(list[StoredLogEntry])


def parse_stored_date(s: str) -> datetime:
    """Parse a stored timestamp. Naive values are assumed to be UTC."""
    try:
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        dt = datetime.strptime(s, DEFAULT_TIMESTAMP_FORMAT)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def encode_entries(entries: Sequence[LogEntry]) -> bytes:
    """Serialize the full record sequence."""
    return _DOCUMENT.dump_json([StoredLogEntry.from_entry(e) for e in entries], indent=2)


def decode_entries(data: bytes) -> list[LogEntry]:
    """Deserialize a full record sequence.

    Raises ``pydantic.ValidationError`` on malformed JSON or shape, and
    ``ValueError`` on an unparseable date.
    """
    return [stored.to_entry() for stored in _DOCUMENT.validate_json(data)]
