"""Tool implementations behind the MCP server.

Keep this layer thin: validate inputs, translate them into facade calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ost_logger.core.logger_storage import LoggerStorage
from ost_logger.core.models import DEFAULT_TIMESTAMP_FORMAT, LogEntry, LogType, format_timestamp

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000
ALL_LEVELS = [t.value for t in LogType]


def _parse_level(s: str) -> LogType:
    name = s.strip().upper()
    if name == "WARN":
        name = "WARNING"
    try:
        return LogType(name)
    except ValueError as e:
        valid = ", ".join(ALL_LEVELS)
        raise ValueError(
            f"Unknown log level '{s}'. Valid values: {valid}. "
            "Tip: levels is case-insensitive (e.g., 'error', 'WARNING')."
        ) from e


def _parse_levels(levels: Sequence[str] | None) -> set[LogType] | None:
    if not levels:
        return None
    out = {_parse_level(s) for s in levels if s.strip()}
    return out or None


def entry_to_dict(entry: LogEntry, *, timestamp_format: str | None = None) -> dict[str, Any]:
    """Convert a LogEntry into a JSON-serializable dict."""
    c = entry.color
    return {
        "id": str(entry.id),
        "timestamp": entry.timestamp.isoformat(),
        "date": format_timestamp(entry.timestamp, timestamp_format or DEFAULT_TIMESTAMP_FORMAT),
        "category": entry.category,
        "message": entry.message,
        "level": entry.level.name.lower(),
        "color": {"red": c.red, "green": c.green, "blue": c.blue, "alpha": c.alpha},
    }


def add_log_impl(
    storage: LoggerStorage,
    *,
    message: str,
    level: str = "info",
    category: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `add_log` MCP tool."""
    if not message:
        raise ValueError("message must not be empty")
    entry = LogEntry.create(message, level=_parse_level(level), category=category)
    storage.add_log(entry)
    return {"added": entry_to_dict(entry)}


def get_logs_impl(
    storage: LoggerStorage,
    *,
    levels: Sequence[str] | None = None,
    category: str | None = None,
    limit: int | None = None,
    timestamp_format: str | None = None,
) -> dict[str, Any]:
    """Implementation for the `get_logs` MCP tool.

    Notes
    -----
    - entries are returned oldest first; ``limit`` keeps the most recent ones
    - storage errors are degraded to an empty list by the facade
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    wanted = _parse_levels(levels)
    entries = [
        e
        for e in storage.get_all_logs()
        if (wanted is None or e.level in wanted) and (category is None or e.category == category)
    ]
    entries = entries[-limit:]

    return {
        "count": len(entries),
        "capability": storage.capability.value,
        "entries": [entry_to_dict(e, timestamp_format=timestamp_format) for e in entries],
    }


def clear_logs_impl(storage: LoggerStorage) -> dict[str, Any]:
    """Implementation for the `clear_logs` MCP tool."""
    storage.clear()
    return {"cleared": True, "capability": storage.capability.value}
