"""Process-lifetime storage backend.

Everything stored here is lost when the process exits. Use the file backend
when collected records have to be exported.
"""

from __future__ import annotations

import threading

from ..models import LogEntry


class InMemoryBackend:
    """Ordered in-memory buffer. Every operation succeeds."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    def load(self) -> tuple[LogEntry, ...]:
        # Always a (possibly empty) snapshot, never None.
        with self._lock:
            return tuple(self._entries)

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
