"""Storage backend interface."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..models import LogEntry


@runtime_checkable
class StorageBackend(Protocol):
    """Ordered, duplicate-permitting record store.

    Implementations own their records exclusively; only the facade holding the
    backend mutates it.
    """

    def load(self) -> Sequence[LogEntry] | None:
        """Return every record in insertion order.

        ``None`` means no prior store exists, which is not the same as an
        empty sequence. Raises ``StorageReadError`` on undecodable state.
        """
        ...

    def append(self, entry: LogEntry) -> None:
        """Add one record at the end. Raises ``StorageWriteError``."""
        ...

    def clear_all(self) -> None:
        """Remove every record. Raises ``StorageWriteError``."""
        ...
