"""File-backed storage backend.

Every append re-serializes the whole shadow copy and overwrites the file.
That is O(n) per write, which is fine for debug-sized volumes.

The shadow copy only holds what this instance appended. A new instance over
an existing file therefore overwrites earlier content on its first append,
unless it is created with ``seed_from_disk=True``.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from ..errors import StorageReadError, StorageWriteError
from ..models import LogEntry
from .schema import decode_entries, encode_entries

logger = logging.getLogger(__name__)


def default_cache_dir() -> Path:
    """Return the per-user cache directory used for record files."""
    xdg = os.getenv("XDG_CACHE_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".cache"
    return base / "ost_logger"


class FileBackend:
    """Durable backend persisting the record sequence to one JSON file."""

    def __init__(self, path: str | Path, *, seed_from_disk: bool = False) -> None:
        self._path = Path(path)
        self._seed_from_disk = seed_from_disk
        self._seeded = False
        self._content: list[LogEntry] = []
        self._lock = threading.Lock()

    @classmethod
    def in_cache_dir(
        cls,
        filename: str,
        *,
        cache_dir: str | Path | None = None,
        seed_from_disk: bool = False,
    ) -> FileBackend:
        base = Path(cache_dir) if cache_dir is not None else default_cache_dir()
        return cls(base / filename, seed_from_disk=seed_from_disk)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[LogEntry] | None:
        if not self._path.exists():
            return None
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise StorageReadError(f"Cannot read {self._path}: {exc}") from exc
        try:
            return decode_entries(data)
        except ValueError as exc:
            raise StorageReadError(f"Cannot decode {self._path}: {exc}") from exc

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            if self._seed_from_disk and not self._seeded:
                try:
                    self._content = list(self.load() or [])
                except StorageReadError as exc:
                    raise StorageWriteError(f"Cannot seed from {self._path}: {exc}") from exc
                self._seeded = True

            # A record that cannot be encoded never enters the shadow copy.
            try:
                data = encode_entries([*self._content, entry])
            except ValueError as exc:
                raise StorageWriteError(f"Cannot encode record for {self._path}: {exc}") from exc

            self._content.append(entry)
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_bytes(data)
            except OSError as exc:
                raise StorageWriteError(f"Cannot write {self._path}: {exc}") from exc
            logger.debug("Wrote %d record(s) to %s", len(self._content), self._path)

    def clear_all(self) -> None:
        with self._lock:
            try:
                self._path.unlink()
            except OSError as exc:
                raise StorageWriteError(f"Cannot remove {self._path}: {exc}") from exc
            self._content.clear()
            # After a clear the file is the empty truth, nothing left to seed.
            self._seeded = True
