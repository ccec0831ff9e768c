"""Error taxonomy for log storage and retrieval."""

from __future__ import annotations


class OSTLoggerError(Exception):
    """Base class for all errors raised by this package."""


class StorageError(OSTLoggerError):
    """A storage backend could not complete an operation."""


class StorageReadError(StorageError):
    """Persisted state exists but cannot be read or decoded."""


class StorageWriteError(StorageError):
    """A record could not be persisted, or the medium could not be cleared."""


class NativeSubsystemUnavailable(OSTLoggerError):
    """The native log subsystem could not be queried for history."""
