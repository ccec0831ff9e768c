"""Storage facade: routes records to the native subsystem or a backend.

On capability-rich hosts the native subsystem already keeps history, so
records are only written there and read back from there. Elsewhere records
are also appended to the local backend, which then serves reads.

``clear()`` always targets the backend. The native subsystem offers no
deletion, so its history survives a clear.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from enum import Enum

from .config import StorageConfig
from .errors import NativeSubsystemUnavailable, OSTLoggerError, StorageError
from .models import Log, LogEntry
from .native import (
    SUBSYSTEM,
    NativeLogEntry,
    NativeLogSubsystem,
    StdlibLogSubsystem,
    legacy_write,
    modern_write,
    native_color,
    native_log_type,
)
from .storage import FileBackend, InMemoryBackend, StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK = timedelta(hours=24)

ErrorCallback = Callable[[OSTLoggerError], None]


class LoggingCapability(str, Enum):
    """Whether the host exposes a queryable native log subsystem."""

    NATIVE = "native"
    LEGACY = "legacy"

    @classmethod
    def detect(cls, subsystem: NativeLogSubsystem | None) -> LoggingCapability:
        return cls.NATIVE if subsystem is not None else cls.LEGACY


class LoggerStorage:
    """Single entry point for adding, reading and clearing collected logs.

    Errors from the backend or the native subsystem never reach the caller:
    they are logged, passed to ``on_error`` and degraded to an empty result.
    """

    def __init__(
        self,
        backend: StorageBackend,
        *,
        capability: LoggingCapability = LoggingCapability.LEGACY,
        subsystem: NativeLogSubsystem | None = None,
        subsystem_tag: str = SUBSYSTEM,
        lookback: timedelta = DEFAULT_LOOKBACK,
        on_error: ErrorCallback | None = None,
        clock: Callable[[], datetime] | None = None,
        owns_subsystem: bool = False,
    ) -> None:
        if capability is LoggingCapability.NATIVE and subsystem is None:
            raise ValueError("native capability requires a subsystem")
        if lookback <= timedelta(0):
            raise ValueError("lookback must be positive")
        self._backend = backend
        self._capability = capability
        self._subsystem = subsystem
        self._subsystem_tag = subsystem_tag
        self._lookback = lookback
        self._on_error = on_error
        self._clock = clock or (lambda: datetime.now(UTC))
        # Subsystems created by the constructors below are closed by close().
        self._owns_subsystem = owns_subsystem and subsystem is not None

    @classmethod
    def in_memory(cls, **kwargs) -> LoggerStorage:
        """Build an in-memory facade; legacy ones also write to `logging`."""
        capability = kwargs.get("capability", LoggingCapability.LEGACY)
        if kwargs.get("subsystem") is None and capability is LoggingCapability.LEGACY:
            tag = kwargs.get("subsystem_tag", SUBSYSTEM)
            kwargs["subsystem"] = StdlibLogSubsystem(tag, capture=False)
            kwargs["owns_subsystem"] = True
        return cls(InMemoryBackend(), **kwargs)

    @classmethod
    def from_config(
        cls,
        cfg: StorageConfig,
        *,
        subsystem: NativeLogSubsystem | None = None,
        on_error: ErrorCallback | None = None,
    ) -> LoggerStorage:
        """Build a facade for a composition root."""
        if cfg.backend == "file":
            backend: StorageBackend = FileBackend.in_cache_dir(
                cfg.filename,
                cache_dir=cfg.cache_dir,
                seed_from_disk=cfg.seed_from_disk,
            )
        else:
            backend = InMemoryBackend()

        if cfg.capability is None:
            capability = LoggingCapability.detect(subsystem)
        else:
            capability = LoggingCapability(cfg.capability)
        owns_subsystem = subsystem is None
        if subsystem is None:
            # Legacy hosts still post to logging but never query it.
            subsystem = StdlibLogSubsystem(
                cfg.subsystem_tag,
                capture=capability is LoggingCapability.NATIVE,
            )

        return cls(
            backend,
            capability=capability,
            subsystem=subsystem,
            subsystem_tag=cfg.subsystem_tag,
            lookback=timedelta(hours=cfg.lookback_hours),
            on_error=on_error,
            owns_subsystem=owns_subsystem,
        )

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def capability(self) -> LoggingCapability:
        return self._capability

    def add_log(self, entry: LogEntry) -> None:
        """Post a record to the native subsystem or, on legacy hosts, also the backend."""
        if self._capability is LoggingCapability.NATIVE:
            level, message = modern_write(entry.level, entry.message)
            self._subsystem.write(self._subsystem_tag, entry.category, level, message)
            return

        if self._subsystem is not None:
            level, message = legacy_write(entry.level, entry.message)
            self._subsystem.write(self._subsystem_tag, entry.category, level, message)

        try:
            self._backend.append(entry)
        except StorageError as exc:
            self._report("Store log entry", exc)

    def add_detail(self, detail: Log) -> None:
        self.add_log(LogEntry.from_log(detail, timestamp=self._clock()))

    def get_all_logs(self) -> list[LogEntry]:
        """Return collected records, oldest first. Never raises."""
        if self._capability is LoggingCapability.NATIVE:
            return self._logs_from_subsystem()
        return self._logs_from_backend()

    def clear(self) -> None:
        """Remove every record held by the backend. Never raises."""
        try:
            self._backend.clear_all()
        except StorageError as exc:
            self._report("Remove log data", exc)

    def close(self) -> None:
        """Release a subsystem this facade created. Backends need no release."""
        if not self._owns_subsystem:
            return
        close = getattr(self._subsystem, "close", None)
        if close is not None:
            close()
        self._owns_subsystem = False

    def __enter__(self) -> LoggerStorage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _logs_from_subsystem(self) -> list[LogEntry]:
        since = self._clock() - self._lookback
        try:
            entries = self._subsystem.entries(self._subsystem_tag, since)
        except Exception as exc:
            if not isinstance(exc, NativeSubsystemUnavailable):
                wrapped = NativeSubsystemUnavailable(f"Native log store query failed: {exc}")
                wrapped.__cause__ = exc
                exc = wrapped
            self._report("Query native log store", exc)
            return []

        return [
            _entry_from_native(e)
            for e in entries
            if e.subsystem.startswith(self._subsystem_tag)
        ]

    def _logs_from_backend(self) -> list[LogEntry]:
        try:
            entries = self._backend.load()
        except StorageError as exc:
            self._report("Load logs data", exc)
            return []
        if entries is None:
            return []
        return list(entries)

    def _report(self, action: str, exc: OSTLoggerError) -> None:
        logger.warning("%s failed: %s", action, exc)
        if self._on_error is not None:
            self._on_error(exc)


def _entry_from_native(e: NativeLogEntry) -> LogEntry:
    return LogEntry(
        timestamp=e.timestamp,
        category=e.category,
        message=e.composed_message,
        level=native_log_type(e.level),
        color=native_color(e.level),
    )
