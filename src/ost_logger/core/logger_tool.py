"""Logging facade used by application code.

```python
tool = LoggerTool(configuration=LoggerToolConfiguration.DEBUG_CONFIG)
tool.error("upstream timeout", category="http-requests")
```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .logger_storage import LoggerStorage
from .models import DEFAULT_CATEGORY, Log, LogEntry, LogType


@dataclass(frozen=True, slots=True)
class LoggerToolConfiguration:
    """Feature switches fixed for the lifetime of a ``LoggerTool``."""

    # Post to the storage facade; otherwise messages are only printed.
    allow_logger_storage: bool
    # Kept for parity with hosts that present collected logs on demand.
    display_collected_logs: bool

    DEFAULT: ClassVar[LoggerToolConfiguration]
    DEBUG_CONFIG: ClassVar[LoggerToolConfiguration]


LoggerToolConfiguration.DEFAULT = LoggerToolConfiguration(
    allow_logger_storage=False,
    display_collected_logs=False,
)
LoggerToolConfiguration.DEBUG_CONFIG = LoggerToolConfiguration(
    allow_logger_storage=True,
    display_collected_logs=True,
)


class LoggerTool:
    def __init__(
        self,
        storage: LoggerStorage | None = None,
        configuration: LoggerToolConfiguration = LoggerToolConfiguration.DEFAULT,
    ) -> None:
        self._storage = storage if storage is not None else LoggerStorage.in_memory()
        self._configuration = configuration

    @property
    def configuration(self) -> LoggerToolConfiguration:
        return self._configuration

    def log(self, message: str) -> None:
        self.detailed_log(message, LogType.INFO, DEFAULT_CATEGORY)

    def detailed_log(self, message: str, type: LogType, category: str | None = None) -> None:
        self._publish(Log(message=message, type=type, category=category or DEFAULT_CATEGORY))

    def info(self, message: str, category: str | None = None) -> None:
        self.detailed_log(message, LogType.INFO, category)

    def debug(self, message: str, category: str | None = None) -> None:
        self.detailed_log(message, LogType.DEBUG, category)

    def warn(self, message: str, category: str | None = None) -> None:
        self.detailed_log(message, LogType.WARNING, category)

    def error(self, message: str, category: str | None = None) -> None:
        self.detailed_log(message, LogType.ERROR, category)

    def fault(self, message: str, category: str | None = None) -> None:
        self.detailed_log(message, LogType.FAULT, category)

    def clear(self) -> None:
        """Remove locally persisted records (native history is kept)."""
        self._storage.clear()

    def collected_logs(self) -> list[LogEntry]:
        return self._storage.get_all_logs()

    def _publish(self, detail: Log) -> None:
        if self._configuration.allow_logger_storage:
            self._storage.add_detail(detail)
        else:
            print(detail.message)
