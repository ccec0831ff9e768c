"""MCP server entrypoint (stdio transport).

Exposes the storage facade to MCP clients:
- Tools: add_log, get_logs, clear_logs
- Resources: logs://all (every collected record as JSON)

Run locally (stdio):
    python -m ost_logger.server.log_server
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from mcp.server.fastmcp import FastMCP

from ost_logger.core.config import resolve_storage_config
from ost_logger.core.errors import OSTLoggerError
from ost_logger.core.logger_storage import LoggerStorage, LoggingCapability
from ost_logger.tools.logs import add_log_impl, clear_logs_impl, entry_to_dict, get_logs_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("OST_LOGGER_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _on_storage_error(exc: OSTLoggerError) -> None:
    LOGGER.debug("Storage diagnostic: %r", exc)


def build_storage() -> LoggerStorage:
    """Create the facade from env configuration."""
    cfg = resolve_storage_config()
    if cfg.capability is None:
        # A long-lived server process can query its own logging history.
        cfg = replace(cfg, capability=LoggingCapability.NATIVE.value)
    return LoggerStorage.from_config(cfg, on_error=_on_storage_error)


def build_server(storage: LoggerStorage) -> FastMCP:
    """Register tools and resources bound to ``storage``."""
    mcp = FastMCP("ost-logger", json_response=True)

    @mcp.tool()
    def add_log(message: str, level: str = "info", category: str | None = None) -> dict[str, Any]:
        """Post one log message.

        Parameters
        ----------
        message:
            Text reported to the log.
        level:
            One of info, debug, warning, error, fault. Case-insensitive.
        category:
            Component or module name (e.g., "http-requests"). Defaults to "debugging".
        """
        return add_log_impl(storage, message=message, level=level, category=category)

    @mcp.tool()
    def get_logs(
        levels: Sequence[str] | None = None,
        category: str | None = None,
        limit: int | None = None,
        timestamp_format: str | None = None,
    ) -> dict[str, Any]:
        """Return collected log records, oldest first.

        On hosts with a native log store, history covers the configured
        look-back window (24 hours by default).

        Returns
        -------
        dict:
            {"count": int, "capability": str, "entries": list[dict]}
        """
        return get_logs_impl(
            storage,
            levels=levels,
            category=category,
            limit=limit,
            timestamp_format=timestamp_format,
        )

    @mcp.tool()
    def clear_logs() -> dict[str, Any]:
        """Remove locally stored records. Native history is not deleted."""
        return clear_logs_impl(storage)

    @mcp.resource("logs://all")
    def all_logs() -> str:
        """Return every collected record as a JSON array."""
        return json.dumps([entry_to_dict(e) for e in storage.get_all_logs()], indent=2)

    return mcp


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    _ = argv or sys.argv[1:]
    storage = build_storage()
    if storage.capability is LoggingCapability.LEGACY:
        LOGGER.info("Native log history disabled; serving records from local storage")
    LOGGER.debug("Starting MCP server (transport=stdio)")
    with storage:
        build_server(storage).run(transport="stdio")


if __name__ == "__main__":
    main()
