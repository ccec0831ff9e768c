from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace

from ost_logger.core.config import StorageConfig, check_filename, resolve_storage_config
from ost_logger.core.errors import OSTLoggerError
from ost_logger.core.logger_storage import LoggerStorage, LoggingCapability
from ost_logger.core.models import DEFAULT_TIMESTAMP_FORMAT, LogEntry, LogType, format_timestamp


def _parse_type(s: str) -> LogType:
    name = s.strip().upper()
    if name == "WARN":
        name = "WARNING"
    try:
        return LogType(name)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            "Invalid type. Allowed: INFO, DEBUG, WARNING, ERROR, FAULT"
        ) from e


def _build_storage(args: argparse.Namespace, errors: list[OSTLoggerError]) -> LoggerStorage:
    # Separate processes share no native history; each run seeds from the record file.
    cfg = resolve_storage_config(StorageConfig(backend="file"))
    cfg = replace(
        cfg,
        backend="file",
        capability=LoggingCapability.LEGACY.value,
        seed_from_disk=True,
    )
    if args.file is not None:
        cfg = replace(cfg, filename=check_filename(args.file, source="--file"))
    return LoggerStorage.from_config(cfg, on_error=errors.append)


def _cmd_add(storage: LoggerStorage, args: argparse.Namespace) -> None:
    storage.add_log(LogEntry.create(args.message, level=args.type, category=args.category))


def _cmd_list(storage: LoggerStorage, args: argparse.Namespace) -> None:
    entries = storage.get_all_logs()
    for e in entries:
        print(f"{format_timestamp(e.timestamp, args.format)} [{e.category}] {e.message}")
    print(f"\nFound {len(entries)} log entries.")


def _cmd_clear(storage: LoggerStorage, args: argparse.Namespace) -> None:
    storage.clear()


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Collected log records (file-backed store).")
    p.add_argument("--file", default=None, help="Record file name inside the cache directory")
    sub = p.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Append one record")
    add.add_argument("message")
    add.add_argument("--type", type=_parse_type, default=LogType.INFO, help="Default: INFO")
    add.add_argument("--category", default=None, help="Default: debugging")
    add.set_defaults(func=_cmd_add)

    ls = sub.add_parser("list", help="Print every record")
    ls.add_argument("--format", default=DEFAULT_TIMESTAMP_FORMAT, help="strftime format for dates")
    ls.set_defaults(func=_cmd_list)

    clear = sub.add_parser("clear", help="Delete the record file")
    clear.set_defaults(func=_cmd_clear)

    args = p.parse_args(argv)
    errors: list[OSTLoggerError] = []

    try:
        storage = _build_storage(args, errors)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    with storage:
        args.func(storage, args)

    if errors:
        for err in errors:
            print(f"Error: {err}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
