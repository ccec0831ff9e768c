from __future__ import annotations

import pytest

from ost_logger.core.logger_storage import LoggerStorage
from ost_logger.core.logger_tool import LoggerTool, LoggerToolConfiguration
from ost_logger.core.models import DEFAULT_CATEGORY, LogType


@pytest.fixture
def storage() -> LoggerStorage:
    return LoggerStorage.in_memory()


def test_presets() -> None:
    assert LoggerToolConfiguration.DEFAULT == LoggerToolConfiguration(False, False)
    assert LoggerToolConfiguration.DEBUG_CONFIG == LoggerToolConfiguration(True, True)


def test_default_configuration_only_prints(storage: LoggerStorage, capsys) -> None:
    tool = LoggerTool(storage)

    tool.error("printed only", category="net")

    assert capsys.readouterr().out == "printed only\n"
    assert storage.get_all_logs() == []


def test_debug_configuration_stores_each_level(storage: LoggerStorage) -> None:
    tool = LoggerTool(storage, LoggerToolConfiguration.DEBUG_CONFIG)

    tool.log("plain")
    tool.info("i", category="ui")
    tool.debug("d")
    tool.warn("w")
    tool.error("e")
    tool.fault("f")

    logs = tool.collected_logs()
    assert [e.level for e in logs] == [
        LogType.INFO,
        LogType.INFO,
        LogType.DEBUG,
        LogType.WARNING,
        LogType.ERROR,
        LogType.FAULT,
    ]
    assert [e.category for e in logs][:3] == [DEFAULT_CATEGORY, "ui", DEFAULT_CATEGORY]


def test_empty_category_falls_back(storage: LoggerStorage) -> None:
    tool = LoggerTool(storage, LoggerToolConfiguration.DEBUG_CONFIG)
    tool.detailed_log("m", LogType.INFO, "")

    assert storage.get_all_logs()[0].category == DEFAULT_CATEGORY


def test_clear_removes_stored_records(storage: LoggerStorage) -> None:
    tool = LoggerTool(storage, LoggerToolConfiguration.DEBUG_CONFIG)
    tool.info("m")
    tool.clear()

    assert tool.collected_logs() == []


def test_tools_do_not_share_storage_by_default() -> None:
    a = LoggerTool(configuration=LoggerToolConfiguration.DEBUG_CONFIG)
    b = LoggerTool(configuration=LoggerToolConfiguration.DEBUG_CONFIG)
    a.info("only in a")

    assert len(a.collected_logs()) == 1
    assert b.collected_logs() == []
