# tests/iconhub/core/test_logging.py
from __future__ import annotations
import json
import logging

import pytest

from iconhub.config.service import ConfigService
from iconhub.core.logging import configureLogging, getLogContext, logContext, setLogContext, clearLogContext
from iconhub.core.logging.formatters import DevFormatter, JsonFormatter


def _record(msg: str = "hello %s", *args: object) -> logging.LogRecord:
    return logging.LogRecord("iconhub.test", logging.WARNING, __file__, 1, msg, args or ("world",), None)


@pytest.fixture
def restoreRootLogger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_logContext_restoresPreviousContext() -> None:
    clearLogContext()
    setLogContext(moduleId="virtual:iconhub")

    with logContext(source="remote"):
        assert getLogContext() == {"moduleId": "virtual:iconhub", "source": "remote"}

    assert getLogContext() == {"moduleId": "virtual:iconhub"}
    clearLogContext()
    assert getLogContext() is None


def test_devFormatter_appendsContext() -> None:
    with logContext(moduleId="virtual:iconhub", source="local"):
        line = DevFormatter().format(_record())

    assert line == "WARNING: [iconhub.test] hello world [virtual:iconhub/local]"


def test_jsonFormatter_emitsOneJsonObject() -> None:
    with logContext(source="remote"):
        line = JsonFormatter().format(_record())

    payload = json.loads(line)
    assert payload["level"] == "warning"
    assert payload["logger"] == "iconhub.test"
    assert payload["msg"] == "hello world"
    assert payload["ctx"] == {"source": "remote"}


def test_configureLogging_writesJsonFileWhenConfigured(tmp_path, restoreRootLogger) -> None:
    service = ConfigService.bootstrap(tmp_path, overrides={"logging": {"file": "logs/iconhub.log"}, "debug": {"devModeEnabled": False}})

    configureLogging(service)
    logging.getLogger("iconhub.test").info("written")
    for handler in restoreRootLogger.handlers:
        handler.flush()

    assert restoreRootLogger.level == logging.INFO
    lines = (tmp_path / "logs" / "iconhub.log").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["msg"] == "written"
