# iconhub/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path
from typing import TYPE_CHECKING

from .formatters import DevFormatter, JsonFormatter

if TYPE_CHECKING:
    from iconhub.config.service import ConfigService

__all__ = [
    "NO_PROPAGATE",
    "configureLogging",
]



# Disable propagation from chatty libraries
NO_PROPAGATE = [
    "uvicorn", "uvicorn.access", "uvicorn.error",
    "fastapi", "asyncio",
    "httpcore.connection", "httpcore.http11",
]



def configureLogging(service: ConfigService | None = None) -> None:
    """
    Initiate the global logging configuration.

    Dev (debug.devModeEnabled, default on):
      - Console pretty logs (DEBUG)
      - JSON file log (DEBUG) when logging.file is set

    Prod:
      - Console INFO
      - JSON file log INFO with rotation when logging.file is set
    """
    devMode = service.getBool("debug.devModeEnabled", True) if service is not None else True
    logFile = service.get("logging.file") if service is not None else None
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)

    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = False

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    root.addHandler(consoleHandler)

    if logFile:
        logPath = Path(str(logFile))
        if not logPath.is_absolute() and service is not None:
            logPath = service.root / logPath
        logPath.parent.mkdir(parents=True, exist_ok=True)
        fileHandler = logging.handlers.RotatingFileHandler(
            logPath,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)

    # Per-logger tweaks (reduce noise)
    logging.getLogger("httpx").setLevel(logging.WARNING)
