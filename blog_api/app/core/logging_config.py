"""
Logging configuration for the Blog API.

``setup_logging`` attaches one console handler (and optionally one
file handler) to the root logger and hands uvicorn's own loggers over
to it, so request logs from ``BlogServer`` share the application's
format.  An unknown level name is a configuration error.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "blog_api.console"
FILE_HANDLER_NAME = "blog_api.file"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def parse_level(level: str) -> int:
    """Return the numeric level for ``level``.  Raises ``ValueError`` if unknown."""
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric_level


def route_uvicorn_logs() -> None:
    """Drop uvicorn's handlers and let its records reach the root logger."""
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the application.

    Safe to call repeatedly: the level is always re-applied, but the
    console and file handlers are only added once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    """
    numeric_level = parse_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    route_uvicorn_logs()

    installed = {handler.get_name() for handler in root.handlers}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if CONSOLE_HANDLER_NAME not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and FILE_HANDLER_NAME not in installed:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
