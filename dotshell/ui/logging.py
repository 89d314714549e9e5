#!/usr/bin/env python3
# dotshell/ui/logging.py
from __future__ import annotations

"""
Logging setup for the shell.

Console records go to stderr, colored by level and serialized with the rest
of the UI output through PRINT_MUTEX so they never split a result table.
An optional log file receives every record at DEBUG, without colors.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from .ansi import ANSI, enable_windows_vt, strip_ansi
from .console import PRINT_MUTEX

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 2


class ColorizingStreamHandler(logging.StreamHandler):
    """Stream handler coloring whole lines by level (when ANSI is enabled)."""

    LEVEL_STYLES = {
        logging.DEBUG: "bright_black",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "magenta",
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream if stream is not None else sys.stderr)
        self.use_color = enable_windows_vt()

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.use_color:
            return strip_ansi(text)
        style = self.LEVEL_STYLES.get(record.levelno)
        return f"{ANSI[style]}{text}{ANSI['reset']}" if style else text

    def emit(self, record: logging.LogRecord) -> None:
        with PRINT_MUTEX:
            super().emit(record)


class PlainFormatter(logging.Formatter):
    """Formatter for files: no escape sequences in the output."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return resolved


def init_logger(
    name: str = "dotshell",
    level: int | str = logging.WARNING,
    logfile: str | None = None,
) -> logging.Logger:
    """
    Configure and return the `name` logger. Calling it again reuses the
    handlers that are already attached.
    """
    console_level = _level(level)
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if logfile else console_level)

    console = next((h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if console is None:
        console = ColorizingStreamHandler()
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)
    console.setLevel(console_level)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(PlainFormatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def reset_logger(name: str = "dotshell") -> None:
    """Detach and close the handlers init_logger attached; records propagate again."""
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
