#!/usr/bin/env python3
# dotshell/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, strip_ansi, enable_windows_vt, clear_screen, colorize
from .console import PRINT_MUTEX, print_line
from .table import format_table, cell_text
from .logging import init_logger, reset_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "clear_screen",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "cell_text",
    "init_logger",
    "reset_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
