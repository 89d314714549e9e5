#!/usr/bin/env python3
# dotshell/ui/ansi.py
from __future__ import annotations

import os
import re
import sys
from typing import Optional

# ---- Core SGR map -----------------------------------------------------------

ANSI = {
    # reset
    "reset": "\x1b[0m",

    # styles
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    # fg 8-color
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",

    # fg bright
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_vt_enabled_cache: Optional[bool] = None  # cached across calls


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    Report whether ANSI escapes should be emitted.

    POSIX terminals always qualify. On Windows only terminals that advertise
    VT support (Windows Terminal, ConEmu, ANSICON, xterm-like TERM) do.
    NO_COLOR disables colors everywhere.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.environ.get("NO_COLOR"):
        _vt_enabled_cache = False
    elif os.name != "nt":
        _vt_enabled_cache = True
    else:
        _vt_enabled_cache = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    return _vt_enabled_cache


def clear_screen() -> None:
    """Clear the terminal screen."""
    if os.name == "nt":
        os.system("cls")
        return
    sys.stdout.write("\x1b[2J\x1b[H")
    sys.stdout.flush()


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles/keys from ANSI (e.g., 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
