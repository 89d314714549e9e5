#!/usr/bin/env python3
# dotshell/boot/boot.py
from __future__ import annotations

"""
Boot sequence for dotshell.

Each step prints a Linux-style [  OK  ] / [FAILED] status line; a failing
step re-raises after reporting.
"""

import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from dotshell.commands import REGISTRY
from dotshell.completion import Completer
from dotshell.db import AppConfig, Session, open_session, validate_or_default_config
from dotshell.interface import load_commands
from dotshell.ui import colorize, enable_windows_vt, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    session: Session
    completer: Completer
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(
    *,
    database_path: str | None = None,
    base_dir: Path | None = None,
    quiet: bool = False,
) -> BootState:
    """Load config, start logging, open the database and register commands."""
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    # ---------- config ----------
    config = _step("Load configuration",
                   lambda: validate_or_default_config(base_dir), quiet=quiet)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "dotshell",
            level=config.log_level,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        quiet=quiet,
    )

    # ---------- database ----------
    target = database_path or config.database_path
    session = _step(
        f"Open database {target}",
        lambda: open_session(target, mode=config.output_mode,
                             headers=config.show_headers),
        quiet=quiet,
    )

    # ---------- commands ----------
    loaded_count = _step(
        f"Load commands from '{config.plugin_package}'",
        lambda: load_commands(config.plugin_package),
        quiet=quiet,
    )
    completer = Completer(REGISTRY)
    _step("Warm command names for completion",
          completer.command_names, quiet=quiet)
    _step("Boot complete", lambda: None, quiet=quiet)

    logger.debug("Boot finished: %d module(s), %d command(s)",
                 loaded_count, len(REGISTRY.all()))
    return BootState(
        config=config,
        logger=logger,
        session=session,
        completer=completer,
        loaded_count=loaded_count,
    )
