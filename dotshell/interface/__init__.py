#!/usr/bin/env python3
# dotshell/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console interface and line dispatch.

Provides:
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
- Parser utilities for binding arguments to command functions.
- Line handler, result rendering and help formatting.
- Dynamic command loader for the plugins package.
"""


from .parser import tokenize, bind_args, build_usage
from .output import render_rows
from .handler import handle_line, HELP_TEXT, list_categories, format_command_help
from .loader import load_commands
from .cli import (
    BaseCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    make_cli,
    make_prompt_completer,
    safe_complete,
    DEFAULT_HISTORY_FILE_PATH,
    DEFAULT_PROMPT,
)

__all__ = [
    # parser
    "tokenize",
    "bind_args",
    "build_usage",
    # output
    "render_rows",
    # handler
    "handle_line",
    "HELP_TEXT",
    "list_categories",
    "format_command_help",
    # loader
    "load_commands",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "make_prompt_completer",
    "safe_complete",
    "DEFAULT_HISTORY_FILE_PATH",
    "DEFAULT_PROMPT",
]
