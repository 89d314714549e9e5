#!/usr/bin/env python3
# dotshell/commands/__init__.py
from __future__ import annotations

"""
Package for dot-command management and registration.

Provides:
- Data structures and protocols (`Command`, `CommandResult`, `CommandCallback`).
- In-memory registry and decorators (`REGISTRY`, `command`, `register_command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


from .command_types import Command, CommandResult, CommandCallback
from .commands import DEFAULT_CATEGORY, CommandRegistry, REGISTRY, command, register_command

__all__ = [
    "Command",
    "CommandResult",
    "CommandCallback",
    "CommandRegistry",
    "DEFAULT_CATEGORY",
    "REGISTRY",
    "command",
    "register_command",
]
