#!/usr/bin/env python3
# dotshell/interface/handler.py
from __future__ import annotations

"""
Line dispatch and help formatting.

A line is either:
  - a built-in (.help, .exit/.quit, .clear),
  - a registered dot-command, bound to its callback's signature,
  - or SQL, executed in the current session and rendered in its output mode.

Failures never escape into the REPL: they come back as '[error] ...' text.
"""

import difflib
import logging
import sqlite3

from dotshell.commands import REGISTRY, CommandRegistry, CommandResult
from dotshell.completion import BUILT_IN_COMMANDS
from dotshell.db import get_session, run_sql
from dotshell.ui import clear_screen, format_table

from .output import render_rows
from .parser import bind_args, build_usage, tokenize

logger = logging.getLogger("dotshell.interface")

# Short hint shown at startup and used in unknown command errors
HELP_TEXT = "Type '.help <command>' for more information on a specific command."

_EXIT_COMMANDS = {".exit", ".quit"}
_CLEAR_COMMANDS = {".clear"}

# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------


def _suggest_similar_names(name: str, registry: CommandRegistry) -> str:
    universe = [*registry.names(), *BUILT_IN_COMMANDS]
    matches = difflib.get_close_matches(name.lower(), universe, n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(matches)}?" if matches else ""


def list_categories(registry: CommandRegistry | None = None) -> str:
    """Overview for a bare '.help': one row per category."""
    registry = registry or REGISTRY
    categories = registry.categories()
    if not categories:
        return "No commands loaded."

    rows = [
        [category, ", ".join(sorted(c.name for c in members)), registry.get_category_description(category)]
        for category, members in sorted(categories.items())
    ]
    rows.append(["(built-in)", ", ".join(BUILT_IN_COMMANDS), "Help, screen and exit."])
    return format_table(rows, headers=["Category", "Commands", "Description"])


def _format_category_help(category: str, registry: CommandRegistry) -> str:
    members = sorted(registry.categories().get(category, []), key=lambda c: c.name)
    description = registry.get_category_description(category)
    labels = [", ".join(c.all_names) for c in members]
    width = max(len(label) for label in labels)
    lines = [f"{category}: {description}" if description else category]
    lines += [f"  {label.ljust(width)}  {c.description}" for label, c in zip(labels, members)]
    return "\n".join(lines)


def format_command_help(name: str, registry: CommandRegistry | None = None) -> str:
    """Help for one command, or for a category when `name` is a bare category word."""
    registry = registry or REGISTRY
    # '.schema' is the command, 'schema' the category.
    if not name.startswith(".") and name in registry.categories():
        return _format_category_help(name, registry)
    command_obj = registry.get(name)
    if command_obj is None:
        return f"No such command or category: {name}"

    lines = [f"Usage: {build_usage(command_obj.name, command_obj.callback)}"]
    if command_obj.description:
        lines.append(f"  {command_obj.description}")
    if command_obj.aliases:
        lines.append(f"  Aliases:  {', '.join(command_obj.aliases)}")
    if command_obj.example:
        lines.append(f"  Example:  {command_obj.example}")
    lines.append(f"  Category: {command_obj.category}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


def _run_dot_command(line: str, registry: CommandRegistry) -> str | None:
    try:
        tokens = tokenize(line)
    except ValueError as exc:
        return f"[error] {exc}"

    command_name, *arg_tokens = tokens
    command_obj = registry.get(command_name)
    if not command_obj:
        return (f"[error] Unknown command: {command_name}."
                f"{_suggest_similar_names(command_name, registry)} {HELP_TEXT}")

    try:
        positional_args, keyword_args = bind_args(
            command_obj.callback, arg_tokens)
    except TypeError as exc:
        usage = build_usage(command_obj.name, command_obj.callback)
        return f"[error] {exc}\nUsage: {usage}"

    try:
        result = command_obj.invoke(*positional_args, **keyword_args)
    except SystemExit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.debug("Command %s failed", command_obj.name, exc_info=True)
        return f"[error] {type(exc).__name__}: {exc}"

    if isinstance(result, CommandResult):
        if not result.ok:
            return f"[error] {result}"
        if result.has_rows:
            session = get_session()
            return render_rows(result.columns, result.rows, session.mode, session.headers)
        return result.message or None
    return None if result is None else str(result)


def _run_sql(line: str) -> str | None:
    session = get_session()
    try:
        columns, rows = run_sql(session.connection, line)
    except sqlite3.Error as exc:
        return f"[error] {exc}"
    return render_rows(columns, rows, session.mode, session.headers)


def handle_line(input_line: str, registry: CommandRegistry | None = None) -> str | None:
    """
    Parse and execute one input line.

    Returns:
        - None if nothing should be printed.
        - A printable string otherwise.

    Raises:
        SystemExit for '.exit' / '.quit'.
    """
    registry = registry or REGISTRY
    line = input_line.strip()
    if not line:
        return None

    if not line.startswith("."):
        return _run_sql(line)

    lowered = line.lower()
    if lowered in _EXIT_COMMANDS:
        raise SystemExit()

    if lowered in _CLEAR_COMMANDS:
        clear_screen()
        return None

    head, *rest = line.split(maxsplit=1)
    if head.lower() == ".help":
        return format_command_help(rest[0].strip(), registry) if rest else list_categories(registry)

    return _run_dot_command(line, registry)
