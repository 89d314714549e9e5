#!/usr/bin/env python3
# dotshell/commands/commands.py
from __future__ import annotations

"""
Dot-command registry.

Names and aliases share one lowercase namespace that always carries the
leading dot, so '.DESC', 'desc' and '.desc' find the same command. Plugins
register through the @command decorator; the loader and tests can also hand
pre-built Command objects to register_command().
"""

import inspect
from typing import TYPE_CHECKING, Any, Callable, Iterator

from .command_types import Command

if TYPE_CHECKING:
    from dotshell.completion.dispatcher import CompletionSpec

DEFAULT_CATEGORY = "general"


def _normalize_name(name: str) -> str:
    key = name.strip().lower()
    return key if key.startswith(".") else f".{key}"


class CommandRegistry:
    """Dot-commands by name and alias, plus category descriptions."""

    def __init__(self) -> None:
        self._primary: dict[str, Command] = {}
        # every name and alias -> owning command
        self._index: dict[str, Command] = {}
        self._category_text: dict[str, str] = {}

    def __iter__(self) -> Iterator[Command]:
        return iter(self._primary.values())

    # ---------- registration ----------

    def register(self, command_obj: Command) -> None:
        """
        Add a command under its name and aliases.

        Registering the very same object again is a no-op (plugins get
        re-imported); any other clash raises ValueError and leaves the
        registry untouched.
        """
        keys = [_normalize_name(n) for n in command_obj.all_names]
        if self._index.get(keys[0]) is command_obj:
            return
        if len(set(keys)) != len(keys):
            raise ValueError(f"'{command_obj.name}' lists the same name twice.")
        taken = [key for key in keys if key in self._index]
        if taken:
            raise ValueError(f"Cannot register '{command_obj.name}': {', '.join(taken)} already in use.")

        self._primary[keys[0]] = command_obj
        for key in keys:
            self._index[key] = command_obj

    def clear(self) -> None:
        self._primary.clear()
        self._index.clear()
        self._category_text.clear()

    # ---------- lookup ----------

    def get(self, name: str) -> Command | None:
        return self._index.get(_normalize_name(name))

    def all(self) -> list[Command]:
        """Each command once, in registration order."""
        return list(self._primary.values())

    def names(self) -> list[str]:
        """Every name and alias (what the command-name completer offers)."""
        return list(self._index)

    def completion_specs(self) -> dict[str, CompletionSpec]:
        """Name/alias -> completion declaration, for commands that have one."""
        return {key: cmd.completion for key, cmd in self._index.items() if cmd.completion is not None}

    # ---------- categories ----------

    def categories(self) -> dict[str, list[Command]]:
        grouped: dict[str, list[Command]] = {}
        for command_obj in self._primary.values():
            grouped.setdefault(command_obj.category, []).append(command_obj)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        self._category_text[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        return self._category_text.get(category, "")


REGISTRY = CommandRegistry()


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
    completion: CompletionSpec | None = None,
    aliases: list[str] | None = None,
    registry: CommandRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Register the decorated function as a dot-command.

    The name defaults to the function name with underscores as dashes
    (`show_flags` -> `.show-flags`) and the description to its docstring.
    Commands land in the global REGISTRY unless `registry` is given.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        command_obj = Command(
            name=_normalize_name(name or func.__name__.replace("_", "-")),
            description=(description or inspect.getdoc(func) or "").strip(),
            example=example or "",
            callback=func,
            module=func.__module__,
            category=category or DEFAULT_CATEGORY,
            completion=completion,
            aliases=[_normalize_name(alias) for alias in aliases or ()],
            param_names=list(inspect.signature(func).parameters),
        )
        (registry if registry is not None else REGISTRY).register(command_obj)
        return func

    return wrapper


def register_command(command_obj: Command, registry: CommandRegistry | None = None) -> None:
    (registry if registry is not None else REGISTRY).register(command_obj)
