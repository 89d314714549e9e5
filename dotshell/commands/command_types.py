#!/usr/bin/env python3
# dotshell/commands/command_types.py
from __future__ import annotations

"""
Dot-command value types.

- CommandCallback: what a command implementation looks like.
- CommandResult: outcome of a command; either text or a result set that the
  shell renders in the session's output mode, like a query.
- Command: one registered dot-command.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from dotshell.completion.dispatcher import CompletionSpec


class CommandCallback(Protocol):
    def __call__(self, *args: Any, **kwargs: Any) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    ok:      False turns the result into an '[error] ...' line.
    message: text to print; empty prints nothing.
    columns/rows: optional result set, rendered with the current output mode.
    """
    ok: bool = True
    message: str = ""
    columns: Sequence[str] = ()
    rows: Sequence[Sequence[Any]] = ()

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(ok=False, message=message)

    @classmethod
    def result_set(cls, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> "CommandResult":
        return cls(columns=tuple(columns), rows=[tuple(row) for row in rows])

    @property
    def has_rows(self) -> bool:
        return bool(self.columns)

    def __str__(self) -> str:
        return self.message or ("" if self.ok else "command failed")


@dataclass(slots=True)
class Command:
    """
    A dot-command as stored in the registry.

    `name` and `aliases` are stored lowercase with their leading dot.
    `completion` declares how arguments are tab-completed; None disables it.
    `module` is filled in by the decorator and drives category assignment.
    """

    name: str
    description: str
    example: str
    callback: CommandCallback
    module: str = field(default="", repr=False)
    category: str = "general"
    completion: CompletionSpec | None = None
    aliases: list[str] = field(default_factory=list)
    param_names: list[str] = field(default_factory=list)

    @property
    def all_names(self) -> list[str]:
        """Primary name followed by the aliases."""
        return [self.name, *self.aliases]

    def invoke(self, *args: Any, **kwargs: Any) -> Any:
        return self.callback(*args, **kwargs)
