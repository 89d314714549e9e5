#!/usr/bin/env python3
# dotshell/completion/engine.py
from __future__ import annotations

"""
Completion entry point used by the line-editing frontends.

Input is the whole line buffer plus the cursor offset; output is an ordered
list of distinct candidates for the fragment just before the cursor. The
command name itself is completed here; argument positions are delegated to
the shape dispatcher using the specs declared by registered commands.
"""

import logging

from dotshell.commands import REGISTRY, CommandRegistry

from .dispatcher import CompletionDispatcher, CompletionSpec
from .sources import ListSource, filter_prefix
from .tokenizer import tokenize, tokens_before_cursor
from .tokens import Delimiter, Text

logger = logging.getLogger("dotshell.completion")

# Built-in verbs handled directly by the line handler
BUILT_IN_COMMANDS: tuple[str, ...] = (".help", ".exit", ".quit", ".clear")


class Completer:
    """Completes dot-command lines against a command registry."""

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        self._registry = registry if registry is not None else REGISTRY

    def command_names(self) -> list[str]:
        """Built-ins plus every registered name and alias, sorted."""
        return sorted({*BUILT_IN_COMMANDS, *self._registry.names()})

    def _help_topics(self) -> list[str]:
        """Targets accepted by '.help <topic>': categories, then commands."""
        categories = sorted(self._registry.categories())
        return [*categories, *self.command_names()]

    def dispatcher(self) -> CompletionDispatcher:
        """Build a dispatcher over the registry's current specs."""
        specs: dict[str, CompletionSpec] = {
            ".help": CompletionSpec(arguments=ListSource(self._help_topics)),
        }
        specs.update(self._registry.completion_specs())
        return CompletionDispatcher(specs)

    def complete(self, line: str, cursor: int) -> list[str]:
        """Return the candidates for `line` with the cursor at offset `cursor`."""
        tokens = tokenize(line, cursor)
        prefix = tokens_before_cursor(tokens)
        if prefix and isinstance(prefix[0], Delimiter):
            prefix = prefix[1:]

        # Command name still being typed: [Text(partial), Cursor]
        if len(prefix) == 1 and isinstance(prefix[0], Text):
            partial = prefix[0].value
            if not partial.startswith("."):
                return []
            return filter_prefix(self.command_names(), partial.lower())

        candidates = self.dispatcher().dispatch(tokens)
        logger.debug("complete(%r, %d) -> %r", line, cursor, candidates)
        return candidates


def complete(line: str, cursor: int, registry: CommandRegistry | None = None) -> list[str]:
    """Convenience wrapper around Completer(registry).complete()."""
    return Completer(registry).complete(line, cursor)
