#!/usr/bin/env python3
# dotshell/completion/dispatcher.py
from __future__ import annotations

"""
Completion dispatcher.

Maps the shape of the tokens before the cursor to a candidate-producing rule.
Rules are evaluated in order and the first one that recognizes the shape wins:

  1) nothing typed                      -> no completions
  2) <cmd> ·                            -> every first-argument choice
  3) <cmd> <terminal>·                  -> no completions (position closed)
  4) <cmd> <arg> ·                      -> the command's modifier keyword
  5) <cmd> <arg> <partial>·             -> the modifier, if it starts with partial
  6) <cmd> <partial>·                   -> first-argument choices matching partial
  7) anything else                      -> no completions

('·' is the cursor; a space stands for a Delimiter token.)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Sequence

from .sources import ListSource
from .tokenizer import tokens_before_cursor
from .tokens import Delimiter, Token, text_value

logger = logging.getLogger("dotshell.completion")


@dataclass(frozen=True, slots=True)
class CompletionSpec:
    """
    Per-command completion declaration.

    arguments: choices for the first argument position.
    terminals: first-argument keywords that take no further arguments
               (matched case-insensitively, like the commands read them).
    modifier:  single keyword accepted in the second argument position.
    """
    arguments: ListSource
    terminals: frozenset[str] = field(default_factory=frozenset)
    modifier: str | None = None

    def is_terminal(self, argument: str) -> bool:
        folded = argument.lower()
        return any(folded == word.lower() for word in self.terminals)


# A rule returns None when the shape does not match, else the candidates.
Rule = Callable[[Sequence[Token], "CompletionDispatcher"], Optional[list[str]]]


def _is_delim(token: Token) -> bool:
    return isinstance(token, Delimiter)


# ---------------------------------------------------------------------------
# Shape rules
# ---------------------------------------------------------------------------


def _rule_blank(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if not prefix:
        return []
    return None


def _rule_first_argument_open(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if len(prefix) != 2 or not _is_delim(prefix[1]):
        return None
    spec = dispatcher.spec_for(prefix[0])
    if spec is None:
        return None
    return dispatcher.query(spec.arguments, "")


def _rule_terminal_keyword(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if len(prefix) != 3 or not _is_delim(prefix[1]):
        return None
    spec = dispatcher.spec_for(prefix[0])
    argument = text_value(prefix[2])
    if spec is None or argument is None or not spec.is_terminal(argument):
        return None
    return []


def _rule_modifier_open(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if len(prefix) != 4 or not (_is_delim(prefix[1]) and _is_delim(prefix[3])):
        return None
    spec = dispatcher.spec_for(prefix[0])
    argument = text_value(prefix[2])
    if spec is None or argument is None:
        return None
    if spec.modifier is None or spec.is_terminal(argument):
        return []
    return [spec.modifier]


def _rule_modifier_partial(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if len(prefix) != 5 or not (_is_delim(prefix[1]) and _is_delim(prefix[3])):
        return None
    spec = dispatcher.spec_for(prefix[0])
    argument = text_value(prefix[2])
    partial = text_value(prefix[4])
    if spec is None or argument is None or partial is None:
        return None
    if spec.modifier is None or spec.is_terminal(argument):
        return []
    return [spec.modifier] if spec.modifier.startswith(partial) else []


def _rule_first_argument_partial(prefix: Sequence[Token], dispatcher: "CompletionDispatcher") -> Optional[list[str]]:
    if len(prefix) != 3 or not _is_delim(prefix[1]):
        return None
    spec = dispatcher.spec_for(prefix[0])
    partial = text_value(prefix[2])
    if spec is None or partial is None:
        return None
    return dispatcher.query(spec.arguments, partial)


RULES: tuple[Rule, ...] = (
    _rule_blank,
    _rule_first_argument_open,
    _rule_terminal_keyword,
    _rule_modifier_open,
    _rule_modifier_partial,
    _rule_first_argument_partial,
)


class CompletionDispatcher:
    """Selects and runs the candidate rule matching a token sequence."""

    def __init__(self, specs: Mapping[str, CompletionSpec], rules: Sequence[Rule] = RULES) -> None:
        self._specs = {name.lower(): spec for name, spec in specs.items()}
        self._rules = tuple(rules)

    def spec_for(self, token: Token) -> CompletionSpec | None:
        """Return the spec of a command token, or None for unknown commands."""
        name = text_value(token)
        if name is None:
            return None
        return self._specs.get(name.lower())

    def query(self, source: ListSource, prefix: str) -> list[str]:
        """Ask a source for candidates; a failing source yields no completions."""
        try:
            return source.complete(prefix)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Candidate source %r failed: %s: %s",
                           source, type(exc).__name__, exc)
            return []

    def dispatch(self, tokens: Sequence[Token]) -> list[str]:
        """Return the completions for the token just before the cursor."""
        prefix = list(tokens_before_cursor(tuple(tokens)))
        # Indentation before the command is not significant.
        if prefix and _is_delim(prefix[0]):
            prefix = prefix[1:]

        for rule in self._rules:
            result = rule(prefix, self)
            if result is not None:
                logger.debug("Completion rule %s matched -> %d candidate(s)",
                             rule.__name__, len(result))
                return result
        return []
