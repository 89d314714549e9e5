#!/usr/bin/env python3
# dotshell/completion/__init__.py
from __future__ import annotations

"""
Package for tab completion.

Provides:
- Token model and tokenizer for (line, cursor) requests.
- List-backed candidate sources (static or supplied on demand).
- Shape dispatcher evaluating ordered completion rules.
- Completer entry point used by the CLI frontends.
"""


from .tokens import Text, Delimiter, Cursor, End, Token, DELIM, CURSOR, END
from .tokenizer import tokenize, tokens_before_cursor, current_fragment
from .sources import ListSource, filter_prefix
from .dispatcher import CompletionSpec, CompletionDispatcher, RULES
from .engine import Completer, complete, BUILT_IN_COMMANDS

__all__ = [
    # tokens
    "Text",
    "Delimiter",
    "Cursor",
    "End",
    "Token",
    "DELIM",
    "CURSOR",
    "END",
    # tokenizer
    "tokenize",
    "tokens_before_cursor",
    "current_fragment",
    # sources
    "ListSource",
    "filter_prefix",
    # dispatcher
    "CompletionSpec",
    "CompletionDispatcher",
    "RULES",
    # engine
    "Completer",
    "complete",
    "BUILT_IN_COMMANDS",
]
