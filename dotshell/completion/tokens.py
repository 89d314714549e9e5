#!/usr/bin/env python3
# dotshell/completion/tokens.py
from __future__ import annotations

"""
Token model for tab completion.

A completion request is turned into an immutable tuple of tokens:
- Text:      a non-empty run of non-whitespace characters.
- Delimiter: one run of whitespace, however long.
- Cursor:    where the cursor sits; appears exactly once.
- End:       terminates every sequence.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Text:
    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Text token must carry a non-empty fragment.")


@dataclass(frozen=True, slots=True)
class Delimiter:
    pass


@dataclass(frozen=True, slots=True)
class Cursor:
    pass


@dataclass(frozen=True, slots=True)
class End:
    pass


Token = Union[Text, Delimiter, Cursor, End]

DELIM = Delimiter()
CURSOR = Cursor()
END = End()


def text_value(token: Token) -> str | None:
    """Return the fragment of a Text token, or None for markers."""
    return token.value if isinstance(token, Text) else None
