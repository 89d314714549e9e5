#!/usr/bin/env python3
# dotshell/completion/tokenizer.py
from __future__ import annotations

"""
Line buffer tokenizer.

Turns (line, cursor offset) into a token sequence:
- maximal non-whitespace runs become Text tokens,
- maximal whitespace runs collapse into a single Delimiter,
- the Cursor marker is inserted at the cursor offset,
- End closes the sequence.

Only prefix completion is supported, so when the cursor lands inside a word
the part of that word after the cursor is dropped.
"""

from .tokens import CURSOR, DELIM, END, Cursor, Text, Token


def tokenize(line: str, cursor: int) -> tuple[Token, ...]:
    """
    Tokenize `line` with the cursor at offset `cursor`.

    Examples:
        tokenize("", 0)             -> (Cursor, End)
        tokenize(".describe ", 10)  -> (Text('.describe'), Delimiter, Cursor, End)
        tokenize(".describe us", 11)-> (Text('.describe'), Delimiter, Text('u'), Cursor, End)
    """
    # Out-of-range offsets are clamped so every request yields a sequence.
    cursor = max(0, min(cursor, len(line)))

    tokens: list[Token] = []
    placed = False
    index = 0
    length = len(line)

    while index < length:
        is_space = line[index].isspace()
        run_end = index
        while run_end < length and line[run_end].isspace() == is_space:
            run_end += 1

        if not placed and cursor == index:
            tokens.append(CURSOR)
            placed = True

        if not placed and index < cursor < run_end:
            if is_space:
                tokens.extend((DELIM, CURSOR, DELIM))
            else:
                tokens.extend((Text(line[index:cursor]), CURSOR))
            placed = True
        else:
            tokens.append(DELIM if is_space else Text(line[index:run_end]))

        index = run_end

    if not placed:
        tokens.append(CURSOR)
    tokens.append(END)
    return tuple(tokens)


def tokens_before_cursor(tokens: tuple[Token, ...]) -> tuple[Token, ...]:
    """Return everything preceding the Cursor marker."""
    for position, token in enumerate(tokens):
        if isinstance(token, Cursor):
            return tokens[:position]
    return tokens


def current_fragment(tokens: tuple[Token, ...]) -> str:
    """
    Text of the token immediately before the cursor.

    Frontends replace exactly this fragment with the chosen completion.
    Returns "" when the cursor follows whitespace or starts the line.
    """
    prefix = tokens_before_cursor(tokens)
    if prefix and isinstance(prefix[-1], Text):
        return prefix[-1].value
    return ""
