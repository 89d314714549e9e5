#!/usr/bin/env python3
# dotshell/ui/table.py
from __future__ import annotations

"""
Boxed ASCII grids for query results, schema listings and help tables.

    +----+------+
    | id | name |
    +----+------+
    |  1 | ada  |
    |  2 | NULL |
    +----+------+

Numbers are right-aligned, everything else left-aligned. Widths ignore ANSI
sequences so colored cells line up.
"""

from numbers import Number
from typing import Sequence

from .ansi import strip_ansi

NULL_TEXT = "NULL"
ELLIPSIS = "..."


def cell_text(value: object) -> str:
    """Display text of one cell: NULL for None, hex for blobs."""
    if value is None:
        return NULL_TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def _clip(text: str, max_width: int | None) -> str:
    if max_width is None or len(text) <= max_width:
        return text
    if max_width <= len(ELLIPSIS):
        return text[:max_width]
    return text[: max_width - len(ELLIPSIS)] + ELLIPSIS


def _visible_len(text: str) -> int:
    return len(strip_ansi(text))


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Sequence[object] | None = None,
    *,
    max_width: int | None = None,
) -> str:
    """Return a boxed grid; cells longer than `max_width` are clipped."""
    grid = [[_clip(cell_text(value), max_width) for value in row] for row in rows]
    numeric = [[isinstance(value, Number) and not isinstance(value, bool) for value in row] for row in rows]
    head = [_clip(str(h), max_width) for h in headers] if headers is not None else None

    column_count = max([len(head or [])] + [len(row) for row in grid])
    widths = [0] * column_count
    for line in ([head] if head else []) + grid:
        for index, text in enumerate(line):
            widths[index] = max(widths[index], _visible_len(text))

    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def render(cells: Sequence[str], right: Sequence[bool] = ()) -> str:
        out = []
        for index, width in enumerate(widths):
            text = cells[index] if index < len(cells) else ""
            gap = " " * (width - _visible_len(text))
            aligned = gap + text if index < len(right) and right[index] else text + gap
            out.append(f" {aligned} ")
        return "|" + "|".join(out) + "|"

    lines = [rule]
    if head is not None:
        lines += [render(head), rule]
    lines += [render(cells, flags) for cells, flags in zip(grid, numeric)]
    if grid:
        lines.append(rule)
    return "\n".join(lines)
