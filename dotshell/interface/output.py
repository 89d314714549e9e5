#!/usr/bin/env python3
# dotshell/interface/output.py
from __future__ import annotations

"""
Result-set rendering for the shell's output modes.

Modes:
  list    values separated by '|' (header line when headers are on)
  csv     RFC 4180 via the csv module
  column  ASCII table
  json    array of objects
  line    one 'column = value' line per field, blank line between rows
"""

import csv
import io
import json
from typing import Any, Sequence

from dotshell.ui import cell_text, format_table


def _cell(value: Any) -> str:
    # list/csv/line print NULL as an empty field
    return "" if value is None else cell_text(value)


def _render_list(columns: Sequence[str], rows: Sequence[Sequence[Any]], headers: bool) -> str:
    lines = ["|".join(columns)] if headers else []
    lines.extend("|".join(_cell(v) for v in row) for row in rows)
    return "\n".join(lines)


def _render_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]], headers: bool) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    if headers:
        writer.writerow(columns)
    writer.writerows([[_cell(v) for v in row] for row in rows])
    return buffer.getvalue().rstrip("\n")


def _render_column(columns: Sequence[str], rows: Sequence[Sequence[Any]], headers: bool) -> str:
    # Tables without a header line would be ambiguous; column mode always shows it.
    return format_table(rows, headers=columns)


def _render_json(columns: Sequence[str], rows: Sequence[Sequence[Any]], headers: bool) -> str:
    records = [
        {name: (value.hex() if isinstance(value, bytes) else value)
         for name, value in zip(columns, row)}
        for row in rows
    ]
    return json.dumps(records, ensure_ascii=False, default=str)


def _render_line(columns: Sequence[str], rows: Sequence[Sequence[Any]], headers: bool) -> str:
    width = max((len(c) for c in columns), default=0)
    blocks = [
        "\n".join(f"{name.rjust(width)} = {_cell(value)}" for name, value in zip(columns, row))
        for row in rows
    ]
    return "\n\n".join(blocks)


_RENDERERS = {
    "list": _render_list,
    "csv": _render_csv,
    "column": _render_column,
    "json": _render_json,
    "line": _render_line,
}


def render_rows(columns: Sequence[str], rows: Sequence[Sequence[Any]], mode: str = "list", headers: bool = False) -> str | None:
    """Render a result set; None when there is nothing to show."""
    if not columns:
        return None
    renderer = _RENDERERS.get(mode)
    if renderer is None:
        raise ValueError(f"Unknown output mode: {mode}")
    if not rows and mode != "column":
        return "[]" if mode == "json" else None
    return renderer(columns, rows, headers)
