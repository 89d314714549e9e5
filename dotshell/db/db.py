#!/usr/bin/env python3
# dotshell/db/db.py
from __future__ import annotations

"""
SQLite access for the shell session.

All helpers take an open connection so they can be used with the session
database as well as with throwaway connections in tests.
"""

import re
import sqlite3
from pathlib import Path
from typing import Any, Sequence

_IDENTIFIER_QUOTE = '"'


def open_database(path: str | Path) -> sqlite3.Connection:
    """Open (or create) a database file; ':memory:' gives a private in-memory DB."""
    target = str(path)
    if target != ":memory:":
        Path(target).expanduser().parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn


def quote_identifier(name: str) -> str:
    """Quote a table/column name for interpolation into SQL."""
    escaped = name.replace(_IDENTIFIER_QUOTE, _IDENTIFIER_QUOTE * 2)
    return f"{_IDENTIFIER_QUOTE}{escaped}{_IDENTIFIER_QUOTE}"


def _like_from_glob(pattern: str) -> str:
    """Translate shell-style '*'/'?' into a LIKE pattern; bare words match as substrings."""
    if not re.search(r"[*?%_]", pattern):
        return f"%{pattern}%"
    return pattern.replace("*", "%").replace("?", "_")


# ---------- catalog ----------

def list_tables(conn: sqlite3.Connection, pattern: str | None = None) -> list[str]:
    """Return user tables and views, sorted by name."""
    sql = (
        "SELECT name FROM sqlite_master "
        "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%'"
    )
    params: list[Any] = []
    if pattern:
        sql += " AND name LIKE ?"
        params.append(_like_from_glob(pattern))
    sql += " ORDER BY name"
    return [row[0] for row in conn.execute(sql, params).fetchall()]


def table_exists(conn: sqlite3.Connection, name: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') AND name = ?",
        (name,),
    ).fetchone()
    return row is not None


def _require_table(conn: sqlite3.Connection, name: str) -> None:
    if not table_exists(conn, name):
        raise LookupError(f"No such table: {name}")


def describe_table(conn: sqlite3.Connection, name: str, *, extended: bool = False) -> list[dict[str, Any]]:
    """
    Describe the columns of `name`.

    Each entry has: column, type, notnull, default, pk.
    With `extended`, entries also list the indexes covering the column and the
    foreign key it references (if any).
    """
    _require_table(conn, name)
    table = quote_identifier(name)
    columns: list[dict[str, Any]] = [
        {
            "column": row["name"],
            "type": row["type"] or "",
            "notnull": bool(row["notnull"]),
            "default": row["dflt_value"],
            "pk": bool(row["pk"]),
        }
        for row in conn.execute(f"PRAGMA table_info({table})").fetchall()
    ]
    if not extended:
        return columns

    indexes_by_column: dict[str, list[str]] = {}
    for index in conn.execute(f"PRAGMA index_list({table})").fetchall():
        index_name = index["name"]
        for info in conn.execute(f"PRAGMA index_info({quote_identifier(index_name)})").fetchall():
            if info["name"] is not None:
                indexes_by_column.setdefault(info["name"], []).append(index_name)

    references: dict[str, str] = {}
    for fk in conn.execute(f"PRAGMA foreign_key_list({table})").fetchall():
        target = fk["table"] if fk["to"] is None else f"{fk['table']}({fk['to']})"
        references[fk["from"]] = target

    for entry in columns:
        entry["indexes"] = indexes_by_column.get(entry["column"], [])
        entry["references"] = references.get(entry["column"])
    return columns


def list_indexes(conn: sqlite3.Connection, table: str | None = None) -> list[tuple[str, str]]:
    """Return (index, table) pairs, optionally limited to one table."""
    sql = "SELECT name, tbl_name FROM sqlite_master WHERE type = 'index'"
    params: list[Any] = []
    if table:
        _require_table(conn, table)
        sql += " AND tbl_name = ?"
        params.append(table)
    sql += " ORDER BY tbl_name, name"
    return [(row[0], row[1]) for row in conn.execute(sql, params).fetchall()]


def table_schema(conn: sqlite3.Connection, name: str | None = None) -> list[str]:
    """Return the CREATE statements of one table (and its indexes) or of the whole database."""
    sql = "SELECT sql FROM sqlite_master WHERE sql IS NOT NULL AND name NOT LIKE 'sqlite_%'"
    params: list[Any] = []
    if name:
        _require_table(conn, name)
        sql += " AND tbl_name = ?"
        params.append(name)
    sql += " ORDER BY CASE type WHEN 'table' THEN 0 WHEN 'view' THEN 1 ELSE 2 END, name"
    return [f"{row[0]};" for row in conn.execute(sql, params).fetchall()]


def count_rows(conn: sqlite3.Connection, name: str) -> int:
    _require_table(conn, name)
    return int(conn.execute(f"SELECT COUNT(*) FROM {quote_identifier(name)}").fetchone()[0])


# ---------- statements ----------

def run_sql(conn: sqlite3.Connection, sql: str) -> tuple[list[str], list[Sequence[Any]]]:
    """
    Execute one or more SQL statements.

    Returns (columns, rows) of the last statement that produced a result set;
    both are empty for pure DDL/DML. Changes are committed immediately.
    """
    columns: list[str] = []
    rows: list[Sequence[Any]] = []
    for statement in _split_statements(sql):
        cursor = conn.execute(statement)
        if cursor.description:
            columns = [d[0] for d in cursor.description]
            rows = [tuple(r) for r in cursor.fetchall()]
    conn.commit()
    return columns, rows


def _split_statements(sql: str) -> list[str]:
    """Split a script into complete statements using sqlite3.complete_statement."""
    statements: list[str] = []
    buffer = ""
    for piece in sql.split(";"):
        buffer = f"{buffer}{piece};" if buffer or piece.strip() else buffer
        if buffer and sqlite3.complete_statement(buffer):
            statements.append(buffer.strip())
            buffer = ""
    if buffer.strip().rstrip(";").strip():
        # Incomplete trailing statement: let sqlite report the syntax error.
        statements.append(buffer.strip().rstrip(";"))
    return statements
