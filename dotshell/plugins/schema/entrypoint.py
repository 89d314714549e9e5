# dotshell/plugins/schema/entrypoint.py
from __future__ import annotations

from dotshell.commands import CommandResult, command
from dotshell.completion import CompletionSpec, ListSource
from dotshell.db import (
    count_rows,
    describe_table,
    get_session,
    list_indexes,
    list_tables,
    session_tables,
    table_schema,
)
from dotshell.ui import format_table

DESCRIBE_ALL = "all"
DESCRIBE_EXTENDED = "extended"


def _describe_choices() -> list[str]:
    return [DESCRIBE_ALL, *session_tables()]


# Table-argument completion shared by the commands below
TABLES = CompletionSpec(arguments=ListSource(session_tables))


# ---------- .tables ----------
@command(
    name=".tables",
    description="List tables and views, optionally filtered by a pattern.",
    example=".tables user*",
    aliases=[".ls"],
)
def tables(pattern: str | None = None) -> str:
    names = list_tables(get_session().connection, pattern)
    return "\n".join(names) if names else "(no tables)"


def _describe_one(name: str, extended: bool) -> str:
    columns = describe_table(get_session().connection, name, extended=extended)
    headers = ["Column", "Type", "Not null", "Default", "PK"]
    if extended:
        headers += ["Indexes", "References"]
    rows = []
    for entry in columns:
        row = [
            entry["column"],
            entry["type"] or "-",
            "yes" if entry["notnull"] else "no",
            "-" if entry["default"] is None else entry["default"],
            "yes" if entry["pk"] else "",
        ]
        if extended:
            row += [", ".join(entry["indexes"]) or "-", entry["references"] or "-"]
        rows.append(row)
    return f"{name}\n{format_table(rows, headers=headers)}"


# ---------- .describe ----------
@command(
    name=".describe",
    description="Show the columns of a table ('all' for every table; 'extended' adds indexes and references).",
    example=".describe users extended",
    completion=CompletionSpec(
        arguments=ListSource(_describe_choices),
        terminals=frozenset({DESCRIBE_ALL}),
        modifier=DESCRIBE_EXTENDED,
    ),
    aliases=[".desc"],
)
def describe(table: str, modifier: str | None = None) -> str | CommandResult:
    if modifier is not None and modifier.lower() != DESCRIBE_EXTENDED:
        return CommandResult.failure(f"Unknown modifier: {modifier} (expected '{DESCRIBE_EXTENDED}')")

    if table.lower() == DESCRIBE_ALL:
        if modifier is not None:
            return CommandResult.failure(f"'{DESCRIBE_ALL}' takes no modifier")
        names = list_tables(get_session().connection)
        if not names:
            return "(no tables)"
        return "\n\n".join(_describe_one(name, False) for name in names)

    return _describe_one(table, modifier is not None)


# ---------- .indexes ----------
@command(
    name=".indexes",
    description="List indexes, optionally only those of one table.",
    example=".indexes users",
    completion=TABLES,
    aliases=[".indices"],
)
def indexes(table: str | None = None) -> str:
    rows = list_indexes(get_session().connection, table)
    if not rows:
        return "(no indexes)"
    return format_table(rows, headers=["Index", "Table"])


# ---------- .schema ----------
@command(
    name=".schema",
    description="Show CREATE statements for one table or the whole database.",
    example=".schema users",
    completion=TABLES,
)
def schema(table: str | None = None) -> str:
    statements = table_schema(get_session().connection, table)
    return "\n".join(statements) if statements else "(empty schema)"


# ---------- .count ----------
@command(
    name=".count",
    description="Count the rows of a table.",
    example=".count users",
    completion=TABLES,
)
def count(table: str) -> str:
    return str(count_rows(get_session().connection, table))
