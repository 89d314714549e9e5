# dotshell/plugins/session/entrypoint.py
from __future__ import annotations

from dotshell.commands import CommandResult, command
from dotshell.completion import CompletionSpec, ListSource
from dotshell.db import OUTPUT_MODES, get_session, open_session

_SWITCH_ON = ("on", "yes", "true", "1")
_SWITCH_OFF = ("off", "no", "false", "0")


# ---------- .mode ----------
@command(
    name=".mode",
    description="Show or set the output mode for query results.",
    example=".mode csv",
    completion=CompletionSpec(arguments=ListSource(OUTPUT_MODES)),
)
def mode(name: str | None = None) -> str | CommandResult:
    session = get_session()
    if name is None:
        return f"current output mode: {session.mode}"
    lowered = name.lower()
    if lowered not in OUTPUT_MODES:
        return CommandResult.failure(f"Unknown mode: {name} (choose from {', '.join(OUTPUT_MODES)})")
    session.mode = lowered
    return CommandResult()


# ---------- .headers ----------
@command(
    name=".headers",
    description="Turn column headers on or off for query results.",
    example=".headers on",
    completion=CompletionSpec(arguments=ListSource(("on", "off"))),
)
def headers(switch: str | None = None) -> str | CommandResult:
    session = get_session()
    if switch is None:
        return f"headers: {'on' if session.headers else 'off'}"
    lowered = switch.lower()
    if lowered in _SWITCH_ON:
        session.headers = True
    elif lowered in _SWITCH_OFF:
        session.headers = False
    else:
        return CommandResult.failure(f"Expected on|off, got {switch!r}")
    return CommandResult()


# ---------- .open ----------
@command(
    name=".open",
    description="Close the current database and open another (':memory:' for a scratch DB).",
    example=".open data/app.db",
)
def open_database(path: str) -> str:
    session = open_session(path)
    return f"opened {session.path}"


# ---------- .databases ----------
@command(
    name=".databases",
    description="Show the databases attached to the session.",
    example=".databases",
)
def databases() -> CommandResult:
    rows = get_session().connection.execute("PRAGMA database_list").fetchall()
    return CommandResult.result_set(
        ["seq", "name", "file"],
        [(row["seq"], row["name"], row["file"] or ":memory:") for row in rows],
    )
