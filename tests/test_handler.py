"""Tests for dotshell.interface.handler."""

from __future__ import annotations

import json

import pytest

from dotshell.commands import CommandRegistry, CommandResult, command
from dotshell.db import Session
from dotshell.interface import handle_line


def test_blank_line_prints_nothing(registry: CommandRegistry, session: Session) -> None:
    assert handle_line("   ", registry) is None


@pytest.mark.parametrize("line", [".exit", ".quit", "  .QUIT  "])
def test_exit_commands_raise_system_exit(line: str, registry: CommandRegistry) -> None:
    with pytest.raises(SystemExit):
        handle_line(line, registry)


def test_sql_is_rendered_in_the_session_mode(registry: CommandRegistry, session: Session) -> None:
    assert handle_line("SELECT id, name FROM users ORDER BY id", registry) == "1|ada\n2|bob"

    session.mode = "json"
    out = handle_line("SELECT name FROM users WHERE id = 1", registry)
    assert json.loads(out) == [{"name": "ada"}]


def test_sql_errors_are_reported_not_raised(registry: CommandRegistry, session: Session) -> None:
    out = handle_line("SELECT * FROM missing", registry)

    assert out.startswith("[error]")
    assert "missing" in out


def test_ddl_prints_nothing(registry: CommandRegistry, session: Session) -> None:
    assert handle_line("CREATE TABLE t (x); INSERT INTO t VALUES (1)", registry) is None
    assert handle_line("SELECT x FROM t", registry) == "1"


def test_mode_and_headers_commands_change_rendering(registry: CommandRegistry, session: Session) -> None:
    assert handle_line(".mode csv", registry) is None
    assert handle_line(".headers on", registry) is None

    assert handle_line("SELECT id, name FROM users ORDER BY id", registry) == "id,name\n1,ada\n2,bob"
    assert handle_line(".mode", registry) == "current output mode: csv"


def test_invalid_mode_is_an_error(registry: CommandRegistry, session: Session) -> None:
    out = handle_line(".mode xml", registry)

    assert out.startswith("[error] Unknown mode: xml")
    assert session.mode == "list"


def test_describe_and_extended(registry: CommandRegistry, session: Session) -> None:
    plain = handle_line(".describe users", registry)
    extended = handle_line(".describe users extended", registry)

    assert "team_id" in plain
    assert "Indexes" not in plain
    assert "idx_users_name" in extended
    assert "teams(id)" in extended


def test_describe_all_covers_every_table(registry: CommandRegistry, session: Session) -> None:
    out = handle_line(".describe all", registry)

    for name in ("teams", "uploads", "users"):
        assert name in out


def test_describe_unknown_modifier(registry: CommandRegistry, session: Session) -> None:
    assert handle_line(".describe users verbose", registry).startswith("[error] Unknown modifier")


def test_describe_missing_table(registry: CommandRegistry, session: Session) -> None:
    out = handle_line(".describe ghosts", registry)

    assert out.startswith("[error] LookupError")


def test_missing_argument_shows_usage(registry: CommandRegistry, session: Session) -> None:
    out = handle_line(".count", registry)

    assert "Missing required argument: table" in out
    assert "Usage: .count <table>" in out


def test_alias_dispatch(registry: CommandRegistry, session: Session) -> None:
    assert handle_line(".ls", registry) == "teams\nuploads\nusers"
    assert handle_line(".ls up*", registry) == "uploads"


def test_unknown_command_suggests_close_names(registry: CommandRegistry, session: Session) -> None:
    out = handle_line(".descibe users", registry)

    assert out.startswith("[error] Unknown command: .descibe.")
    assert ".describe" in out


def test_unbalanced_quotes_are_reported(registry: CommandRegistry, session: Session) -> None:
    assert handle_line('.describe "users', registry).startswith("[error]")


def test_help_lists_categories_and_commands(registry: CommandRegistry) -> None:
    overview = handle_line(".help", registry)
    category = handle_line(".help schema", registry)
    single = handle_line(".help .describe", registry)

    assert "schema" in overview and "session" in overview
    assert ".indexes" in category
    assert single.startswith("Usage: .describe <table> [modifier]")
    assert "Aliases:  .desc" in single
    assert handle_line(".help nothing", registry) == "No such command or category: nothing"


def test_failed_command_result_is_an_error() -> None:
    local = CommandRegistry()

    @command(name=".fail", registry=local)
    def fail() -> CommandResult:
        return CommandResult(ok=False, message="nope")

    @command(name=".boom", registry=local)
    def boom() -> None:
        raise RuntimeError("kaput")

    assert handle_line(".fail", local) == "[error] nope"
    assert handle_line(".boom", local) == "[error] RuntimeError: kaput"


def test_result_set_commands_follow_the_output_mode(registry: CommandRegistry, session: Session) -> None:
    assert handle_line(".databases", registry) == "0|main|:memory:"

    session.mode = "json"
    assert json.loads(handle_line(".databases", registry)) == [{"seq": 0, "name": "main", "file": ":memory:"}]


def test_help_topic_after_any_whitespace(registry: CommandRegistry) -> None:
    assert handle_line(".help\tschema", registry) == handle_line(".help schema", registry)
    assert handle_line(".HELP   .desc", registry).startswith("Usage: .describe")
