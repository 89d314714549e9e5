"""Tests for dotshell.interface.parser."""

from __future__ import annotations

import pytest

from dotshell.interface.parser import bind_args, build_usage, tokenize


def describe(table: str, modifier: str | None = None) -> None: ...


def limit(table: str, rows: int = 10, *, sample: bool = False) -> None: ...


def drop(*tables: str) -> None: ...


def scale(factor: float) -> None: ...


def test_tokenize_honours_quotes() -> None:
    assert tokenize('.describe "my table" extended') == [".describe", "my table", "extended"]


def test_tokenize_reports_unbalanced_quotes() -> None:
    with pytest.raises(ValueError):
        tokenize('.describe "users')


def test_positional_binding_with_defaults() -> None:
    assert bind_args(describe, ["users"]) == (("users", None), {})
    assert bind_args(describe, ["users", "extended"]) == (("users", "extended"), {})


def test_keyword_tokens_and_coercion() -> None:
    assert bind_args(limit, ["users", "rows=5", "sample=yes"]) == (("users",), {"rows": 5, "sample": True})
    assert bind_args(limit, ["users", "3"]) == (("users", 3), {})


def test_equals_sign_in_unknown_key_stays_positional() -> None:
    assert bind_args(describe, ["a=b"]) == (("a=b", None), {})


def test_var_positional_collects_the_rest() -> None:
    assert bind_args(drop, ["a", "b", "c"]) == (("a", "b", "c"), {})


def test_missing_and_surplus_arguments() -> None:
    with pytest.raises(TypeError, match="Missing required argument: table"):
        bind_args(describe, [])
    with pytest.raises(TypeError, match="Too many"):
        bind_args(describe, ["a", "b", "c"])


def test_bad_number_is_a_type_error() -> None:
    with pytest.raises(TypeError, match="Expected float"):
        bind_args(scale, ["big"])


def test_build_usage() -> None:
    assert build_usage(".describe", describe) == ".describe <table> [modifier]"
    assert build_usage(".limit", limit) == ".limit <table> [rows] [sample=...]"
    assert build_usage(".drop", drop) == ".drop [tables...]"
    assert build_usage(".databases", lambda: None) == ".databases"
