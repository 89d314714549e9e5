"""Tests for dotshell.completion.sources."""

from __future__ import annotations

from dotshell.completion import ListSource, filter_prefix


def test_filter_prefix_preserves_source_order_and_dedupes() -> None:
    assert filter_prefix(["users", "teams", "uploads", "users"], "u") == ["users", "uploads"]


def test_empty_prefix_returns_everything() -> None:
    assert filter_prefix(["b", "a", "b"], "") == ["b", "a"]


def test_prefix_matching_is_case_sensitive() -> None:
    assert filter_prefix(["Users", "users"], "u") == ["users"]


def test_static_source_accepts_generators() -> None:
    source = ListSource(name for name in ("csv", "column", "json"))

    assert source.complete("c") == ["csv", "column"]
    # Materialized once; a second request sees the same choices.
    assert source.complete("c") == ["csv", "column"]
    assert not source.is_dynamic


def test_dynamic_source_is_queried_on_every_request() -> None:
    tables = ["users"]
    source = ListSource(lambda: tables)

    assert source.complete("") == ["users"]
    tables.append("uploads")
    assert source.complete("u") == ["users", "uploads"]
    assert source.is_dynamic


def test_no_match_returns_empty_list() -> None:
    assert ListSource(["foo"]).complete("x") == []
