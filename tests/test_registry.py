"""Tests for dotshell.commands registry and decorator."""

from __future__ import annotations

import pytest

from dotshell.commands import Command, CommandRegistry, command, register_command
from dotshell.completion import CompletionSpec, ListSource


def _noop() -> None:
    return None


def _make(name: str, aliases: list[str] | None = None, completion: CompletionSpec | None = None) -> Command:
    return Command(name=name, description="", example="", callback=_noop,
                   aliases=aliases or [], completion=completion)


def test_lookup_by_name_and_alias_is_case_insensitive() -> None:
    registry = CommandRegistry()
    describe = _make(".describe", aliases=[".desc"])
    registry.register(describe)

    assert registry.get(".DESCRIBE") is describe
    assert registry.get(".desc") is describe
    assert registry.get("describe") is describe
    assert registry.get(".nope") is None


def test_names_include_aliases_but_all_does_not() -> None:
    registry = CommandRegistry()
    registry.register(_make(".describe", aliases=[".desc"]))

    assert sorted(registry.names()) == [".desc", ".describe"]
    assert [c.name for c in registry.all()] == [".describe"]


def test_collisions_are_rejected() -> None:
    registry = CommandRegistry()
    registry.register(_make(".describe", aliases=[".desc"]))

    with pytest.raises(ValueError):
        registry.register(_make(".describe"))
    with pytest.raises(ValueError):
        registry.register(_make(".desc"))
    with pytest.raises(ValueError):
        registry.register(_make(".details", aliases=[".desc"]))


def test_registering_the_same_object_twice_is_a_no_op() -> None:
    registry = CommandRegistry()
    describe = _make(".describe", aliases=[".desc"])

    registry.register(describe)
    registry.register(describe)

    assert registry.all() == [describe]


def test_completion_specs_cover_aliases_and_skip_plain_commands() -> None:
    spec = CompletionSpec(arguments=ListSource(["users"]))
    registry = CommandRegistry()
    registry.register(_make(".describe", aliases=[".desc"], completion=spec))
    registry.register(_make(".databases"))

    assert registry.completion_specs() == {".describe": spec, ".desc": spec}


def test_categories_and_descriptions() -> None:
    registry = CommandRegistry()
    first, second = _make(".a"), _make(".b")
    second.category = "schema"
    registry.register(first)
    registry.register(second)
    registry.set_category_description("schema", "  Tables.  ")

    assert registry.categories() == {"general": [first], "schema": [second]}
    assert registry.get_category_description("schema") == "Tables."
    assert registry.get_category_description("missing") == ""


def test_clear_forgets_everything() -> None:
    registry = CommandRegistry()
    registry.register(_make(".describe", aliases=[".desc"]))
    registry.set_category_description("general", "x")

    registry.clear()

    assert registry.names() == []
    assert registry.get_category_description("general") == ""


def test_decorator_builds_command_metadata() -> None:
    registry = CommandRegistry()
    spec = CompletionSpec(arguments=ListSource(["on", "off"]))

    @command(example=".show-flags on", completion=spec, aliases=["SF"], registry=registry)
    def show_flags(switch: str, verbose: bool = False) -> str:
        """Show flags."""
        return switch

    command_obj = registry.get(".show-flags")

    assert command_obj is not None
    assert command_obj.description == "Show flags."
    assert command_obj.aliases == [".sf"]
    assert command_obj.param_names == ["switch", "verbose"]
    assert command_obj.completion is spec
    assert command_obj.module == __name__
    assert registry.get(".sf").invoke("on") == "on"


def test_register_command_targets_the_given_registry() -> None:
    registry = CommandRegistry()
    register_command(_make(".ping"), registry=registry)

    assert registry.names() == [".ping"]
