"""Tests for dotshell.interface.loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from dotshell.commands import CommandRegistry
from dotshell.interface import list_categories, load_commands


def test_plugins_are_grouped_by_subpackage(registry: CommandRegistry) -> None:
    categories = registry.categories()

    assert sorted(categories) == ["schema", "session"]
    assert {c.name for c in categories["schema"]} == {".tables", ".describe", ".indexes", ".schema", ".count"}
    assert {c.name for c in categories["session"]} == {".mode", ".headers", ".open", ".databases"}


def test_category_descriptions(registry: CommandRegistry) -> None:
    # schema exports CATEGORY_DESCRIPTION; session relies on its package docstring
    assert registry.get_category_description("schema")
    assert registry.get_category_description("session") == "Output mode, headers and the open database."


def test_loading_twice_is_idempotent(registry: CommandRegistry) -> None:
    before = sorted(registry.names())

    assert load_commands("dotshell.plugins", registry=registry) == 2
    assert sorted(registry.names()) == before


def test_separate_registries_share_command_objects(registry: CommandRegistry) -> None:
    other = CommandRegistry()
    load_commands("dotshell.plugins", registry=other)

    assert other.get(".describe") is registry.get(".describe")


def test_global_registry_is_populated(global_registry: CommandRegistry) -> None:
    assert global_registry.get(".desc") is not None
    assert "schema" in list_categories(global_registry)


def test_loading_a_plain_module_is_an_error() -> None:
    with pytest.raises(RuntimeError):
        load_commands("dotshell.interface.parser", registry=CommandRegistry())


def test_exported_command_objects(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    package = tmp_path / "extra_plugins"
    (package / "tools").mkdir(parents=True)
    (package / "__init__.py").write_text("", encoding="utf-8")
    (package / "ping.py").write_text(
        "from dotshell.commands import Command\n"
        "COMMAND = Command(name='.ping', description='', example='', callback=lambda: 'pong', module=__name__)\n",
        encoding="utf-8",
    )
    (package / "tools" / "__init__.py").write_text('"""Odds and ends."""\n', encoding="utf-8")
    (package / "tools" / "entrypoint.py").write_text(
        "from dotshell.commands import Command\n"
        "COMMANDS = [Command(name='.echo', description='', example='', callback=str, module=__name__)]\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    registry = CommandRegistry()

    assert load_commands("extra_plugins", registry=registry) == 2
    assert registry.get(".ping").invoke() == "pong"
    assert registry.get(".ping").category == "general"
    assert registry.get(".echo").category == "tools"
    assert registry.get_category_description("tools") == "Odds and ends."
