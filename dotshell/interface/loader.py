#!/usr/bin/env python3
# dotshell/interface/loader.py
from __future__ import annotations

"""
Plugin discovery.

Every public module or sub-package of the plugin package is imported:

    dotshell/plugins/
        extras.py               -> dotshell.plugins.extras
        schema/__init__.py      -> category "schema" (description source)
        schema/entrypoint.py    -> dotshell.plugins.schema.entrypoint

Importing runs the @command decorators. A module may also export COMMAND or
COMMANDS (pre-built Command objects). Commands defined inside a sub-package
take the sub-package name as their category unless they chose one; the
category description is the package's CATEGORY_DESCRIPTION or its docstring.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterator

from dotshell.commands import DEFAULT_CATEGORY, REGISTRY, Command, CommandRegistry

logger = logging.getLogger("dotshell.loader")

ENTRYPOINT = "entrypoint"


def _exported_commands(module: ModuleType) -> list[Command]:
    single = getattr(module, "COMMAND", None)
    many = getattr(module, "COMMANDS", None) or ()
    found = [single] if isinstance(single, Command) else []
    return found + [item for item in many if isinstance(item, Command)]


def _decorated_commands(module: ModuleType) -> list[Command]:
    # @command always targets REGISTRY; other registries pick the commands up here.
    return [cmd for cmd in REGISTRY if cmd.module == module.__name__]


def _discover(search_path: list[str]) -> Iterator[tuple[str, pkgutil.ModuleInfo]]:
    for base in search_path:
        for info in pkgutil.iter_modules([base]):
            yield base, info


def _import_target(package: str, base: str, info: pkgutil.ModuleInfo) -> str:
    if not info.ispkg:
        return f"{package}.{info.name}"
    has_entrypoint = (Path(base) / info.name / f"{ENTRYPOINT}.py").is_file()
    return f"{package}.{info.name}.{ENTRYPOINT}" if has_entrypoint else f"{package}.{info.name}"


def load_commands(commands_package: str = "dotshell.plugins", registry: CommandRegistry | None = None) -> int:
    """Import the plugin package into `registry` (default REGISTRY); returns the module count."""
    registry = registry if registry is not None else REGISTRY
    package = importlib.import_module(commands_package)
    search_path = list(getattr(package, "__path__", ()))
    if not search_path:
        raise RuntimeError(f"'{commands_package}' is a module, not a plugin package.")

    loaded = 0
    categories: list[str] = []
    for base, info in _discover(search_path):
        if info.name.startswith("_"):
            continue
        target = _import_target(commands_package, base, info)
        module = importlib.import_module(target)

        commands = _exported_commands(module)
        if registry is not REGISTRY:
            commands = _decorated_commands(module) + commands
        for command_obj in commands:
            registry.register(command_obj)

        if info.ispkg:
            categories.append(info.name)
        loaded += 1
        logger.debug("Loaded %s (%d command(s))", target, len(commands))

    _assign_categories(commands_package, registry)
    _describe_categories(commands_package, categories, registry)
    return loaded


def _assign_categories(commands_package: str, registry: CommandRegistry) -> None:
    prefix = f"{commands_package}."
    for command_obj in registry:
        if command_obj.category != DEFAULT_CATEGORY or not command_obj.module.startswith(prefix):
            continue
        relative = command_obj.module[len(prefix):].split(".")
        if len(relative) > 1:
            command_obj.category = relative[0]


def _describe_categories(commands_package: str, categories: list[str], registry: CommandRegistry) -> None:
    for category in categories:
        module = importlib.import_module(f"{commands_package}.{category}")
        text = getattr(module, "CATEGORY_DESCRIPTION", None)
        if not isinstance(text, str):
            text = module.__doc__ or ""
        registry.set_category_description(category, text)
