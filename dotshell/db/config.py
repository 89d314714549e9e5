#!/usr/bin/env python3
# dotshell/db/config.py
from __future__ import annotations

"""
Shell configuration.

Sources, later ones winning:
  1) DEFAULTS below
  2) .env, dotshell.ini, dotshell.json, dotshell.toml in the base directory
  3) DOTSHELL_* environment variables (DOTSHELL_OUTPUT_MODE=csv)

Nested sections are flattened to UPPER_SNAKE keys, so `[output] mode = "csv"`
in TOML and OUTPUT_MODE=csv in .env set the same value. Invalid values raise
ValueError from load_config(); validate_or_default_config() warns instead.
Nothing here creates files or directories.
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from dotshell.ui import colorize, print_line

ENV_PREFIX = "DOTSHELL_"
MEMORY_DATABASE = ":memory:"
OUTPUT_MODES: tuple[str, ...] = ("list", "csv", "column", "json", "line")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "DATABASE_PATH": MEMORY_DATABASE,
    "HISTORY_FILE_PATH": str(Path.home() / ".dotshell_history"),
    "LOG_FILE_PATH": None,
    "LOG_LEVEL": "WARNING",
    "PROMPT": None,
    "OUTPUT_MODE": "list",
    "SHOW_HEADERS": False,
    "ENABLE_COMPLETION": True,
    "PLUGIN_PACKAGE": "dotshell.plugins",
}


@dataclass(frozen=True)
class AppConfig:
    database_path: str
    history_file_path: Path | None
    log_file_path: Path | None
    log_level: str
    prompt: str | None
    output_mode: str
    show_headers: bool
    enable_completion: bool
    plugin_package: str
    # keys no field claims, kept for diagnostics
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- readers ----------

_ENV_LINE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_]\w*)\s*=\s*(.*?)\s*$")


def _read_env(path: Path) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        if line.lstrip().startswith("#"):
            continue
        match = _ENV_LINE.match(line)
        if not match:
            continue
        key, value = match.groups()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def _read_ini(path: Path) -> dict[str, Any]:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    # Section names are grouping only: [shell] prompt = ... sets PROMPT.
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


_READERS: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _read_env),
    ("dotshell.ini", _read_ini),
    ("dotshell.json", _read_json),
    ("dotshell.toml", _read_toml),
)
_READ_ERRORS = (OSError, configparser.Error, json.JSONDecodeError, tomllib.TOMLDecodeError, UnicodeDecodeError)


def _flatten(mapping: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in mapping.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name.upper()] = value
    return flat


def _merge_sources(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged = dict(DEFAULTS)
    for filename, reader in _READERS:
        path = base / filename
        if not path.is_file():
            continue
        try:
            merged.update(_flatten(reader(path)))
        except _READ_ERRORS as exc:
            # A broken file is skipped, the remaining sources still apply.
            print_line(colorize(f"[ WARN ] Ignoring {path.name}: {exc}", "yellow"))
    merged.update({
        key[len(ENV_PREFIX):]: value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)
    })
    return merged


# ---------- coercion ----------

def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return None if text.strip().lower() in ("", "none") else text


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def _choice(options: tuple[str, ...], default: str, *, upper: bool = False) -> Callable[[Any], str]:
    def coerce(value: Any) -> str:
        text = (_optional_text(value) or default).strip()
        text = text.upper() if upper else text.lower()
        if text not in options:
            raise ValueError(f"Expected one of {list(options)}, got {value!r}")
        return text
    return coerce


def _resolve(value: str, base: Path) -> Path:
    path = Path(os.path.expandvars(os.path.expanduser(value)))
    return (path if path.is_absolute() else base / path).resolve()


def _module_path(value: Any) -> str:
    text = (_optional_text(value) or DEFAULTS["PLUGIN_PACKAGE"]).strip()
    if not re.fullmatch(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*", text):
        raise ValueError(f"Expected a dotted module path, got {text!r}")
    return text


def _build(raw: Mapping[str, Any], base: Path) -> AppConfig:
    def get(key: str) -> Any:
        return raw.get(key, DEFAULTS[key])

    def optional_path(key: str) -> Path | None:
        text = _optional_text(get(key))
        return None if text is None else _resolve(text, base)

    def checked(key: str, coerce: Callable[[Any], Any]) -> Any:
        try:
            return coerce(get(key))
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from None

    database = _optional_text(get("DATABASE_PATH"))
    return AppConfig(
        database_path=MEMORY_DATABASE if database in (None, MEMORY_DATABASE) else str(_resolve(database, base)),
        history_file_path=optional_path("HISTORY_FILE_PATH"),
        log_file_path=optional_path("LOG_FILE_PATH"),
        log_level=checked("LOG_LEVEL", _choice(LOG_LEVELS, DEFAULTS["LOG_LEVEL"], upper=True)),
        prompt=_optional_text(get("PROMPT")),
        output_mode=checked("OUTPUT_MODE", _choice(OUTPUT_MODES, DEFAULTS["OUTPUT_MODE"])),
        show_headers=checked("SHOW_HEADERS", _flag),
        enable_completion=checked("ENABLE_COMPLETION", _flag),
        plugin_package=checked("PLUGIN_PACKAGE", _module_path),
        extra={key: value for key, value in raw.items() if key not in DEFAULTS},
    )


# ---------- public API ----------

def load_config(base_dir: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """Merge every source and validate; raises ValueError on bad values."""
    base = (base_dir or Path.cwd()).resolve()
    return _build(_merge_sources(base, os.environ if environ is None else environ), base)


def validate_or_default_config(base_dir: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """load_config(), but an invalid value prints a warning and yields the defaults."""
    try:
        return load_config(base_dir, environ)
    except ValueError as exc:
        print_line(colorize(f"[ WARN ] Invalid configuration ({exc}); using defaults.", "yellow"))
        return _build(DEFAULTS, (base_dir or Path.cwd()).resolve())
