#!/usr/bin/env python3
# dotshell/interface/parser.py
from __future__ import annotations

"""
Dot-command argument handling.

A dot-command line is split with shell quoting rules, so `.describe "my table"`
passes one argument. The words are then matched against the command
function's signature:

    def count(table: str, limit: int = 0, *, exact: bool = False): ...

    .count users            -> count("users")
    .count users 5          -> count("users", 5)
    .count users exact=yes  -> count("users", exact=True)

`name=value` words bind by name only when `name` is a parameter; anything else
(`.tables a=b`) stays positional.
"""

import inspect
import shlex
from typing import Any, get_args, get_origin

_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def tokenize(command_line: str) -> list[str]:
    """shlex words; unbalanced quotes raise ValueError."""
    return shlex.split(command_line, posix=True)


def _signature(func: Any) -> inspect.Signature:
    # Plugins use `from __future__ import annotations`; resolve the strings.
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, SyntaxError, TypeError):
        return inspect.signature(func)


def _target_type(annotation: Any) -> Any:
    """`T | None` -> T; `tuple[T, ...]` -> T; anything else unchanged."""
    args = get_args(annotation)
    if get_origin(annotation) is tuple and args:
        return args[0]
    members = [a for a in args if a is not type(None)]
    if len(args) == 2 and len(members) == 1:
        return members[0]
    return annotation


def _convert(word: str, annotation: Any) -> Any:
    target = _target_type(annotation)
    if target is bool:
        return word.lower() in _TRUE_WORDS
    if target in (int, float):
        try:
            return target(word)
        except ValueError:
            raise TypeError(f"Expected {target.__name__}, got {word!r}") from None
    return word


def bind_args(func: Any, tokens: list[str]) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """
    Map command words onto `func`'s parameters.

    Returns (args, kwargs) ready for the call. Raises TypeError for missing
    required parameters, surplus words and unconvertible numbers; the handler
    turns that into a usage message.
    """
    params = list(_signature(func).parameters.values())
    names = {p.name for p in params}

    named: dict[str, str] = {}
    loose: list[str] = []
    for word in tokens:
        key, sep, value = word.partition("=")
        if sep and key in names:
            named[key] = value
        else:
            loose.append(word)

    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    rest: list[str] = loose
    for param in params:
        if param.kind is param.VAR_POSITIONAL:
            args.extend(_convert(word, param.annotation) for word in rest)
            rest = []
        elif param.kind in _POSITIONAL:
            if param.name in named:
                kwargs[param.name] = _convert(named.pop(param.name), param.annotation)
            elif rest:
                if kwargs:
                    raise TypeError(f"Give '{param.name}' as {param.name}=... after named arguments.")
                args.append(_convert(rest.pop(0), param.annotation))
            elif param.default is param.empty:
                raise TypeError(f"Missing required argument: {param.name}")
            elif not kwargs:
                args.append(param.default)
        elif param.kind is param.KEYWORD_ONLY:
            if param.name in named:
                kwargs[param.name] = _convert(named.pop(param.name), param.annotation)
            elif param.default is param.empty:
                raise TypeError(f"Missing required argument: {param.name}=...")

    if rest:
        raise TypeError(f"Too many arguments: {' '.join(rest)}")
    return tuple(args), kwargs


def build_usage(command_name: str, func: Any) -> str:
    """'.describe <table> [modifier]' style summary of `func`'s parameters."""
    parts = []
    for param in inspect.signature(func).parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            parts.append(f"[{param.name}...]")
        elif param.kind is param.KEYWORD_ONLY:
            parts.append(f"[{param.name}=...]")
        elif param.kind in _POSITIONAL:
            parts.append(f"<{param.name}>" if param.default is param.empty else f"[{param.name}]")
    return " ".join([command_name, *parts])
