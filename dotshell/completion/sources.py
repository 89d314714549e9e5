#!/usr/bin/env python3
# dotshell/completion/sources.py
from __future__ import annotations

"""
Candidate sources.

A source wraps an ordered collection of choices. The collection can be fixed
(e.g. output modes) or produced by a supplier that is called on every request
(e.g. the current list of tables in the session database).
"""

from typing import Callable, Iterable, Union

ChoiceSupplier = Callable[[], Iterable[str]]
Choices = Union[Iterable[str], ChoiceSupplier]


def filter_prefix(candidates: Iterable[str], prefix: str) -> list[str]:
    """
    Return the distinct candidates starting with `prefix`, in source order.

    An empty prefix keeps every candidate.
    """
    unique = dict.fromkeys(candidates)
    if not prefix:
        return list(unique)
    return [candidate for candidate in unique if candidate.startswith(prefix)]


class ListSource:
    """List-backed candidate source with prefix filtering."""

    def __init__(self, choices: Choices) -> None:
        if callable(choices):
            self._supplier: ChoiceSupplier | None = choices
            self._static: tuple[str, ...] = ()
        else:
            self._supplier = None
            # Materialize once; generators would otherwise be exhausted.
            self._static = tuple(choices)

    @property
    def is_dynamic(self) -> bool:
        return self._supplier is not None

    def choices(self) -> list[str]:
        """Return the full, de-duplicated choice list."""
        raw = self._supplier() if self._supplier is not None else self._static
        return list(dict.fromkeys(raw))

    def complete(self, prefix: str = "") -> list[str]:
        """Return the choices completing `prefix` (may raise for dynamic sources)."""
        return filter_prefix(self.choices(), prefix)

    def __repr__(self) -> str:
        kind = "dynamic" if self.is_dynamic else f"{len(self._static)} choices"
        return f"ListSource({kind})"
