from __future__ import annotations

from typing import Iterator

import pytest

from dotshell.commands import REGISTRY, CommandRegistry
from dotshell.db import Session, close_session, open_session
from dotshell.interface import load_commands


@pytest.fixture
def session() -> Iterator[Session]:
    """Fresh in-memory session with a small schema."""
    current = open_session(":memory:", mode="list", headers=False)
    current.connection.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            team_id INTEGER REFERENCES teams(id)
        );
        CREATE TABLE teams (id INTEGER PRIMARY KEY, title TEXT DEFAULT 'misc');
        CREATE TABLE uploads (id INTEGER PRIMARY KEY, user_id INTEGER);
        CREATE INDEX idx_users_name ON users(name);
        INSERT INTO teams (id, title) VALUES (1, 'core');
        INSERT INTO users (id, name, team_id) VALUES (1, 'ada', 1), (2, 'bob', NULL);
        """
    )
    yield current
    close_session()


@pytest.fixture
def registry() -> CommandRegistry:
    """Registry holding the built-in plugin commands only."""
    fresh = CommandRegistry()
    load_commands("dotshell.plugins", registry=fresh)
    return fresh


@pytest.fixture
def global_registry() -> CommandRegistry:
    """The process-wide REGISTRY with built-in plugins loaded (idempotent)."""
    load_commands("dotshell.plugins")
    return REGISTRY
