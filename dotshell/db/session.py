#!/usr/bin/env python3
# dotshell/db/session.py
from __future__ import annotations

"""
Process-wide shell session: the open database plus output settings.

Commands and completion sources reach the session through get_session(),
the same way the rest of the shell reaches the global command REGISTRY.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

from .db import list_tables, open_database

logger = logging.getLogger("dotshell.db")


@dataclass(slots=True)
class Session:
    connection: sqlite3.Connection
    path: str
    mode: str = "list"
    headers: bool = False

    def tables(self) -> list[str]:
        """Current table list (used as a live completion source)."""
        return list_tables(self.connection)

    def close(self) -> None:
        self.connection.close()


_SESSION: Optional[Session] = None


def open_session(path: str = ":memory:", *, mode: str | None = None, headers: bool | None = None) -> Session:
    """Open `path` as the current session, closing any previous one and keeping its settings."""
    global _SESSION
    previous = _SESSION
    connection = open_database(path)
    session = Session(
        connection=connection,
        path=path,
        mode=mode if mode is not None else (previous.mode if previous else "list"),
        headers=headers if headers is not None else (previous.headers if previous else False),
    )
    if previous is not None:
        previous.close()
    _SESSION = session
    logger.info("Opened database %s", path)
    return session


def get_session() -> Session:
    """Return the current session, opening an in-memory database on first use."""
    if _SESSION is None:
        return open_session()
    return _SESSION


def close_session() -> None:
    global _SESSION
    if _SESSION is not None:
        _SESSION.close()
        logger.info("Closed database %s", _SESSION.path)
        _SESSION = None


def session_tables() -> list[str]:
    """Completion supplier: tables of the open database, none when nothing is open."""
    if _SESSION is None:
        return []
    return _SESSION.tables()
