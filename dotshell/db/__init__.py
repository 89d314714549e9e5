#!/usr/bin/env python3
# dotshell/db/__init__.py
from __future__ import annotations

"""
Package for database access and configuration.

Provides:
- Configuration loader with file and environment overrides (`config`).
- SQLite catalog and statement helpers (`db`).
- The process-wide shell session (`session`).
"""


from .config import AppConfig, OUTPUT_MODES, load_config, validate_or_default_config
from .db import (
    open_database,
    quote_identifier,
    list_tables,
    table_exists,
    describe_table,
    list_indexes,
    table_schema,
    count_rows,
    run_sql,
)
from .session import Session, open_session, get_session, close_session, session_tables

__all__ = [
    "AppConfig",
    "OUTPUT_MODES",
    "load_config",
    "validate_or_default_config",
    "open_database",
    "quote_identifier",
    "list_tables",
    "table_exists",
    "describe_table",
    "list_indexes",
    "table_schema",
    "count_rows",
    "run_sql",
    "Session",
    "open_session",
    "get_session",
    "close_session",
    "session_tables",
]
