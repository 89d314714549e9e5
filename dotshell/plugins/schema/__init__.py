# dotshell/plugins/schema/__init__.py
from __future__ import annotations

"""
Schema inspection commands:
- table listing and column descriptions
- indexes and CREATE statements
- row counts
"""

CATEGORY_DESCRIPTION = (
    "Inspect tables, columns and indexes of the open database."
)
