#!/usr/bin/env python3
# dotshell/__init__.py
from __future__ import annotations

"""
dotshell: an interactive SQLite shell with dot-commands and shape-based tab completion.

Keep this module light; subpackages expose their APIs via their own __init__.py files.
"""

__version__ = "0.1.0"
