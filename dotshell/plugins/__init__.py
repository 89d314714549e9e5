# dotshell/plugins/__init__.py
"""Built-in dot-commands, discovered by dotshell.interface.loader."""
