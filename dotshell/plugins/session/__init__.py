"""Output mode, headers and the open database."""
# dotshell/plugins/session/__init__.py
