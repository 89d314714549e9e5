#!/usr/bin/env python3
# dotshell/__main__.py
from __future__ import annotations

"""
Entry point: python -m dotshell [DATABASE] [--quiet]
"""

import argparse
import sys

from dotshell.boot import boot_sequence
from dotshell.db import close_session
from dotshell.interface import HELP_TEXT, BaseCLI, handle_line, make_cli
from dotshell.ui import colorize, print_line


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dotshell", description="Interactive SQLite shell with dot-commands.")
    parser.add_argument("database", nargs="?",
                        help="database file to open (default: from config, else :memory:)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="do not print boot steps")
    return parser.parse_args(argv)


def repl(cli: BaseCLI) -> None:
    """Read lines until EOF or .exit, printing each result."""
    while True:
        try:
            line = cli.get_line()
        except KeyboardInterrupt:
            continue
        except EOFError:
            print_line()
            return

        try:
            output = handle_line(line)
        except SystemExit:
            return
        if output is None:
            continue
        if output.lstrip().lower().startswith("[error]"):
            print_line(colorize(output, "red"))
        else:
            print_line(output)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    state = boot_sequence(database_path=args.database, quiet=args.quiet)
    print_line(HELP_TEXT)

    cli = make_cli(
        state.completer,
        prompt=state.config.prompt,
        history_path=state.config.history_file_path,
        enable_completion=state.config.enable_completion,
    )
    try:
        with cli:
            repl(cli)
    finally:
        close_session()
    return 0


if __name__ == "__main__":
    sys.exit(main())
