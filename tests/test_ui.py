"""Tests for dotshell.ui tables, colors and logging."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator

import pytest

from dotshell.ui import ColorizingStreamHandler, cell_text, colorize, format_table, init_logger, reset_logger, strip_ansi


@pytest.fixture
def logger_name() -> Iterator[str]:
    yield "dotshell.test-ui"
    reset_logger("dotshell.test-ui")


def test_format_table_boxes_and_aligns() -> None:
    out = format_table([(1, "ada"), (10, None)], headers=["id", "name"])

    assert out.splitlines() == [
        "+----+------+",
        "| id | name |",
        "+----+------+",
        "|  1 | ada  |",
        "| 10 | NULL |",
        "+----+------+",
    ]


def test_format_table_clips_long_cells() -> None:
    out = format_table([["abcdefghij"]], headers=["v"], max_width=6)

    assert "abc..." in out
    assert "abcdefghij" not in out


def test_format_table_ignores_ansi_in_widths() -> None:
    out = format_table([[colorize("ok", "green")], ["fail"]])

    assert {len(strip_ansi(line)) for line in out.splitlines()} == {8}


def test_cell_text() -> None:
    assert cell_text(None) == "NULL"
    assert cell_text(b"\x01\xff") == "01ff"
    assert cell_text(1.5) == "1.5"


def test_colorize_unknown_style_is_plain() -> None:
    assert colorize("x", "nope") == "x"
    assert strip_ansi(colorize("x", "red", "bold")) == "x"


def test_init_logger_is_idempotent(logger_name: str, tmp_path: Path) -> None:
    logfile = tmp_path / "shell.log"

    first = init_logger(logger_name, level="info", logfile=str(logfile))
    second = init_logger(logger_name, level="error", logfile=str(logfile))

    assert first is second
    assert len(second.handlers) == 2
    assert not second.propagate
    console = next(h for h in second.handlers if isinstance(h, ColorizingStreamHandler))
    assert console.level == logging.ERROR

    second.debug("written to the file only")
    for handler in second.handlers:
        handler.flush()
    assert "written to the file only" in logfile.read_text(encoding="utf-8")


def test_console_handler_colors_by_level(logger_name: str) -> None:
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.use_color = True
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    logger.propagate = False

    logger.warning("careful")

    assert stream.getvalue() == "\x1b[33mcareful\x1b[0m\n"


def test_unknown_level_is_rejected(logger_name: str) -> None:
    with pytest.raises(ValueError):
        init_logger(logger_name, level="LOUD")


def test_reset_logger_restores_propagation(logger_name: str) -> None:
    init_logger(logger_name)
    reset_logger(logger_name)

    logger = logging.getLogger(logger_name)
    assert logger.handlers == []
    assert logger.propagate
