#!/usr/bin/env python3
# dotshell/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline (basic completion + history)
    3) plain input (last resort)
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from dotshell.completion import Completer as LineCompleter
from dotshell.completion import current_fragment, tokenize as tokenize_buffer

logger = logging.getLogger("dotshell.cli")

DEFAULT_PROMPT = "dotshell> "
DEFAULT_HISTORY_FILE_PATH = Path.home() / ".dotshell_history"


def safe_complete(completer: LineCompleter, line: str, cursor: int) -> list[str]:
    """Run a completion request; a failure must never abort the editing session."""
    try:
        return completer.complete(line, cursor)
    except Exception:  # noqa: BLE001
        logger.warning("Completion failed for %r", line, exc_info=True)
        return []


class BaseCLI:
    """
    Base interface for CLI frontends; also the plain-input fallback.

    Subclasses may override:
        - setup()
        - get_line()
        - teardown()

    Context manager support guarantees teardown.
    """

    def __init__(self, prompt: str | None = None) -> None:
        self.prompt = prompt or DEFAULT_PROMPT

    def setup(self) -> None:
        ...

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        ...

    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError:
            logger.debug("CLI teardown failed", exc_info=True)


def make_prompt_completer(completer: LineCompleter | None = None):
    """Wrap the line completer in a prompt_toolkit Completer."""
    from prompt_toolkit.completion import Completer, Completion

    line_completer = completer or LineCompleter()

    class _Completer(Completer):
        def get_completions(self, document, complete_event) -> Iterable[Completion]:
            line, cursor = document.text, document.cursor_position
            # replace exactly the fragment before the cursor
            fragment = current_fragment(tokenize_buffer(line, cursor))
            for word in safe_complete(line_completer, line, cursor):
                yield Completion(word, start_position=-len(fragment))

    return _Completer()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(
        self,
        completer: LineCompleter | None = None,
        *,
        prompt: str | None = None,
        history_path: Path | None = DEFAULT_HISTORY_FILE_PATH,
        enable_completion: bool = True,
    ) -> None:
        super().__init__(prompt)
        import prompt_toolkit  # noqa: F401

        self.history_path = history_path
        self.completer = make_prompt_completer(completer) if enable_completion else None
        self._session = None

    def setup(self) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit.history import FileHistory, InMemoryHistory

        if self.history_path:
            self.history_path.parent.mkdir(parents=True, exist_ok=True)
            self.history_path.touch(exist_ok=True)
            history = FileHistory(str(self.history_path))
        else:
            history = InMemoryHistory()
        self._session = PromptSession(history=history)

    def get_line(self) -> str:
        if self._session is None:
            self.setup()
        return self._session.prompt(
            self.prompt,
            completer=self.completer,
            complete_while_typing=False,  # tab-triggered, like readline
        )


# ===== Fallback: readline =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(
        self,
        completer: LineCompleter | None = None,
        *,
        prompt: str | None = None,
        history_path: Path | None = DEFAULT_HISTORY_FILE_PATH,
        enable_completion: bool = True,
    ) -> None:
        super().__init__(prompt)
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self.history_path = history_path
        self.enable_completion = enable_completion
        self._line_completer = completer or LineCompleter()
        self._matches: list[str] = []

    def _complete(self, text_fragment: str, state_index: int) -> Optional[str]:
        # readline asks for state 0, 1, 2, ... until None; compute once per request
        if state_index == 0:
            buffer_text = self.readline.get_line_buffer()
            cursor = self.readline.get_endidx()
            self._matches = safe_complete(self._line_completer, buffer_text, cursor)
        return self._matches[state_index] if state_index < len(self._matches) else None

    def setup(self) -> None:
        if self.history_path:
            self.history_path.parent.mkdir(parents=True, exist_ok=True)
            self.history_path.touch(exist_ok=True)
            try:
                self.readline.read_history_file(str(self.history_path))
            except OSError:
                logger.debug("Could not read history file %s", self.history_path)

        if not self.enable_completion:
            return
        # Whitespace only: the completion tokenizer owns every other character
        self.readline.set_completer_delims(" \t\n")
        self.readline.set_completer(self._complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        if self.history_path:
            self.readline.write_history_file(str(self.history_path))


def make_cli(
    completer: LineCompleter | None = None,
    *,
    prompt: str | None = None,
    history_path: Path | None = DEFAULT_HISTORY_FILE_PATH,
    enable_completion: bool = True,
) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    options = dict(prompt=prompt, history_path=history_path,
                   enable_completion=enable_completion)
    try:
        return PromptToolkitCLI(completer, **options)
    except ImportError:
        logger.info("prompt_toolkit unavailable; trying readline")
    try:
        return ReadlineCLI(completer, **options)
    except ImportError:
        logger.info("readline unavailable; using plain input")
    return BaseCLI(prompt)
