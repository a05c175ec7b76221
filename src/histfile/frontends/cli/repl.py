"""Prompt loop with persistent history."""

from __future__ import annotations

import logging
import os
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.history import History, InMemoryHistory
from rich.console import Console
from rich.markup import escape

from histfile.core.persistence import FileHistory
from histfile.core.store import EntryStore
from histfile.core.types import HistoryError
from histfile.frontends.prompt import PersistentPromptHistory

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit", ":q"})


def open_history(
    path: str | os.PathLike[str], max_size: int, console: Console
) -> FileHistory | None:
    """Load the history file, or report why it could not be loaded.

    Returns:
        The loaded FileHistory, or None if loading failed. The caller then
        runs without persistence so the unreadable file is left untouched.
    """
    try:
        return FileHistory(path, store=EntryStore(max_size=max_size))
    except HistoryError as e:
        logger.warning("History not loaded: %s", e)
        console.print(f"[yellow]Warning: history not loaded ({escape(str(e))})[/]")
        console.print("[dim]Continuing without saving history for this session[/]")
        return None


def run_repl(
    history: FileHistory | None,
    session: Any = None,
    console: Console | None = None,
    message: str = "> ",
) -> int:
    """Read lines until EOF or an exit command, recording each one.

    The history file is flushed once when the loop ends.

    Args:
        history: FileHistory to record into, or None for no persistence.
        session: PromptSession (or anything with ``prompt()``). Built on
            demand if not given.
        console: Console for status output.
        message: Prompt text.

    Returns:
        Number of lines read.
    """
    console = console or Console()
    if session is None:
        prompt_history: History = (
            PersistentPromptHistory(history, skip=EXIT_COMMANDS)
            if history is not None
            else InMemoryHistory()
        )
        session = PromptSession(history=prompt_history)

    count = 0
    try:
        while True:
            try:
                line = session.prompt(message)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if line.strip() in EXIT_COMMANDS:
                break
            if line.strip():
                count += 1
    finally:
        if history is not None:
            try:
                history.flush()
                path = escape(str(history.path))
                console.print(f"[dim]Saved {len(history)} entries to {path}[/]")
            except HistoryError as e:
                console.print(f"[red]Error: failed to save history: {escape(str(e))}[/]")

    return count
