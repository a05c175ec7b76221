"""histfile command group."""

from __future__ import annotations

import os
from pathlib import Path

import rich_click as click

from histfile.config import HistoryConfig
from histfile.core.persistence import FileHistory
from histfile.core.store import EntryStore
from histfile.core.types import FormatError, HistoryError
from histfile.frontends.cli.output import (
    error_exit,
    format_timestamp,
    output_json_or_table,
    print_table,
)


def _resolve_config(path: str | None) -> HistoryConfig:
    try:
        config = HistoryConfig.from_env()
    except ValueError as e:
        error_exit(str(e))
    if path:
        config.path = Path(path).expanduser()
    return config


def _load(config: HistoryConfig) -> FileHistory:
    try:
        return FileHistory(config.path, store=EntryStore(max_size=config.max_size))
    except HistoryError as e:
        error_exit(str(e))


@click.group()
@click.version_option(package_name="histfile")
@click.option(
    "--log-level", default=None, help="Log level (default: HISTFILE_LOG_LEVEL or WARNING)"
)
def cli(log_level: str | None) -> None:
    """histfile - Persistent command history.

    PATH defaults to **HISTFILE_PATH**, then **~/.histfile_history**.

    **Commands:**

        histfile show     Print the entries of a history file

        histfile purge    Delete a history file

        histfile repl     Prompt loop with persistent history
    """
    from histfile.core.logging_config import configure_logging

    # Library default otherwise: warnings only, via logging.lastResort
    if log_level or os.environ.get("HISTFILE_LOG_LEVEL"):
        configure_logging(level=log_level)


@cli.command("show")
@click.argument("path", required=False)
@click.option("--limit", "-n", type=int, default=None, help="Show only the last N entries")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def history_show(path: str | None, limit: int | None, json_output: bool) -> None:
    """Print the entries of a history file, oldest first.

    **Examples:**

        histfile show

        histfile show ~/.myapp_history --limit 20

        histfile show --json
    """
    config = _resolve_config(path)
    history = _load(config)

    entries = history.entries()
    if limit is not None:
        entries = entries[-limit:] if limit > 0 else []
    start = len(history) - len(entries) + 1

    data = {
        "path": str(history.path),
        "entries": [{"value": e.value, "timestamp": e.timestamp} for e in entries],
    }

    def show_table() -> None:
        if not entries:
            click.echo("No history entries")
            return
        rows = [
            [str(i), format_timestamp(e.timestamp), e.value]
            for i, e in enumerate(entries, start=start)
        ]
        print_table(["#", "TIME", "COMMAND"], rows, widths=[6, 19, 40])

    output_json_or_table(data, json_output, show_table)


@cli.command("purge")
@click.argument("path", required=False)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def history_purge(path: str | None, yes: bool) -> None:
    """Delete a history file.

    A file with malformed lines is deleted too, after a warning.

    **Examples:**

        histfile purge ~/.myapp_history

        histfile purge --yes
    """
    config = _resolve_config(path)
    store = EntryStore(max_size=config.max_size)
    try:
        history = FileHistory(config.path, store=store)
        contents = f"{len(history)} entries"
    except FormatError as e:
        # A malformed file can still be deleted
        click.echo(f"Warning: {e}", err=True)
        history = FileHistory(config.path, store=store, autoload=False)
        contents = "unreadable history"
    except HistoryError as e:
        error_exit(str(e))

    if not yes:
        click.confirm(f"Delete {contents} in {history.path}?", abort=True)

    try:
        history.purge()
    except HistoryError as e:
        error_exit(str(e))

    click.echo(f"Purged {history.path}")


@cli.command("repl")
@click.argument("path", required=False)
def history_repl(path: str | None) -> None:
    """Prompt loop that records every line.

    Up-arrow and Ctrl-R search the persisted history. The file is
    rewritten when the loop ends (Ctrl-D, ``exit`` or ``quit``).

    **Examples:**

        histfile repl

        histfile repl /tmp/scratch_history
    """
    from rich.console import Console

    from histfile.frontends.cli.repl import open_history, run_repl

    config = _resolve_config(path)
    console = Console()
    history = open_history(config.path, config.max_size, console)
    run_repl(history, console=console)
