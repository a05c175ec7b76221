"""Output formatting utilities for CLI commands."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any, NoReturn

import rich_click as click

if TYPE_CHECKING:
    from collections.abc import Callable


def print_table(
    headers: list[str],
    rows: list[list[str]],
    widths: list[int] | None = None,
    separator_width: int = 70,
) -> None:
    """Print a formatted table with headers.

    Args:
        headers: Column header strings
        rows: List of rows, each row is a list of cell values
        widths: Optional column widths. If None, uses header lengths.
        separator_width: Width of the separator line
    """
    if widths is None:
        widths = [len(h) for h in headers]

    # Last column is not padded
    fmt_parts = []
    for i, width in enumerate(widths):
        if i == len(widths) - 1:
            fmt_parts.append("{}")
        else:
            fmt_parts.append(f"{{:<{width}}}")
    fmt = " ".join(fmt_parts)

    click.echo(fmt.format(*headers))
    click.echo("-" * separator_width)

    for row in rows:
        padded_row = list(row) + [""] * (len(headers) - len(row))
        click.echo(fmt.format(*padded_row[: len(headers)]))


def format_timestamp(timestamp: int) -> str:
    """Render an entry timestamp (epoch millis) as local time.

    Legacy entries (timestamp 0) render as "-".
    """
    if timestamp == 0:
        return "-"
    try:
        return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent))


def output_json_or_table(
    data: Any,
    json_flag: bool,
    table_fn: Callable[[], None],
) -> None:
    """Output as JSON if flag is set, otherwise call table function."""
    if json_flag:
        output_json(data)
    else:
        table_fn()


def error_exit(message: str, code: int = 1) -> NoReturn:
    """Print error message and exit with code."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)
