"""History file format codec.

The on-disk format is line oriented, two lines per entry:

    #<timestamp>
    <value>

A line starting with ``#`` is a marker line carrying the timestamp of the
item line that follows it. Any other line is an item line holding the
literal entry value. Bare item lines with no preceding marker are the
legacy format and decode with timestamp 0.

Decoding is a two-state machine driven by an explicit transition table:

    AWAITING_TIMESTAMP + MARKER -> capture timestamp  -> AWAITING_ITEM
    AWAITING_TIMESTAMP + ITEM   -> emit (value, 0)    -> AWAITING_TIMESTAMP
    AWAITING_ITEM      + MARKER -> replace timestamp  -> AWAITING_ITEM
    AWAITING_ITEM      + ITEM   -> emit (value, ts)   -> AWAITING_TIMESTAMP

A marker at end of input has no item to stamp and is dropped.
"""

from __future__ import annotations

import io
import re
from collections.abc import Iterable, Iterator
from enum import Enum, auto
from typing import TextIO

from histfile.core.types import Entry, FormatError

MARKER_PREFIX = "#"

# Digits with an optional sign; int() alone would also accept whitespace and "_"
TIMESTAMP_PATTERN = re.compile(r"[+-]?[0-9]+")


class DecodeState(Enum):
    """Decoder states."""

    AWAITING_TIMESTAMP = auto()
    AWAITING_ITEM = auto()  # A timestamp has been captured


class LineKind(Enum):
    """Classification of an input line."""

    MARKER = auto()
    ITEM = auto()


class Action(Enum):
    """What the decoder does with a line."""

    CAPTURE_TIMESTAMP = auto()
    EMIT_LEGACY = auto()
    EMIT_STAMPED = auto()


TRANSITIONS: dict[tuple[DecodeState, LineKind], tuple[Action, DecodeState]] = {
    (DecodeState.AWAITING_TIMESTAMP, LineKind.MARKER): (
        Action.CAPTURE_TIMESTAMP,
        DecodeState.AWAITING_ITEM,
    ),
    (DecodeState.AWAITING_TIMESTAMP, LineKind.ITEM): (
        Action.EMIT_LEGACY,
        DecodeState.AWAITING_TIMESTAMP,
    ),
    # Consecutive markers: the last one wins
    (DecodeState.AWAITING_ITEM, LineKind.MARKER): (
        Action.CAPTURE_TIMESTAMP,
        DecodeState.AWAITING_ITEM,
    ),
    (DecodeState.AWAITING_ITEM, LineKind.ITEM): (
        Action.EMIT_STAMPED,
        DecodeState.AWAITING_TIMESTAMP,
    ),
}


def classify(line: str) -> LineKind:
    """Classify a line (without terminator) as marker or item."""
    return LineKind.MARKER if line.startswith(MARKER_PREFIX) else LineKind.ITEM


def parse_timestamp(line: str, line_number: int = 0) -> int:
    """Parse the timestamp carried by a marker line.

    Args:
        line: Marker line including the leading ``#``.
        line_number: 1-based position, used in the error.

    Returns:
        The timestamp.

    Raises:
        FormatError: If the text after ``#`` is not a decimal integer.
    """
    text = line[len(MARKER_PREFIX) :]
    if not TIMESTAMP_PATTERN.fullmatch(text):
        raise FormatError(
            f"Invalid timestamp on line {line_number}: {line!r}",
            line_number=line_number,
            line=line,
        )
    return int(text)


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def iter_entries(lines: Iterable[str]) -> Iterator[Entry]:
    """Decode lines into entries lazily.

    Lines may keep their line terminators, so an open text file can be
    passed directly. Entries already yielded stay with the consumer if a
    later line raises.

    Args:
        lines: Input lines in file order.

    Yields:
        Decoded entries in file order.

    Raises:
        FormatError: On the first marker line with a malformed timestamp.
    """
    state = DecodeState.AWAITING_TIMESTAMP
    timestamp = 0

    for line_number, raw in enumerate(lines, start=1):
        line = _strip_terminator(raw)
        action, state = TRANSITIONS[(state, classify(line))]

        if action is Action.CAPTURE_TIMESTAMP:
            timestamp = parse_timestamp(line, line_number)
        elif action is Action.EMIT_LEGACY:
            yield Entry(value=line, timestamp=0)
        else:
            yield Entry(value=line, timestamp=timestamp)


def decode(lines: Iterable[str]) -> list[Entry]:
    """Decode lines into a list of entries.

    All or nothing: when a line is malformed the error propagates and no
    entries are returned.

    Raises:
        FormatError: On a malformed marker line.
    """
    return list(iter_entries(lines))


def decode_text(text: str) -> list[Entry]:
    """Decode the full contents of a history file."""
    return decode(io.StringIO(text))


def encode(entries: Iterable[Entry]) -> Iterator[str]:
    """Encode entries as lines, without line terminators.

    Values are written verbatim. A value containing a newline cannot be
    decoded back to the same entry.
    """
    for entry in entries:
        yield f"{MARKER_PREFIX}{entry.timestamp}"
        yield entry.value


def encode_text(entries: Iterable[Entry]) -> str:
    """Encode entries as the full contents of a history file."""
    return "".join(f"{line}\n" for line in encode(entries))


def write_entries(stream: TextIO, entries: Iterable[Entry]) -> int:
    """Write encoded entries to a text stream.

    Returns:
        Number of lines written.
    """
    count = 0
    for line in encode(entries):
        stream.write(line)
        stream.write("\n")
        count += 1
    return count
