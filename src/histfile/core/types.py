"""Pure data types for histfile.core.

Entry is the unit of history; the error classes are the whole error
taxonomy of the persistence layer.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """One historical command.

    Attributes:
        value: The command text, always a single line.
        timestamp: Milliseconds since the epoch, or 0 for entries restored
            from the legacy (untimestamped) format.
    """

    value: str
    timestamp: int = 0

    @classmethod
    def now(cls, value: str) -> Entry:
        """Create an entry stamped with the current time."""
        return cls(value=value, timestamp=int(time.time() * 1000))


class HistoryError(Exception):
    """Base error for history persistence."""


class HistoryFileError(HistoryError, OSError):
    """Filesystem failure while reading, writing or deleting history.

    Raised when:
    - The history file exists but cannot be read
    - The history file cannot be written during flush
    - The history file cannot be deleted during purge
    """


class FormatError(HistoryError, ValueError):
    """Malformed marker line in a history file.

    Attributes:
        line_number: 1-based line number of the offending line.
        line: The offending line text.
    """

    def __init__(self, message: str, line_number: int = 0, line: str = "") -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line
