"""File-backed history persistence.

FileHistory binds an EntryStore to a history file. The file is loaded
once when the FileHistory is created; after that the store is the source
of truth and ``flush()`` rewrites the whole file from it. Nothing is
saved automatically: hosts should call ``flush()`` before exit, for
example from an ``atexit`` handler.

Error Handling Policy: FAIL-LOUD
- Read, write and delete failures raise HistoryFileError
- Malformed files raise FormatError
- Only directory and file pre-creation in flush() is logged and skipped,
  since the write that follows reports the real failure
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from histfile.core.codec import iter_entries, write_entries
from histfile.core.store import EntryStore
from histfile.core.types import Entry, HistoryFileError


class FileHistory:
    """History backed by a flat text file.

    Not thread-safe: callers must serialize mutation of the store and
    calls to ``flush()``/``purge()``.

    Example:
        >>> history = FileHistory("~/.myapp_history")
        >>> history.add("ls -la")
        >>> history.flush()
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        store: EntryStore | None = None,
        logger: logging.Logger | None = None,
        autoload: bool = True,
    ) -> None:
        """Bind to a history file and load it if it exists.

        Args:
            path: History file location. ``~`` is expanded.
            store: Store to load into. Defaults to a new EntryStore.
            logger: Logger for trace and warning messages. Defaults to
                this module's logger.
            autoload: Load the file now. Pass False to bind without reading,
                for example to purge a file that no longer parses.

        Raises:
            HistoryFileError: If the file exists but cannot be read or decoded.
            FormatError: If the file contains a malformed marker line.
        """
        self._path = Path(path).expanduser()
        self._store = store if store is not None else EntryStore()
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        if autoload:
            self.load()

    @property
    def path(self) -> Path:
        """The bound history file."""
        return self._path

    @property
    def store(self) -> EntryStore:
        """The in-memory entry store."""
        return self._store

    def load(self, path: str | os.PathLike[str] | None = None) -> int:
        """Append the entries of a history file to the store.

        Does nothing if the file does not exist. Entries bypass the store's
        capacity, so every persisted entry is kept.

        Args:
            path: File to read. Defaults to the bound path.

        Returns:
            Number of entries loaded.

        Raises:
            HistoryFileError: If the file cannot be read or is not valid text
                in the platform default encoding.
            FormatError: On a malformed marker line. Entries decoded before
                that line remain in the store.
        """
        source = Path(path).expanduser() if path is not None else self._path
        try:
            if not source.exists():
                return 0

            self._logger.debug("Loading history from: %s", source)
            with open(source) as f:
                return self.load_stream(f)
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryFileError(f"Failed to read history file {source}: {e}") from e

    def load_stream(self, lines: Iterable[str]) -> int:
        """Append the entries decoded from a text stream to the store.

        Args:
            lines: Open text stream or any iterable of lines.

        Returns:
            Number of entries loaded.

        Raises:
            FormatError: On a malformed marker line.
        """
        count = 0
        for entry in iter_entries(lines):
            self._store.restore_append(entry)
            count += 1
        return count

    def flush(self) -> None:
        """Rewrite the history file from the store.

        Creates the parent directory and the file when missing. The file
        is always fully overwritten, never appended to.

        Raises:
            HistoryFileError: If the file cannot be written, or a value cannot
                be encoded in the platform default encoding.
        """
        self._logger.debug("Flushing history to: %s", self._path)

        if not self._exists():
            parent = self._path.parent
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self._logger.warning("Failed to create directory: %s (%s)", parent, e)
            try:
                self._path.touch()
            except OSError as e:
                self._logger.warning("Failed to create file: %s (%s)", self._path, e)

        try:
            with open(self._path, "w") as out:
                write_entries(out, self._store)
        except (OSError, UnicodeEncodeError) as e:
            raise HistoryFileError(f"Failed to write history file {self._path}: {e}") from e

    def _exists(self) -> bool:
        # Unsearchable parents make exists() raise on older Pythons
        try:
            return self._path.exists()
        except OSError:
            return False

    def purge(self) -> None:
        """Clear the store and delete the history file.

        The store is cleared first and stays cleared even when the delete
        fails.

        Raises:
            HistoryFileError: If the file cannot be deleted, including when
                it does not exist.
        """
        self._logger.debug("Purging history: %s", self._path)

        self._store.clear()

        try:
            self._path.unlink()
        except OSError as e:
            raise HistoryFileError(f"Failed to delete history file {self._path}: {e}") from e

    def add(self, value: str) -> Entry:
        """Record a live command, stamped with the current time."""
        entry = Entry.now(value)
        self._store.append(entry)
        return entry

    def entries(self) -> list[Entry]:
        """Snapshot of the stored entries, oldest first."""
        return self._store.entries()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"FileHistory(path={str(self._path)!r}, entries={len(self._store)})"
