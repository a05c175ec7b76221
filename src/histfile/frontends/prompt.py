"""prompt_toolkit integration.

PersistentPromptHistory lets a PromptSession use a FileHistory for its
up-arrow/search history:

    >>> history = FileHistory("~/.myapp_history")
    >>> session = PromptSession(history=PersistentPromptHistory(history))
    >>> atexit.register(history.flush)

The adapter never writes to disk itself; the host flushes the
FileHistory when it is done.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from prompt_toolkit.history import History

from histfile.core.persistence import FileHistory

logger = logging.getLogger(__name__)


class PersistentPromptHistory(History):
    """prompt_toolkit History backed by a FileHistory.

    Multi-line inputs are kept for the running session by prompt_toolkit
    but are not recorded in the FileHistory, since the file format holds
    one line per value. Inputs listed in ``skip`` (compared after
    stripping whitespace) are not recorded either.
    """

    def __init__(self, file_history: FileHistory, skip: Iterable[str] = ()) -> None:
        super().__init__()
        self.file_history = file_history
        self.skip = frozenset(skip)

    def load_history_strings(self) -> Iterable[str]:
        """Yield stored values, most recent first."""
        for entry in reversed(self.file_history.entries()):
            yield entry.value

    def store_string(self, string: str) -> None:
        """Record a submitted input."""
        if "\n" in string or "\r" in string:
            logger.debug("Not recording multi-line input in %s", self.file_history.path)
            return
        if string.strip() in self.skip:
            return
        self.file_history.add(string)
