"""histfile - Persistent command history for interactive line editors.

Stores an ordered, timestamped command history in a flat text file:

    #1735300800000
    git status
    #1735300812345
    make test

Layers:
    core/       Entry store, file format codec, FileHistory
    frontends/  prompt_toolkit integration and the ``histfile`` CLI

Quick Start:
    >>> from histfile import FileHistory
    >>> history = FileHistory("~/.myapp_history")
    >>> history.add("git status")
    >>> history.flush()

With prompt_toolkit:
    >>> from prompt_toolkit import PromptSession
    >>> from histfile.frontends.prompt import PersistentPromptHistory
    >>> session = PromptSession(history=PersistentPromptHistory(history))
"""

from histfile.__version__ import __version__
from histfile.core import (
    Entry,
    EntryStore,
    FileHistory,
    FormatError,
    HistoryError,
    HistoryFileError,
)

__all__ = [
    "__version__",
    "Entry",
    "EntryStore",
    "FileHistory",
    "FormatError",
    "HistoryError",
    "HistoryFileError",
]
