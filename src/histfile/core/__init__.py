"""Core history persistence.

Pure library code: no environment variables, no terminal I/O.

    types.py        Entry and the error classes
    store.py        EntryStore (in-memory, capacity-aware)
    codec.py        Marker/item line format (decode, encode)
    persistence.py  FileHistory (load, flush, purge)

Example:
    >>> from histfile.core import FileHistory
    >>> history = FileHistory("~/.myapp_history")
    >>> history.add("make test")
    >>> history.flush()
"""

from histfile.core.codec import (
    DecodeState,
    LineKind,
    decode,
    decode_text,
    encode,
    encode_text,
    iter_entries,
    write_entries,
)
from histfile.core.persistence import FileHistory
from histfile.core.store import DEFAULT_MAX_SIZE, EntryStore
from histfile.core.types import Entry, FormatError, HistoryError, HistoryFileError

__all__ = [
    # Types
    "Entry",
    # Errors
    "HistoryError",
    "HistoryFileError",
    "FormatError",
    # Store
    "EntryStore",
    "DEFAULT_MAX_SIZE",
    # Codec
    "DecodeState",
    "LineKind",
    "decode",
    "decode_text",
    "encode",
    "encode_text",
    "iter_entries",
    "write_entries",
    # Persistence
    "FileHistory",
]
