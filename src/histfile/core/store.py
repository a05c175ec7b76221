"""In-memory entry store.

Holds history entries in insertion order. Live additions go through
``append`` which enforces the capacity limit by evicting the oldest
entries; entries restored from disk go through ``restore_append`` which
never evicts, so a load keeps every persisted entry.
"""

from __future__ import annotations

from collections.abc import Iterator

from histfile.core.types import Entry

DEFAULT_MAX_SIZE = 500


class EntryStore:
    """Ordered, optionally size-capped sequence of entries.

    Example:
        >>> store = EntryStore(max_size=2)
        >>> store.append(Entry("ls"))
        >>> store.append(Entry("pwd"))
        >>> store.append(Entry("cd /tmp"))
        >>> [e.value for e in store]
        ['pwd', 'cd /tmp']
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        """Initialize an empty store.

        Args:
            max_size: Capacity applied to live additions. Must be positive.

        Raises:
            ValueError: If max_size is not positive.
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._entries: list[Entry] = []

    @property
    def max_size(self) -> int:
        """Capacity applied to live additions."""
        return self._max_size

    def append(self, entry: Entry) -> None:
        """Add a live entry, evicting the oldest entries beyond capacity."""
        self._entries.append(entry)
        self.trim()

    def restore_append(self, entry: Entry) -> None:
        """Add an entry restored from storage, bypassing capacity."""
        self._entries.append(entry)

    def trim(self) -> int:
        """Evict the oldest entries until the store fits its capacity.

        Returns:
            Number of entries evicted.
        """
        overflow = len(self._entries) - self._max_size
        if overflow <= 0:
            return 0
        del self._entries[:overflow]
        return overflow

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def entries(self) -> list[Entry]:
        """Snapshot of the current entries, oldest first."""
        return list(self._entries)

    def values(self) -> list[str]:
        """Snapshot of the current entry values, oldest first."""
        return [entry.value for entry in self._entries]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"EntryStore(size={len(self._entries)}, max_size={self._max_size})"
