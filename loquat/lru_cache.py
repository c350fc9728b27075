"""A fixed-capacity cache that evicts the least recently used entry."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, Iterator, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_CAPACITY_ERROR = "LRU cache capacity must be greater than 0"


class LruCache(Generic[K, V]):
    """Least-recently-used cache with a fixed capacity."""

    def __init__(self, capacity: int = 1000) -> None:
        if capacity <= 0:
            raise ValueError(_CAPACITY_ERROR)
        self._capacity = capacity
        # Least recently used first, most recently used last.
        self._entries: OrderedDict[K, V] = OrderedDict()

    def insert(self, key: K, value: V) -> V | None:
        """Store a value; return the evicted value if the cache was full."""
        if key in self._entries:
            self._entries[key] = value
            self._entries.move_to_end(key)
            return None
        evicted = None
        if len(self._entries) >= self._capacity:
            _, evicted = self._entries.popitem(last=False)
        self._entries[key] = value
        return evicted

    def get(self, key: K) -> V | None:
        """Return the value for key and mark it most recently used."""
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def peek(self, key: K) -> V | None:
        """Return the value for key without changing the usage order."""
        return self._entries.get(key)

    def remove(self, key: K) -> V | None:
        """Remove key and return its value, if present."""
        return self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def most_recent(self) -> K | None:
        return next(reversed(self._entries), None)

    def least_recent(self) -> K | None:
        return next(iter(self._entries), None)

    @property
    def capacity(self) -> int:
        return self._capacity

    def set_capacity(self, new_capacity: int) -> None:
        """Change the capacity, evicting least recently used entries as needed."""
        if new_capacity <= 0:
            raise ValueError(_CAPACITY_ERROR)
        while len(self._entries) > new_capacity:
            self._entries.popitem(last=False)
        self._capacity = new_capacity

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"LruCache(capacity={self._capacity}, entries={dict(self._entries)!r})"