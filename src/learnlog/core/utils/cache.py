"""
Bounded in-memory cache with least-recently-used eviction.

Recency lives in the ordering of an ``OrderedDict``: the first key is the
least recently used, the last key the most recently used. Both ``get`` and
``set`` are O(1).
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable
from typing import Any


class LRUCache:
    """Fixed-capacity key -> value cache with strict LRU eviction.

    Example::

        cache = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")      # "a" is now most recently used
        cache.set("c", 3)   # evicts "b"
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self._data: OrderedDict[Hashable, Any] = OrderedDict()

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value and mark *key* most recently used.

        A miss returns *default* and leaves the cache untouched.
        """
        if key not in self._data:
            return default
        self._data.move_to_end(key)
        return self._data[key]

    def set(self, key: Hashable, value: Any) -> None:
        """Store *value*, evicting the least recently used key when full."""
        if key in self._data:
            self._data.move_to_end(key)
        elif len(self._data) >= self.capacity:
            self._data.popitem(last=False)
        self._data[key] = value

    def clear(self) -> None:
        """Drop every cached key."""
        self._data.clear()

    @property
    def size(self) -> int:
        return len(self._data)

    def keys(self) -> list[Hashable]:
        """Keys ordered from least to most recently used."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
