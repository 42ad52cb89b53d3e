"""Multi-term substring search over entries.

An entry matches when every whitespace-separated term of the query appears,
case-insensitively, in its topic, content or link. Results are memoized per
normalized query in an :class:`~learnlog.core.utils.cache.LRUCache`.

The cache has no way of knowing that the entry list changed: the owner must
call :meth:`SearchEngine.clear_cache` after every mutation.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from learnlog.core.utils.cache import LRUCache

from .models import Entry


def normalize_query(query: str) -> str:
    return query.strip().lower()


def tokenize(query: str) -> list[str]:
    """Split a query into lower-cased, non-empty terms."""
    return normalize_query(query).split()


def matches(entry: Entry, terms: Sequence[str]) -> bool:
    """True if every term is a substring of the entry's searchable text."""
    text = entry.search_text()
    return all(term in text for term in terms)


class SearchEngine:
    """Cached AND-search over a sequence of entries.

    Example::

        engine = SearchEngine(cache_size=50)
        results = engine.search("python async", store.get_entries())
    """

    def __init__(self, cache_size: int = 50):
        self._cache = LRUCache(cache_size)

    @property
    def cache_size(self) -> int:
        """Number of queries currently cached."""
        return self._cache.size

    def search(self, query: str, entries: Sequence[Entry]) -> Sequence[Entry]:
        """Return the entries matching *query*, in their original order.

        A blank query clears the cache and returns *entries* itself. Cached
        results are shared between calls; treat them as read-only.
        """
        key = normalize_query(query)
        if not key:
            self._cache.clear()
            return entries

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        terms = key.split()
        results = tuple(entry for entry in entries if matches(entry, terms))
        self._cache.set(key, results)
        logger.debug(f"Search '{key}': {len(results)}/{len(entries)} entries")
        return results

    def clear_cache(self) -> None:
        self._cache.clear()
