"""Diary: the application layer around the entry store.

Composes the store, search engine, validator and statistics, and turns
outcomes into user notifications. It subscribes to the store so that the
search cache, the current results and the statistics are refreshed after
every change, whoever made it.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any

from loguru import logger

from learnlog.core.events import DATA_ACTIONS, StoreAction
from learnlog.core.exceptions import ImportFormatError
from learnlog.core.notifications import NotificationLevel, Notifier, log_notifier

from .models import EDITABLE_FIELDS, Entry, EntryStats, IdGenerator
from .search import SearchEngine
from .stats import calculate_stats, entries_on, group_by_date
from .store import EntryStore
from .transfer import export_entries, merge_import
from .validation import Validator

# persisted JSON key -> field name
_FIELD_ALIASES = {"imageUrl": "image_url"}


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Diary:
    """User-level operations on a learning diary.

    Args:
        store: The entry store. Owned by the caller; the diary subscribes to it.
        search: Search engine; a default one is created if omitted.
        validator: Entry validator with the configured length bounds.
        notifier: Where user-facing messages go.
        clock: Wall clock in seconds, used for ids, timestamps and "today".
    """

    def __init__(
        self,
        store: EntryStore,
        search: SearchEngine | None = None,
        validator: Validator | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.search_engine = search or SearchEngine()
        self.validator = validator or Validator()
        self.notify = notifier if notifier is not None else log_notifier
        self.clock = clock
        self.ids = IdGenerator(clock)
        self.query = ""
        self.results: Sequence[Entry] = ()
        self.stats = EntryStats()
        self._unsubscribe = store.subscribe(self._on_store_change)
        self._observe_ids()
        self.refresh()

    # -- Derived state ------------------------------------------------------

    def now(self) -> datetime:
        return datetime.fromtimestamp(self.clock())

    def refresh(self) -> None:
        """Recompute the current search results and statistics."""
        entries = self.store.get_entries()
        self.results = self.search_engine.search(self.query, entries)
        self.stats = calculate_stats(entries, now=self.now())

    def _observe_ids(self) -> None:
        for entry in self.store.get_entries():
            self.ids.observe(entry.id)

    def _on_store_change(self, action: StoreAction, payload: Any) -> None:
        if action in DATA_ACTIONS:
            self.search_engine.clear_cache()
            if action is StoreAction.LOAD:
                self._observe_ids()
            self.refresh()
        elif action is StoreAction.DELETE_CONFIRMED:
            logger.debug(f"Entry {payload} can no longer be restored")

    def close(self) -> None:
        """Stop listening to the store."""
        self._unsubscribe()

    # -- Queries ------------------------------------------------------------

    def search(self, query: str) -> Sequence[Entry]:
        """Set the current query and return its results."""
        self.query = query
        self.results = self.search_engine.search(query, self.store.get_entries())
        return self.results

    def entries_by_day(self) -> dict[date, list[Entry]]:
        return group_by_date(self.results)

    def entries_on(self, day: date) -> list[Entry]:
        return entries_on(self.store.get_entries(), day)

    def get(self, entry_id: int) -> Entry | None:
        return self.store.get_entry_by_id(entry_id)

    # -- Commands -----------------------------------------------------------

    def create_entry(
        self,
        topic: str,
        content: str,
        link: str | None = None,
        image_url: str | None = None,
    ) -> Entry | None:
        """Validate and add a new entry. Returns None if validation failed."""
        data = {
            "topic": _clean(topic),
            "content": _clean(content),
            "link": _clean(link),
            "image_url": _clean(image_url),
        }
        if not self._validate(data):
            return None

        entry_id = self.ids.next_id()
        entry = Entry(id=entry_id, timestamp=self.ids.now_ms(), **data)
        self.store.add_entry(entry)
        self.notify("Entry added", NotificationLevel.SUCCESS)
        return entry

    def edit_entry(self, entry_id: int, **changes: Any) -> bool:
        """Validate and apply *changes* to an existing entry."""
        current = self.store.get_entry_by_id(entry_id)
        if current is None:
            self.notify("Entry not found", NotificationLevel.ERROR)
            return False

        cleaned = {_FIELD_ALIASES.get(key, key): _clean(value) for key, value in changes.items()}
        unknown = set(cleaned) - EDITABLE_FIELDS
        if unknown:
            self.notify(f"Cannot edit field(s): {', '.join(sorted(unknown))}", NotificationLevel.ERROR)
            return False
        candidate = {
            "topic": current.topic,
            "content": current.content,
            "link": current.link,
            "image_url": current.image_url,
            **cleaned,
        }
        if not self._validate(candidate):
            return False

        if not self.store.update_entry(entry_id, cleaned):
            self.notify("Could not update the entry", NotificationLevel.ERROR)
            return False
        self.notify("Entry updated", NotificationLevel.SUCCESS)
        return True

    def delete_entry(self, entry_id: int) -> bool:
        if not self.store.delete_entry(entry_id):
            self.notify("Entry not found", NotificationLevel.ERROR)
            return False
        self.notify("Entry deleted", NotificationLevel.UNDO)
        return True

    def undo_delete(self) -> bool:
        if not self.store.undo_delete():
            self.notify("Nothing to undo", NotificationLevel.WARNING)
            return False
        self.notify("Deletion undone", NotificationLevel.SUCCESS)
        return True

    def clear_all(self) -> None:
        self.store.clear_all()
        self.notify("All entries deleted", NotificationLevel.SUCCESS)

    def import_data(self, raw: Any) -> int:
        """Merge new entries from JSON import data. Returns how many were added."""
        try:
            result = merge_import(self.store.get_entries(), raw)
        except ImportFormatError as e:
            logger.error(f"Import failed: {e}")
            self.notify("Error importing file", NotificationLevel.ERROR)
            return 0

        if not result.added:
            self.notify("No new entries to import", NotificationLevel.WARNING)
            return 0

        self.store.set_entries(result.merged)
        self.notify(f"Imported {result.count} new entries", NotificationLevel.SUCCESS)
        return result.count

    def export_data(self) -> str:
        entries = self.store.get_entries()
        data = export_entries(entries)
        self.notify(f"Exported {len(entries)} entries", NotificationLevel.SUCCESS)
        return data

    def _validate(self, data: dict[str, Any]) -> bool:
        result = self.validator.validate_entry(data)
        for error in result.errors:
            self.notify(error, NotificationLevel.ERROR)
        return result.valid
