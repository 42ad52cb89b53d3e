"""EntryStore: the authoritative in-memory entry list.

Keeps entries most-recent-first, persists the whole list as one JSON
document in a :class:`~learnlog.core.storage.KeyValueStore`, and notifies
observers synchronously after every mutation.

Deletion is soft. A deleted entry stays recoverable for ``undo_timeout``
seconds::

    Active --delete_entry--> PendingUndo --timer fires--> GoneConfirmed
    PendingUndo --undo_delete--> Active
    PendingUndo --another delete_entry--> GoneConfirmed  (collapse)
    PendingUndo --set_entries or load--> GoneConfirmed
    PendingUndo --clear_all--> gone

Only one entry can be pending at a time. The entry is removed from the
persisted list as soon as it is deleted; the undo window only exists in
memory.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import Any

from loguru import logger

from learnlog.core.events import Observer, ObserverList, StoreAction
from learnlog.core.notifications import NotificationLevel, Notifier, log_notifier
from learnlog.core.storage import KeyValueStore, StorageError
from learnlog.core.timers import Scheduler, TimerHandle

from .models import EDITABLE_FIELDS, Entry, PendingDelete

DEFAULT_STORAGE_KEY = "learningEntries"
DEFAULT_UNDO_TIMEOUT = 5.0

SAVE_FAILED_MESSAGE = "Could not save data. Is storage full?"
LOAD_FAILED_MESSAGE = "Error loading saved data"


class EntryStore:
    """Ordered entry list with soft delete, persistence and change notification.

    Args:
        storage: Durable key-value backend.
        scheduler: Source of cancellable timers for the undo window.
        storage_key: Key the JSON array is stored under.
        undo_timeout: Seconds a deleted entry remains recoverable.
        notifier: User-facing channel for persistence failures.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        scheduler: Scheduler,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        undo_timeout: float = DEFAULT_UNDO_TIMEOUT,
        notifier: Notifier | None = None,
    ):
        self.storage = storage
        self.scheduler = scheduler
        self.storage_key = storage_key
        self.undo_timeout = undo_timeout
        self._notifier = notifier if notifier is not None else log_notifier
        self._entries: list[Entry] = []
        self._observers = ObserverList()
        self._pending: PendingDelete | None = None
        self._timer: TimerHandle | None = None

    # -- Queries ------------------------------------------------------------

    def get_entries(self) -> tuple[Entry, ...]:
        """Snapshot of the current list, most recent first."""
        return tuple(self._entries)

    def get_entry_by_id(self, entry_id: int) -> Entry | None:
        return next((e for e in self._entries if e.id == entry_id), None)

    def _index_of(self, entry_id: int) -> int:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return i
        return -1

    @property
    def pending_delete(self) -> PendingDelete | None:
        return self._pending

    @property
    def has_pending_delete(self) -> bool:
        return self._pending is not None and self._timer is not None

    def __len__(self) -> int:
        return len(self._entries)

    # -- Mutations ----------------------------------------------------------

    def add_entry(self, entry: Entry) -> None:
        """Insert *entry* at the head of the list."""
        self._entries.insert(0, entry)
        logger.debug(f"Added entry {entry.id}")
        self._notify(StoreAction.ADD, entry)
        self.save()

    def update_entry(self, entry_id: int, changes: Mapping[str, Any]) -> bool:
        """Merge *changes* into the entry with *entry_id*, in place.

        ``id`` and ``timestamp`` in *changes* are ignored.

        Returns:
            False (and does nothing) if no entry has that id.

        Raises:
            ValueError: If *changes* names a field entries don't have.
        """
        index = self._index_of(entry_id)
        if index == -1:
            return False

        fields = {k: v for k, v in changes.items() if k not in ("id", "timestamp")}
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown entry fields: {', '.join(sorted(unknown))}")

        updated = replace(self._entries[index], **fields)
        self._entries[index] = updated
        logger.debug(f"Updated entry {entry_id}: {sorted(fields)}")
        self._notify(StoreAction.UPDATE, updated)
        self.save()
        return True

    def delete_entry(self, entry_id: int) -> bool:
        """Soft-delete the entry with *entry_id* and open the undo window.

        A delete that is still pending is finalized first; it can no longer
        be undone.
        """
        index = self._index_of(entry_id)
        if index == -1:
            return False

        if self._pending is not None:
            self._finalize_pending()

        entry = self._entries.pop(index)
        self._pending = PendingDelete(entry=entry, index=index)
        logger.debug(f"Deleted entry {entry_id} from index {index}")
        self._notify(StoreAction.DELETE, entry_id)
        self.save()
        self._start_undo_timer(entry_id)
        return True

    def undo_delete(self) -> bool:
        """Restore the pending deleted entry at its former index.

        If the list has shrunk below that index in the meantime, the entry
        is appended at the end.
        """
        if self._pending is None or self._timer is None:
            return False

        self._cancel_timer()
        pending, self._pending = self._pending, None
        index = min(pending.index, len(self._entries))
        self._entries.insert(index, pending.entry)
        logger.debug(f"Restored entry {pending.entry.id} at index {index}")
        self._notify(StoreAction.RESTORE, pending.entry)
        self.save()
        return True

    def clear_all(self) -> None:
        """Remove every entry and drop any pending undo."""
        self._entries = []
        self._pending = None
        self._cancel_timer()
        logger.debug("Cleared all entries")
        self._notify(StoreAction.CLEAR, None)
        self.save()

    def set_entries(self, entries: Iterable[Entry]) -> None:
        """Replace the whole list (import/load).

        A pending delete is finalized first: the new list may already hold
        the deleted entry again.
        """
        entries = list(entries)
        if self._pending is not None:
            self._finalize_pending()
        self._entries = entries
        logger.debug(f"Replaced entry list ({len(self._entries)} entries)")
        self._notify(StoreAction.LOAD, None)
        self.save()

    # -- Undo window ----------------------------------------------------------

    def _start_undo_timer(self, entry_id: int) -> None:
        self._cancel_timer()
        self._timer = self.scheduler.call_later(self.undo_timeout, self._expire_pending, entry_id)

    def _expire_pending(self, entry_id: int) -> None:
        if self._pending is None or self._pending.entry.id != entry_id:
            return
        self._pending = None
        self._timer = None
        logger.debug(f"Undo window closed for entry {entry_id}")
        self._notify(StoreAction.DELETE_CONFIRMED, entry_id)

    def _finalize_pending(self) -> None:
        """Close the undo window of the pending delete right away."""
        pending, self._pending = self._pending, None
        self._cancel_timer()
        if pending is not None:
            logger.debug(f"Undo window for entry {pending.entry.id} closed early")
            self._notify(StoreAction.DELETE_CONFIRMED, pending.entry.id)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # -- Observers ----------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call *observer(action, payload)* after every mutation.

        Returns a callable that removes the observer again.
        """
        return self._observers.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._observers.unsubscribe(observer)

    def _notify(self, action: StoreAction, payload: Any = None) -> None:
        self._observers.notify(action, payload)

    # -- Persistence ----------------------------------------------------------

    def save(self) -> bool:
        """Write the entry list to storage.

        Failures are logged and reported through the notifier; the in-memory
        list is kept as is.
        """
        try:
            data = json.dumps([entry.to_dict() for entry in self._entries], ensure_ascii=False)
            self.storage.set(self.storage_key, data)
        except (StorageError, OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save entries under '{self.storage_key}': {e}")
            self._notifier(SAVE_FAILED_MESSAGE, NotificationLevel.ERROR)
            return False
        return True

    def load(self) -> bool:
        """Replace the in-memory list with the persisted one, if any.

        A missing key leaves the store untouched and sends no notification.
        Unreadable or corrupt data is logged and reported; the current list
        stays in place.
        """
        try:
            raw = self.storage.get(self.storage_key)
            if raw is None:
                return True
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            entries = [Entry.from_dict(item) for item in data]
        except (StorageError, OSError, ValueError) as e:
            logger.error(f"Failed to load entries from '{self.storage_key}': {e}")
            self._notifier(LOAD_FAILED_MESSAGE, NotificationLevel.ERROR)
            return False

        if self._pending is not None:
            self._finalize_pending()
        self._entries = entries
        logger.debug(f"Loaded {len(entries)} entries")
        self._notify(StoreAction.LOAD, None)
        return True
