"""Change notification for the entry store.

A small publish/subscribe list: observers are plain callables
invoked synchronously as ``observer(action, payload)``.

Usage::

    from learnlog.core.events import ObserverList, StoreAction

    observers = ObserverList()

    def on_change(action: StoreAction, payload) -> None:
        print(f"{action}: {payload!r}")

    unsubscribe = observers.subscribe(on_change)
    observers.notify(StoreAction.ADD, entry)
    unsubscribe()
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from loguru import logger


class StoreAction(StrEnum):
    """Mutation names delivered to store observers."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"
    CLEAR = "clear"
    LOAD = "load"
    DELETE_CONFIRMED = "deleteConfirmed"


# Actions after which the entry list differs from before
DATA_ACTIONS = frozenset(
    {
        StoreAction.ADD,
        StoreAction.UPDATE,
        StoreAction.DELETE,
        StoreAction.RESTORE,
        StoreAction.CLEAR,
        StoreAction.LOAD,
    }
)

Observer = Callable[[StoreAction, Any], None]


class ObserverList:
    """Ordered list of observers with snapshot-based notification."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            self.unsubscribe(observer)

        return _unsubscribe

    def unsubscribe(self, observer: Observer) -> None:
        """Remove *observer*. Unknown observers are ignored."""
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def notify(self, action: StoreAction, payload: Any = None) -> None:
        """Call every observer registered when notification starts."""
        for observer in list(self._observers):
            try:
                observer(action, payload)
            except Exception as exc:
                logger.warning(f"Observer {observer!r} failed for {action}: {exc}")

    def __len__(self) -> int:
        return len(self._observers)
