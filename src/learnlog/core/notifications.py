"""User-facing notification side channel.

The core never prints. It reports outcomes (saved, failed to save, imported
N entries, ...) by calling a :data:`Notifier`. The default notifier routes
messages to loguru; the CLI collects them with :class:`NotificationLog` and
renders them itself.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger


class NotificationLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    UNDO = "undo"  # the action can still be undone


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = NotificationLevel.INFO


Notifier = Callable[[str, NotificationLevel], None]

_LOG_LEVELS = {
    NotificationLevel.INFO: "INFO",
    NotificationLevel.SUCCESS: "SUCCESS",
    NotificationLevel.WARNING: "WARNING",
    NotificationLevel.ERROR: "ERROR",
    NotificationLevel.UNDO: "INFO",
}


def log_notifier(message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
    """Default notifier: forward to loguru."""
    logger.log(_LOG_LEVELS[NotificationLevel(level)], message)


class NotificationLog:
    """Notifier that keeps every notification in memory."""

    def __init__(self) -> None:
        self.items: list[Notification] = []

    def __call__(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        self.items.append(Notification(message, NotificationLevel(level)))

    def drain(self) -> list[Notification]:
        """Return and forget the collected notifications."""
        items, self.items = self.items, []
        return items

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.items]

    def __len__(self) -> int:
        return len(self.items)
