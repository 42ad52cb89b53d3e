"""Core data models for the learning diary.

Entries are frozen: the store replaces an entry instead of mutating it, so
snapshots handed to callers can never change underneath them.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

EDITABLE_FIELDS = frozenset({"topic", "content", "link", "image_url"})


@dataclass(frozen=True)
class Entry:
    """One diary record.

    Attributes:
        id: Unique integer id (see :class:`IdGenerator`).
        timestamp: Creation instant in epoch milliseconds. Never changes.
        topic: Short title.
        content: Body text.
        link: Optional http(s) URL.
        image_url: Optional http(s) image URL.
    """

    id: int
    timestamp: int
    topic: str
    content: str
    link: str | None = None
    image_url: str | None = None

    @property
    def created_at(self) -> datetime:
        """Creation instant as a local naive datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000)

    def search_text(self) -> str:
        """Lower-cased text that search terms are matched against."""
        return " ".join([self.topic, self.content, self.link or ""]).lower()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "topic": self.topic,
            "content": self.content,
        }
        if self.link is not None:
            data["link"] = self.link
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Entry:
        """Build an entry from its persisted JSON shape.

        Raises:
            ValueError: If a required field is missing, has the wrong type, or
                holds a number that is not a whole, representable value.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Entry must be an object, got {type(data).__name__}")
        for key in ("id", "timestamp", "topic", "content"):
            if key not in data:
                raise ValueError(f"Entry is missing '{key}'")
        for key in ("id", "timestamp"):
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ValueError(f"Entry '{key}' must be a number")
            if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
                raise ValueError(f"Entry '{key}' must be a whole number, got {value!r}")
        for key in ("topic", "content"):
            if not isinstance(data[key], str):
                raise ValueError(f"Entry '{key}' must be a string")
        link = data.get("link") or None
        image_url = data.get("imageUrl", data.get("image_url")) or None
        for key, value in (("link", link), ("imageUrl", image_url)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Entry '{key}' must be a string")
        timestamp = int(data["timestamp"])
        try:
            datetime.fromtimestamp(timestamp / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Entry timestamp {timestamp} is out of range") from e
        return cls(
            id=int(data["id"]),
            timestamp=timestamp,
            topic=data["topic"],
            content=data["content"],
            link=link,
            image_url=image_url,
        )

    def __repr__(self) -> str:
        preview = self.topic[:40] + "..." if len(self.topic) > 40 else self.topic
        return f"Entry(id={self.id}, topic='{preview}')"


@dataclass(frozen=True)
class PendingDelete:
    """A soft-deleted entry and the index it occupied."""

    entry: Entry
    index: int


@dataclass(frozen=True)
class EntryStats:
    total: int = 0
    today: int = 0
    week: int = 0


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


class IdGenerator:
    """Strictly increasing integer ids derived from a millisecond clock.

    Two ids requested within the same millisecond still differ: the
    generator never returns a value <= the previous one.
    """

    def __init__(self, clock: Callable[[], float] = time.time, last_id: int = 0):
        self._clock = clock
        self._last = last_id

    def now_ms(self) -> int:
        return int(self._clock() * 1000)

    def next_id(self) -> int:
        candidate = max(self.now_ms(), self._last + 1)
        self._last = candidate
        return candidate

    def observe(self, entry_id: int) -> None:
        """Make sure future ids are greater than an id seen elsewhere (loaded or imported)."""
        if entry_id > self._last:
            self._last = entry_id
