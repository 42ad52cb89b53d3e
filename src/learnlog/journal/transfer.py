"""JSON import and export of entry lists.

Export writes the whole list as pretty-printed JSON. Import merges only new,
complete entries into the current list: either every qualifying entry is
merged or, if any of them is malformed, none is.

File variants are async and use aiofiles, so a host running an event loop
can read/write large exports without blocking it.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger

from learnlog.core.exceptions import FileIOError, ImportFormatError

from .models import Entry

REQUIRED_IMPORT_FIELDS = ("id", "topic", "content", "timestamp")


@dataclass(frozen=True)
class ImportResult:
    """Outcome of merging an import into the current entries.

    Attributes:
        merged: Full list to install in the store, newest first.
        added: Entries that were new.
        skipped: Candidates that were incomplete or already present.
    """

    merged: list[Entry]
    added: list[Entry]
    skipped: int

    @property
    def count(self) -> int:
        return len(self.added)


def export_entries(entries: Iterable[Entry]) -> str:
    """Serialize *entries* as pretty-printed JSON."""
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


def export_filename(day: date | None = None) -> str:
    """Default export file name, e.g. ``learning-diary-2026-10-18.json``."""
    day = day or date.today()
    return f"learning-diary-{day.isoformat()}.json"


def parse_import(raw: str | bytes | Any) -> list[Any]:
    """Decode import data into a list of candidate objects.

    *raw* may be JSON text or an already decoded object.

    Raises:
        ImportFormatError: If the data is not JSON or not an array.
    """
    if isinstance(raw, str | bytes | bytearray):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ImportFormatError(f"Import data is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise ImportFormatError(f"Import data must be a JSON array, got {type(raw).__name__}")
    return raw


def _qualifies(candidate: Any, known_ids: set) -> bool:
    if not isinstance(candidate, dict):
        return False
    if not all(candidate.get(key) for key in REQUIRED_IMPORT_FIELDS):
        return False
    # malformed ids are left for Entry.from_dict to reject
    if not isinstance(candidate["id"], int | float):
        return True
    return candidate["id"] not in known_ids


def merge_import(current: Sequence[Entry], raw: str | bytes | Any) -> ImportResult:
    """Merge new entries from *raw* into *current*.

    A candidate qualifies when ``id``, ``topic``, ``content`` and
    ``timestamp`` are all present and non-empty and its id is neither in
    *current* nor earlier in the same import. The merged list is sorted by
    timestamp, newest first.

    Raises:
        ImportFormatError: If the data cannot be decoded, or a qualifying
            candidate cannot be turned into an :class:`Entry`.
    """
    candidates = parse_import(raw)
    known_ids = {entry.id for entry in current}

    added: list[Entry] = []
    skipped = 0
    for candidate in candidates:
        if not _qualifies(candidate, known_ids):
            skipped += 1
            continue
        try:
            entry = Entry.from_dict(candidate)
        except ValueError as e:
            raise ImportFormatError(f"Invalid entry in import data: {e}") from e
        known_ids.add(entry.id)
        added.append(entry)

    merged = sorted([*current, *added], key=lambda e: e.timestamp, reverse=True)
    logger.debug(f"Import: {len(added)} new, {skipped} skipped")
    return ImportResult(merged=merged, added=added, skipped=skipped)


async def write_export(path: str | Path, entries: Iterable[Entry]) -> Path:
    """Write an export of *entries* to *path*; returns the resolved path."""
    target = Path(path).expanduser()
    data = export_entries(entries)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(target, "w", encoding="utf-8") as f:
            await f.write(data)
    except OSError as e:
        raise FileIOError(f"Cannot write export to {target}: {e}") from e
    return target


async def read_import(path: str | Path) -> str:
    """Read the text of an import file."""
    source = Path(path).expanduser()
    try:
        async with aiofiles.open(source, encoding="utf-8") as f:
            return await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(f"Cannot read import file {source}: {e}") from e
