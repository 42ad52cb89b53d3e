"""Statistics and date grouping over an entry list.

All functions are pure: they look only at the entries passed in and the
reference time. Days are local calendar days.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from .models import Entry, EntryStats

WEEK_DAYS = 7


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min)


def calculate_stats(entries: Iterable[Entry], now: datetime | None = None) -> EntryStats:
    """Count entries overall, since today's midnight and since midnight seven days ago."""
    now = now or datetime.now()
    today_start = _midnight(now.date())
    week_start = today_start - timedelta(days=WEEK_DAYS)

    total = today = week = 0
    for entry in entries:
        created = entry.created_at
        total += 1
        if created >= today_start:
            today += 1
        if created >= week_start:
            week += 1
    return EntryStats(total=total, today=today, week=week)


def group_by_date(entries: Iterable[Entry]) -> dict[date, list[Entry]]:
    """Group entries by local creation day, keeping their order within each day.

    Days appear in the order their first entry does.
    """
    groups: dict[date, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.created_at.date(), []).append(entry)
    return groups


def entries_on(entries: Iterable[Entry], day: date) -> list[Entry]:
    """Entries created on *day*."""
    return [entry for entry in entries if entry.created_at.date() == day]
