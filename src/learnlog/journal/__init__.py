"""Learning diary core.

Provides the entry model, the soft-delete entry store, cached search,
statistics, validation, JSON import/export and the ``Diary`` application
layer that ties them together.
"""

from .config import DiaryConfig, ValidationConfig
from .diary import Diary
from .models import Entry, EntryStats, IdGenerator, PendingDelete, ValidationResult
from .search import SearchEngine
from .stats import calculate_stats, entries_on, group_by_date
from .store import EntryStore
from .transfer import ImportResult, export_entries, merge_import
from .validation import Validator, validate_entry

__all__ = [
    "Diary",
    "DiaryConfig",
    "Entry",
    "EntryStats",
    "EntryStore",
    "IdGenerator",
    "ImportResult",
    "PendingDelete",
    "SearchEngine",
    "ValidationConfig",
    "ValidationResult",
    "Validator",
    "calculate_stats",
    "entries_on",
    "export_entries",
    "group_by_date",
    "merge_import",
    "validate_entry",
]
