"""
Learnlog exception hierarchy.

All learnlog exceptions inherit from LearnlogError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
Storage backends raise their own StorageError family (see ``core.storage``).
"""


class LearnlogError(Exception):
    """Base exception class for all learnlog errors."""


class ConfigurationError(LearnlogError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DataProcessingError(LearnlogError):
    """Raised for data processing errors."""


class ImportFormatError(DataProcessingError):
    """Raised when import data is not a JSON array of entries."""


class FileIOError(LearnlogError):
    """Raised for file I/O errors."""
