"""
Abstract base class for durable key-value backends.

The entry store persists one JSON document under one key, the way a browser
app uses local storage. Backends are synchronous and may enforce a byte
quota across all stored values.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string key -> string value store."""

    def __init__(self, quota_bytes: int | None = None):
        if quota_bytes is not None and quota_bytes <= 0:
            raise ValueError("quota_bytes must be positive")
        self.quota_bytes = quota_bytes

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when *key* is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*. Raises StorageQuotaError when over quota."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key. Returns True if deleted, False if it didn't exist."""

    @abstractmethod
    def keys(self) -> list[str]:
        """All stored keys, sorted."""

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def require(self, key: str) -> str:
        """Like ``get`` but raises StorageKeyError on a missing key."""
        value = self.get(key)
        if value is None:
            raise StorageKeyError(f"Key not found: {key}")
        return value

    def clear(self) -> None:
        """Delete every key."""
        for key in self.keys():
            self.delete(key)

    def _check_quota(self, key: str, value: str, current_usage: int, current_size: int) -> None:
        """Raise StorageQuotaError if replacing *key*'s value would exceed the quota.

        Args:
            current_usage: Total bytes stored now, all keys.
            current_size: Bytes currently stored under *key* (0 if absent).
        """
        if self.quota_bytes is None:
            return
        projected = current_usage - current_size + _size_of(value)
        if projected > self.quota_bytes:
            raise StorageQuotaError(
                f"Writing '{key}' needs {projected} bytes, quota is {self.quota_bytes} bytes"
            )


def _size_of(value: str) -> int:
    return len(value.encode("utf-8"))


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""


class StorageQuotaError(StorageError):
    """Raised when storage quota is exceeded."""
