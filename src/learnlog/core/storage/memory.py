"""In-process storage backend. Contents vanish with the process."""

from .base import KeyValueStore, _size_of


class MemoryStorage(KeyValueStore):
    """Dict-backed key-value store with optional quota."""

    def __init__(self, quota_bytes: int | None = None):
        super().__init__(quota_bytes=quota_bytes)
        self._data: dict[str, str] = {}

    def _usage(self) -> int:
        return sum(_size_of(v) for v in self._data.values())

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a string")
        current = self._data.get(key)
        self._check_quota(key, value, self._usage(), _size_of(current) if current is not None else 0)
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)
