"""
Local filesystem storage backend.

Each key is one UTF-8 file under ``base_path``. Writes go to a temporary
sibling first and are moved into place with ``os.replace``.
"""

import os
from pathlib import Path

from loguru import logger

from .base import KeyValueStore, StoragePermissionError, _size_of

_SUFFIX = ".json"


class LocalStorage(KeyValueStore):
    """Local filesystem key-value backend."""

    def __init__(self, base_path: str = "~/.learnlog-data/storage", quota_bytes: int | None = None):
        super().__init__(quota_bytes=quota_bytes)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a storage key to an absolute path under ``base_path``.

        Rejects unsafe keys (absolute paths, traversal, empty keys, and
        backslash-delimited paths) to prevent writes outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / (raw_key + _SUFFIX)).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        return full_path

    def _usage(self) -> int:
        return sum(p.stat().st_size for p in self.base_path.rglob(f"*{_SUFFIX}") if p.is_file())

    def get(self, key: str) -> str | None:
        path = self._get_full_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError("value must be a string")
        path = self._get_full_path(key)
        current_size = path.stat().st_size if path.exists() else 0
        self._check_quota(key, value, self._usage(), current_size)

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        logger.debug(f"Stored {_size_of(value)} bytes under '{key}'")

    def delete(self, key: str) -> bool:
        path = self._get_full_path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def keys(self) -> list[str]:
        keys = []
        for path in self.base_path.rglob(f"*{_SUFFIX}"):
            if path.is_file():
                rel = path.relative_to(self.base_path).as_posix()
                keys.append(rel[: -len(_SUFFIX)])
        return sorted(keys)
