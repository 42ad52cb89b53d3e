"""Configuration dataclasses for the diary core.

These are pure data containers with sensible defaults.
Override them from YAML config, env vars, or constructor args.
"""

from __future__ import annotations

from dataclasses import dataclass

from learnlog.core.config import Config


@dataclass
class ValidationConfig:
    """Length bounds for entry fields (inclusive)."""

    topic_min_length: int = 3
    topic_max_length: int = 200
    content_min_length: int = 10
    content_max_length: int = 10000

    @classmethod
    def from_config(cls, config: Config) -> ValidationConfig:
        section = config.validated().validation
        return cls(
            topic_min_length=section.topic_min_length,
            topic_max_length=section.topic_max_length,
            content_min_length=section.content_min_length,
            content_max_length=section.content_max_length,
        )


@dataclass
class DiaryConfig:
    """Settings for the entry store and search.

    Attributes:
        storage_key: Key the entry list is persisted under.
        undo_timeout: Seconds a deleted entry stays recoverable.
        max_cache_size: Number of distinct queries the search cache keeps.
        quota_bytes: Storage quota; None disables the check.
    """

    storage_key: str = "learningEntries"
    undo_timeout: float = 5.0
    max_cache_size: int = 50
    quota_bytes: int | None = 5 * 1024 * 1024

    @classmethod
    def from_config(cls, config: Config) -> DiaryConfig:
        validated = config.validated()
        return cls(
            storage_key=validated.diary.storage_key,
            undo_timeout=validated.diary.undo_timeout,
            max_cache_size=validated.search.max_cache_size,
            quota_bytes=validated.diary.quota_bytes,
        )
