"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``LearnlogConfig``
instance.  Existing dict-based access continues to work unchanged.

Values coming from environment variables arrive as strings; pydantic's
lax mode coerces ``"10"`` to ``10`` and ``"2.5"`` to ``2.5``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    storage_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "storage_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class DiarySection(BaseModel):
    """Entry store settings."""

    storage_key: str = Field(default="learningEntries", min_length=1)
    undo_timeout: float = Field(default=5.0, ge=0)
    quota_bytes: int | None = Field(default=5 * 1024 * 1024, gt=0)


class SearchSection(BaseModel):
    max_cache_size: int = Field(default=50, gt=0)


class ValidationSection(BaseModel):
    """Length bounds for entry fields."""

    topic_min_length: int = Field(default=3, ge=0)
    topic_max_length: int = Field(default=200, gt=0)
    content_min_length: int = Field(default=10, ge=0)
    content_max_length: int = Field(default=10000, gt=0)

    @model_validator(mode="after")
    def _min_not_above_max(self) -> ValidationSection:
        if self.topic_min_length > self.topic_max_length:
            raise ValueError("topic_min_length cannot exceed topic_max_length")
        if self.content_min_length > self.content_max_length:
            raise ValueError("content_min_length cannot exceed content_max_length")
        return self


class LoggingSection(BaseModel):
    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level


class LearnlogConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.learnlog-data"))
    diary: DiarySection = DiarySection()
    search: SearchSection = SearchSection()
    validation: ValidationSection = ValidationSection()
    logging: LoggingSection = LoggingSection()
