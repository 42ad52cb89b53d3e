"""Entry validation.

Every rule runs; the result carries all violated rules in a fixed order so
the caller can show them together.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from .config import ValidationConfig
from .models import ValidationResult

_HTTP_SCHEMES = frozenset({"http", "https"})
# Schemes that are valid without a network location
_OPAQUE_SCHEMES = frozenset({"mailto", "data", "tel", "urn", "javascript", "about", "news"})


def is_valid_url(value: str) -> bool:
    """Whether *value* parses as an absolute URL."""
    try:
        parts = urlsplit(value)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if not parts.scheme or any(c.isspace() for c in value):
        return False
    if parts.scheme.lower() in _OPAQUE_SCHEMES:
        return bool(parts.path)
    return bool(parts.netloc)


def is_http_url(value: str) -> bool:
    """Whether *value* is an absolute http:// or https:// URL with a host."""
    if not is_valid_url(value):
        return False
    parts = urlsplit(value)
    return parts.scheme.lower() in _HTTP_SCHEMES and bool(parts.hostname)


class Validator:
    """Checks candidate entry data before it reaches the store."""

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or ValidationConfig()

    def validate_entry(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate ``topic``, ``content``, ``link`` and ``image_url`` (or ``imageUrl``)."""
        cfg = self.config
        errors: list[str] = []

        topic = data.get("topic") or ""
        content = data.get("content") or ""
        link = data.get("link") or ""
        image_url = data.get("image_url", data.get("imageUrl")) or ""

        if len(topic) < cfg.topic_min_length:
            errors.append(f"Topic must be at least {cfg.topic_min_length} characters")
        if len(topic) > cfg.topic_max_length:
            errors.append(f"Topic cannot exceed {cfg.topic_max_length} characters")

        if len(content) < cfg.content_min_length:
            errors.append(f"Content must be at least {cfg.content_min_length} characters")
        if len(content) > cfg.content_max_length:
            errors.append(f"Content cannot exceed {cfg.content_max_length} characters")

        errors.extend(_check_url(link, "Link"))
        errors.extend(_check_url(image_url, "Image URL"))

        return ValidationResult(valid=not errors, errors=errors)


def _check_url(value: str, label: str) -> list[str]:
    if not value:
        return []
    errors = []
    if not is_valid_url(value):
        errors.append(f"{label} is not a valid URL")
    if not is_http_url(value):
        errors.append(f"{label} must start with http:// or https://")
    return errors


_default_validator = Validator()


def validate_entry(data: Mapping[str, Any]) -> ValidationResult:
    """Validate *data* against the default length bounds."""
    return _default_validator.validate_entry(data)
