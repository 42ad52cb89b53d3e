"""Tests for learnlog.journal.validation."""

import pytest

from learnlog.journal.config import ValidationConfig
from learnlog.journal.validation import Validator, is_http_url, is_valid_url, validate_entry

VALID = {"topic": "Decorators", "content": "Functions wrapping functions"}


class TestValidateEntry:
    def test_valid_minimal(self):
        result = validate_entry(VALID)
        assert result.valid
        assert result.errors == []

    def test_valid_with_urls(self):
        result = validate_entry({**VALID, "link": "https://peps.python.org/pep-0318/", "image_url": "http://x.io/a.png"})
        assert result.valid

    def test_boundaries_inclusive(self):
        assert validate_entry({"topic": "abc", "content": "x" * 10}).valid
        assert validate_entry({"topic": "a" * 200, "content": "x" * 10000}).valid

    def test_topic_too_short(self):
        result = validate_entry({**VALID, "topic": "ab"})
        assert result.errors == ["Topic must be at least 3 characters"]

    def test_topic_too_long(self):
        result = validate_entry({**VALID, "topic": "a" * 201})
        assert result.errors == ["Topic cannot exceed 200 characters"]

    def test_content_bounds(self):
        assert validate_entry({**VALID, "content": "short"}).errors == ["Content must be at least 10 characters"]
        assert validate_entry({**VALID, "content": "x" * 10001}).errors == [
            "Content cannot exceed 10000 characters"
        ]

    def test_missing_fields(self):
        result = validate_entry({})
        assert result.errors == [
            "Topic must be at least 3 characters",
            "Content must be at least 10 characters",
        ]

    def test_invalid_link_reports_both_rules(self):
        result = validate_entry({**VALID, "link": "not a url"})
        assert result.errors == [
            "Link is not a valid URL",
            "Link must start with http:// or https://",
        ]

    def test_non_http_scheme(self):
        result = validate_entry({**VALID, "link": "ftp://files.example.com/x"})
        assert result.errors == ["Link must start with http:// or https://"]

    def test_image_url_rules(self):
        result = validate_entry({**VALID, "imageUrl": "javascript:alert(1)"})
        assert result.errors == ["Image URL must start with http:// or https://"]

    def test_accumulates_everything(self):
        result = validate_entry({"topic": "a", "content": "b", "link": "nope", "image_url": "mailto:me@x.io"})
        assert not result.valid
        assert result.errors == [
            "Topic must be at least 3 characters",
            "Content must be at least 10 characters",
            "Link is not a valid URL",
            "Link must start with http:// or https://",
            "Image URL must start with http:// or https://",
        ]

    def test_empty_optional_urls_are_ignored(self):
        assert validate_entry({**VALID, "link": "", "image_url": None}).valid

    def test_custom_bounds(self):
        validator = Validator(ValidationConfig(topic_min_length=5, content_max_length=20))
        result = validator.validate_entry({"topic": "abcd", "content": "x" * 21})
        assert result.errors == [
            "Topic must be at least 5 characters",
            "Content cannot exceed 20 characters",
        ]


class TestUrlHelpers:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://localhost:8000/path?q=1", "ftp://host/file", "mailto:me@example.com"],
    )
    def test_valid_urls(self, url):
        assert is_valid_url(url)

    @pytest.mark.parametrize("url", ["", "example.com", "http://", "https://exa mple.com", "http://host:99999"])
    def test_invalid_urls(self, url):
        assert not is_valid_url(url)

    def test_http_only(self):
        assert is_http_url("https://example.com")
        assert is_http_url("HTTP://EXAMPLE.COM")
        assert not is_http_url("ftp://example.com")
        assert not is_http_url("mailto:me@example.com")
