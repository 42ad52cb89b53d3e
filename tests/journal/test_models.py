"""Tests for learnlog.journal.models."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from learnlog.journal.models import Entry, IdGenerator, ValidationResult


class TestEntry:
    def test_to_dict_uses_persisted_keys(self):
        entry = Entry(
            id=1,
            timestamp=1700000000000,
            topic="Topic",
            content="Some content",
            link="https://example.com",
            image_url="https://example.com/a.png",
        )
        assert entry.to_dict() == {
            "id": 1,
            "timestamp": 1700000000000,
            "topic": "Topic",
            "content": "Some content",
            "link": "https://example.com",
            "imageUrl": "https://example.com/a.png",
        }

    def test_to_dict_omits_missing_optionals(self):
        entry = Entry(id=1, timestamp=2, topic="Topic", content="Some content")
        assert set(entry.to_dict()) == {"id", "timestamp", "topic", "content"}

    def test_from_dict(self):
        entry = Entry.from_dict(
            {"id": 5, "timestamp": 100.0, "topic": "T", "content": "C", "imageUrl": "https://x.io/i.png"}
        )
        assert entry.id == 5
        assert entry.timestamp == 100
        assert entry.image_url == "https://x.io/i.png"
        assert entry.link is None

    def test_from_dict_empty_link_becomes_none(self):
        entry = Entry.from_dict({"id": 1, "timestamp": 1, "topic": "T", "content": "C", "link": ""})
        assert entry.link is None

    @pytest.mark.parametrize(
        "data",
        [
            {"timestamp": 1, "topic": "T", "content": "C"},
            {"id": "1", "timestamp": 1, "topic": "T", "content": "C"},
            {"id": True, "timestamp": 1, "topic": "T", "content": "C"},
            {"id": 1, "timestamp": 1, "topic": 3, "content": "C"},
            {"id": 1, "timestamp": 1, "topic": "T", "content": "C", "link": 42},
            ["not", "a", "dict"],
        ],
    )
    def test_from_dict_rejects_bad_data(self, data):
        with pytest.raises(ValueError):
            Entry.from_dict(data)

    def test_frozen(self):
        entry = Entry(id=1, timestamp=2, topic="Topic", content="Some content")
        with pytest.raises(FrozenInstanceError):
            entry.topic = "changed"

    def test_created_at_is_local_datetime(self):
        ts = datetime(2026, 1, 2, 3, 4, 5)
        entry = Entry(id=1, timestamp=int(ts.timestamp() * 1000), topic="T", content="C")
        assert entry.created_at == ts

    def test_search_text(self):
        entry = Entry(id=1, timestamp=2, topic="Async IO", content="Event LOOP", link="https://Docs.python.org")
        assert entry.search_text() == "async io event loop https://docs.python.org"

    def test_repr_truncates_topic(self):
        entry = Entry(id=1, timestamp=2, topic="x" * 60, content="c")
        assert "..." in repr(entry)


class TestIdGenerator:
    def test_ids_follow_clock(self, clock):
        ids = IdGenerator(clock)
        first = ids.next_id()
        assert first == int(clock() * 1000)
        clock.advance(1)
        assert ids.next_id() == first + 1000

    def test_same_millisecond_still_unique(self, clock):
        ids = IdGenerator(clock)
        generated = [ids.next_id() for _ in range(100)]
        assert len(set(generated)) == 100
        assert generated == sorted(generated)

    def test_clock_going_backwards(self, clock):
        ids = IdGenerator(clock)
        first = ids.next_id()
        clock.advance(-10)
        assert ids.next_id() == first + 1

    def test_observe_bumps_floor(self, clock):
        ids = IdGenerator(clock)
        future = int(clock() * 1000) + 5000
        ids.observe(future)
        assert ids.next_id() == future + 1


def test_validation_result_truthiness():
    assert ValidationResult(valid=True)
    assert not ValidationResult(valid=False, errors=["bad"])


class TestFromDictNumbers:
    BASE = {"topic": "T", "content": "C"}

    @pytest.mark.parametrize(
        "numbers",
        [
            {"id": 1, "timestamp": float("inf")},
            {"id": float("nan"), "timestamp": 1000},
            {"id": 1.5, "timestamp": 1000},
            {"id": 1, "timestamp": 1000.25},
            {"id": 1, "timestamp": 1e17},
            {"id": 1, "timestamp": 10**30},
        ],
    )
    def test_rejects_unusable_numbers(self, numbers):
        with pytest.raises(ValueError):
            Entry.from_dict({**self.BASE, **numbers})

    def test_whole_floats_accepted(self):
        entry = Entry.from_dict({**self.BASE, "id": 7.0, "timestamp": 1000.0})
        assert (entry.id, entry.timestamp) == (7, 1000)
        assert isinstance(entry.id, int)
