"""Shared test fixtures for learnlog."""

import os
import tempfile
from datetime import datetime

import pytest

from learnlog.core.notifications import NotificationLog
from learnlog.core.storage import MemoryStorage
from learnlog.core.timers import TimerQueue
from learnlog.journal import Diary, Entry, EntryStore, SearchEngine

# 2026-03-14 15:00 local time
BASE_TIME = datetime(2026, 3, 14, 15, 0, 0).timestamp()


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = BASE_TIME):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_entry(entry_id: int, topic: str = "Python tips", content: str = "Use list comprehensions", **kwargs) -> Entry:
    kwargs.setdefault("timestamp", int(BASE_TIME * 1000) + entry_id)
    return Entry(id=entry_id, topic=topic, content=content, **kwargs)


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "storage_dir": os.path.join(tmp_dir, "storage"),
        },
        "diary": {"undo_timeout": 2.5},
        "search": {"max_cache_size": 10},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers(clock):
    return TimerQueue(clock=clock)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def notifications():
    return NotificationLog()


@pytest.fixture
def store(storage, timers, notifications):
    return EntryStore(storage, timers, undo_timeout=5.0, notifier=notifications)


@pytest.fixture
def diary(store, notifications, clock):
    return Diary(store, search=SearchEngine(cache_size=10), notifier=notifications, clock=clock)


@pytest.fixture
def entry_factory():
    """``make_entry(id, topic=..., content=..., **fields)``; timestamps follow the id."""
    return make_entry
