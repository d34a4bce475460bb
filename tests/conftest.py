"""Shared fixtures for todo-tracker tests."""

from datetime import datetime, timezone

import pytest

from todo_tracker.clock import FixedClock
from todo_tracker.persistence import TaskPersistence
from todo_tracker.repository import TaskStore
from todo_tracker.storage import JsonStorage, MemoryStorage


@pytest.fixture
def clock():
    """Deterministic clock starting at 2024-01-01 12:00 UTC with IDs 1, 2, 3..."""
    return FixedClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def persistence(memory_storage):
    return TaskPersistence(memory_storage)


@pytest.fixture
def store(persistence, clock):
    """Empty TaskStore over in-memory storage."""
    return TaskStore(persistence, clock)


@pytest.fixture
def db_path(tmp_path):
    """Path for a JSON storage file that does not exist yet."""
    return tmp_path / "todos.json"


@pytest.fixture
def file_store(db_path, clock):
    """Empty TaskStore over a JSON file."""
    return TaskStore(TaskPersistence(JsonStorage(str(db_path))), clock)
