"""Storage layer for todo-tracker.

This module provides an abstract key-value storage interface and concrete
implementations. Values are opaque strings stored under string keys, the same
contract a browser's local storage offers. The JsonStorage implementation keeps
every key in one JSON object file, using fcntl-based file locking so that a
read-modify-write of a slot is never interleaved with another writer.
"""

import fcntl
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from todo_tracker.errors import DeserializationError

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for key-value storage implementations."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the slot is empty.

        Args:
            key: Slot name
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Args:
            key: Slot name
            value: Serialized payload
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove the slot. Removing a missing slot does nothing."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete all data from storage."""
        pass


class MemoryStorage(Storage):
    """Dictionary-backed storage; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def clear(self) -> None:
        self.items.clear()


class JsonStorage(Storage):
    """JSON file-based storage implementation with file locking.

    The file holds a single JSON object mapping slot names to string values.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: str):
        """Initialize JsonStorage with a file path.

        Args:
            file_path: Path to the JSON file for storage
        """
        self.file_path = Path(file_path)

    def get_item(self, key: str) -> Optional[str]:
        """Read one slot with a shared lock.

        Raises:
            DeserializationError: If the file is not a JSON object or the
                slot value is not a string
        """
        if not self.file_path.exists():
            return None

        with open(self.file_path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                content = self._read(f)
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        value = self._parse(content).get(key)
        if value is not None and not isinstance(value, str):
            raise DeserializationError(f"Slot {key!r} in {self.file_path} does not hold a string")
        return value

    def set_item(self, key: str, value: str) -> None:
        self._rewrite(lambda items: items.__setitem__(key, value))

    def remove_item(self, key: str) -> None:
        if not self.file_path.exists():
            return
        self._rewrite(lambda items: items.pop(key, None))

    def clear(self) -> None:
        """Delete the JSON storage file.

        If the file doesn't exist, this method does nothing.
        """
        if self.file_path.exists():
            self.file_path.unlink()

    def _rewrite(self, change) -> None:
        # Ensure parent directory exists
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        # Read, modify and write back while holding one exclusive lock
        with open(self.file_path, "a+", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.seek(0)
                try:
                    items = self._parse(self._read(f))
                except DeserializationError:
                    logger.warning("Overwriting unreadable storage file %s", self.file_path)
                    items = {}
                change(items)
                f.seek(0)
                f.truncate()
                json.dump(items, f, indent=2)
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def _read(self, f) -> str:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise DeserializationError(f"{self.file_path} is not UTF-8 text: {e}") from e

    def _parse(self, content: str) -> Dict[str, str]:
        if not content.strip():
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"{self.file_path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise DeserializationError(f"{self.file_path} does not hold a JSON object")
        return data
