"""Persistence adapter: the task list as one blob in a storage slot.

The whole ordered list is serialized on every save and written under a
single well-known key. There is no versioning and no partial update.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from todo_tracker.errors import DeserializationError, ValidationError
from todo_tracker.models import Priority, Task, validate_title
from todo_tracker.storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_KEY = "todos"


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to the persisted JSON array format."""
    records = []
    for task in tasks:
        records.append({
            "id": task.id,
            "title": task.title,
            "description": task.description,
            "priority": task.priority.value,
            "completed": task.completed,
            "createdAt": task.created_at.isoformat(),
            "updatedAt": task.updated_at.isoformat(),
        })
    return json.dumps(records)


def _decode_timestamp(value: Any) -> datetime:
    # Browser builds stored epoch milliseconds
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _decode_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"id must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"id must be a whole number, got {value!r}")
    return int(value)


def _decode_record(record: Dict[str, Any]) -> Task:
    task_id = _decode_id(record["id"])
    title = record["title"]
    if not isinstance(title, str):
        raise TypeError(f"title must be a string, got {title!r}")
    validate_title(title)
    completed = record.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError(f"completed must be true or false, got {completed!r}")
    description = record.get("description") or ""
    created_at = _decode_timestamp(record["createdAt"])
    updated_raw = record.get("updatedAt")
    updated_at = created_at if updated_raw is None else _decode_timestamp(updated_raw)
    if updated_at < created_at:
        raise ValueError("updatedAt is earlier than createdAt")
    return Task(
        id=task_id,
        title=title,
        description=str(description),
        priority=Priority(record.get("priority", Priority.MEDIUM.value)),
        completed=completed,
        created_at=created_at,
        updated_at=updated_at,
    )


def decode_tasks(raw: str) -> List[Task]:
    """Parse the persisted JSON array back into tasks.

    Every record must satisfy the task invariants: a whole-number ID unique
    within the list, a non-blank title, a boolean completion flag and an
    update time no earlier than the creation time.

    Args:
        raw: Slot contents as written by encode_tasks

    Returns:
        Tasks in stored order

    Raises:
        DeserializationError: If raw is not a well-formed task array
    """
    if not isinstance(raw, str):
        raise DeserializationError(f"Stored tasks must be a string, got {type(raw).__name__}")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DeserializationError(f"Stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError("Stored tasks are not a JSON array")

    tasks = []
    seen_ids = set()
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise DeserializationError(f"Record {index} is not an object")
        try:
            task = _decode_record(record)
        except ValidationError as e:
            raise DeserializationError(f"Record {index} is invalid: {e}") from e
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
            raise DeserializationError(f"Record {index} is malformed: {e}") from e
        if task.id in seen_ids:
            raise DeserializationError(f"Record {index} repeats task ID {task.id}")
        seen_ids.add(task.id)
        tasks.append(task)
    return tasks


class TaskPersistence:
    """Loads and saves the task list through a Storage slot.

    Attributes:
        storage: Key-value storage backend
        key: Slot name holding the serialized list
    """

    def __init__(self, storage: Storage, key: str = DEFAULT_KEY):
        self.storage = storage
        self.key = key

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the slot with the full task list."""
        payload = encode_tasks(tasks)
        self.storage.set_item(self.key, payload)
        logger.debug("Saved task list to slot %r (%d bytes)", self.key, len(payload))

    def load(self) -> List[Task]:
        """Read the task list, falling back to an empty list.

        Returns:
            Stored tasks, or [] if the slot is absent or unreadable
        """
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                return []
            return decode_tasks(raw)
        except DeserializationError as e:
            logger.warning("Ignoring unreadable task data in slot %r: %s", self.key, e)
            return []
