"""Core models for todo-tracker.

This module defines the data structures shared by every layer:
- Priority: Enum for task priority levels
- Tab: Enum for the two list views (to do / completed)
- Task: A dataclass representing a persisted task record
- Draft: A dataclass holding unsaved form input
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from todo_tracker.errors import ValidationError


class Priority(Enum):
    """Task priority levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Parse a priority name, ignoring letter case.

        Args:
            text: Priority name such as "high" or "Medium"

        Returns:
            The matching Priority

        Raises:
            ValidationError: If text names no priority
        """
        for priority in cls:
            if priority.value.lower() == text.strip().lower():
                return priority
        raise ValidationError(f"Unknown priority: {text!r}")


class Tab(Enum):
    """Which half of the task list is displayed."""

    TODO = "todo"
    COMPLETED = "completed"

    def matches(self, task: "Task") -> bool:
        """Return True if the task belongs on this tab."""
        return task.completed == (self is Tab.COMPLETED)


@dataclass
class Task:
    """Task model representing a single task item.

    Attributes:
        id: Unique identifier, taken from the clock at creation
        title: Short task title, never blank
        description: Free text, may be empty
        priority: Priority level of the task
        completed: Whether the task is done
        created_at: Timestamp when the task was created
        updated_at: Timestamp of the last edit or completion toggle
    """

    id: int
    title: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    priority: Priority = Priority.MEDIUM
    completed: bool = False


@dataclass
class Draft:
    """Unsaved form input for a task being created or edited."""

    title: str = ""
    description: str = ""
    priority: Priority = Priority.MEDIUM
    editing_id: Optional[int] = None

    @classmethod
    def empty(cls) -> "Draft":
        return cls()

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


def validate_title(title: str) -> None:
    """Raise ValidationError if title is empty after trimming whitespace."""
    if not title.strip():
        raise ValidationError("Title cannot be empty")
