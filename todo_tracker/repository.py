"""Task store for managing task operations.

This module provides the TaskStore class, the single owner of the ordered task
list. Every successful mutation is written through to the persistence adapter
before the call returns; failed operations leave both memory and storage
untouched.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from todo_tracker.clock import Clock, SystemClock
from todo_tracker.errors import NotFoundError
from todo_tracker.models import Draft, Priority, Task, validate_title
from todo_tracker.persistence import TaskPersistence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskCounts:
    """Number of tasks on each tab."""

    todo: int
    completed: int


class TaskStore:
    """In-memory ordered task list with write-through persistence.

    Attributes:
        persistence: Adapter that saves and loads the full list
        clock: Source of task IDs and timestamps
    """

    def __init__(self, persistence: TaskPersistence, clock: Optional[Clock] = None):
        """Initialize an empty TaskStore.

        Args:
            persistence: Adapter used for load() and write-through saves
            clock: Clock implementation to use. If None, uses SystemClock.
        """
        self.persistence = persistence
        self.clock = clock or SystemClock()
        self._tasks: List[Task] = []

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Snapshot of all tasks in insertion order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def load(self) -> List[Task]:
        """Replace the in-memory list with the persisted one.

        Returns:
            The loaded tasks (empty if nothing usable was stored)
        """
        self._tasks = list(self.persistence.load())
        logger.info("Loaded %d tasks", len(self._tasks))
        return list(self._tasks)

    def get(self, task_id: int) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If no task has this ID
        """
        return self._tasks[self._index_of(task_id)]

    def add(self, draft: Draft) -> Task:
        """Create a task from the draft's fields and append it.

        Args:
            draft: Form input; editing_id is ignored

        Returns:
            The created Task

        Raises:
            ValidationError: If the draft title is blank
        """
        validate_title(draft.title)

        now = self.clock.now()
        task = Task(
            id=self._fresh_id(),
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        self._save()

        logger.info("Added task %d", task.id)
        return task

    def update(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[Priority] = None,
    ) -> Task:
        """Merge the given fields into an existing task.

        Fields left as None keep their current value. The ID and creation
        time never change; updated_at moves to the current time.

        Raises:
            NotFoundError: If no task has this ID
            ValidationError: If the resulting title would be blank
        """
        index = self._index_of(task_id)
        current = self._tasks[index]

        new_title = current.title if title is None else title
        validate_title(new_title)

        task = replace(
            current,
            title=new_title,
            description=current.description if description is None else description,
            priority=current.priority if priority is None else priority,
            updated_at=self._touch(current),
        )
        self._tasks[index] = task
        self._save()

        logger.info("Updated task %d", task_id)
        return task

    def toggle_completion(self, task_id: int) -> Task:
        """Flip a task between to do and completed.

        Raises:
            NotFoundError: If no task has this ID
        """
        index = self._index_of(task_id)
        current = self._tasks[index]
        task = replace(current, completed=not current.completed, updated_at=self._touch(current))
        self._tasks[index] = task
        self._save()

        logger.info("Task %d marked %s", task_id, "completed" if task.completed else "to do")
        return task

    def delete(self, task_id: int) -> None:
        """Remove a task. Callers must confirm with the user first.

        Raises:
            NotFoundError: If no task has this ID
        """
        index = self._index_of(task_id)
        del self._tasks[index]
        self._save()

        logger.info("Deleted task %d", task_id)

    def counts(self) -> TaskCounts:
        completed = sum(1 for task in self._tasks if task.completed)
        return TaskCounts(todo=len(self._tasks) - completed, completed=completed)

    def _index_of(self, task_id: int) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(task_id)

    def _fresh_id(self) -> int:
        # IDs loaded from storage may be ahead of the clock
        candidate = self.clock.next_id()
        highest = max((task.id for task in self._tasks), default=None)
        if highest is not None and candidate <= highest:
            candidate = highest + 1
        return candidate

    def _touch(self, task: Task):
        return max(self.clock.now(), task.updated_at)

    def _save(self) -> None:
        self.persistence.save(self._tasks)
