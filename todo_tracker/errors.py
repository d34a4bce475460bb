"""Error taxonomy for todo-tracker.

- ValidationError: user-correctable input problem (empty title, bad priority)
- NotFoundError: an operation referenced a task id that is not in the store
- DeserializationError: persisted data could not be read back
"""


class TodoError(Exception):
    """Base class for all todo-tracker errors."""


class ValidationError(TodoError):
    """Raised when a task or draft fails validation."""


class NotFoundError(TodoError):
    """Raised when no task with the given ID exists.

    Attributes:
        task_id: The ID that was looked up
    """

    def __init__(self, task_id: int):
        super().__init__(f"Task with ID {task_id} does not exist")
        self.task_id = task_id


class DeserializationError(TodoError):
    """Raised when persisted task data is malformed."""
