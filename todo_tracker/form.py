"""Form controller: the draft being typed and what submitting it does."""

import logging

from todo_tracker.errors import NotFoundError
from todo_tracker.models import Draft, Priority, Tab, Task, validate_title
from todo_tracker.repository import TaskStore

logger = logging.getLogger(__name__)


class FormController:
    """Holds the draft and turns a submit into an add or an update.

    Attributes:
        store: TaskStore that receives the mutations
        draft: Current unsaved form input
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.draft = Draft.empty()

    def set_title(self, title: str) -> None:
        self.draft.title = title

    def set_description(self, description: str) -> None:
        self.draft.description = description

    def set_priority(self, priority: Priority) -> None:
        self.draft.priority = priority

    def begin_edit(self, task: Task) -> Tab:
        """Load a task into the draft for editing.

        Returns:
            The tab the UI should switch to (always the to do tab)
        """
        self.draft = Draft(
            title=task.title,
            description=task.description,
            priority=task.priority,
            editing_id=task.id,
        )
        logger.debug("Editing task %d", task.id)
        return Tab.TODO

    def submit(self) -> Task:
        """Add the draft as a new task, or apply it to the task being edited.

        A blank title raises before the store is touched and leaves the draft
        as typed. Any other outcome resets the draft.

        Returns:
            The created or updated Task

        Raises:
            ValidationError: If the draft title is blank
            NotFoundError: If the task being edited no longer exists
        """
        validate_title(self.draft.title)

        draft = self.draft
        try:
            if draft.is_editing:
                return self.store.update(
                    draft.editing_id,
                    title=draft.title,
                    description=draft.description,
                    priority=draft.priority,
                )
            return self.store.add(draft)
        except NotFoundError:
            logger.info("Edit target %s disappeared; discarding draft", draft.editing_id)
            raise
        finally:
            self.draft = Draft.empty()

    def cancel(self) -> None:
        """Drop the draft and leave edit mode."""
        self.draft = Draft.empty()
