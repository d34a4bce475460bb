"""Application state and the reducer that applies user actions to it.

Every user interaction is expressed as an action object. reduce() takes the
current AppState and one action and returns the next AppState; the UI renders
whatever state comes back. Task mutations are delegated to the TaskStore
(which persists them), view fields are copied into a fresh state object.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Union

from todo_tracker.errors import NotFoundError, ValidationError
from todo_tracker.form import FormController
from todo_tracker.models import Priority, Tab, Task
from todo_tracker.repository import TaskCounts, TaskStore
from todo_tracker.view import count_tasks, visible_tasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetSearch:
    text: str


@dataclass(frozen=True)
class SelectTab:
    tab: Tab


@dataclass(frozen=True)
class ChangeDraft:
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None


@dataclass(frozen=True)
class BeginEdit:
    task_id: int


@dataclass(frozen=True)
class SubmitDraft:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class ToggleCompletion:
    task_id: int


@dataclass(frozen=True)
class DeleteTask:
    """Delete a task. The UI asks for confirmation before dispatching this."""

    task_id: int


Action = Union[
    SetSearch, SelectTab, ChangeDraft, BeginEdit, SubmitDraft, CancelEdit,
    ToggleCompletion, DeleteTask,
]


@dataclass(frozen=True)
class AppState:
    """Everything the UI needs to render one frame.

    Attributes:
        store: Owner of the task list
        form: Draft and edit target
        tab: Active tab
        search: Search box contents
        notice: Message the UI must show the user, if any
    """

    store: TaskStore
    form: Optional[FormController] = None
    tab: Tab = Tab.TODO
    search: str = ""
    notice: Optional[str] = None

    def __post_init__(self):
        if self.form is None:
            object.__setattr__(self, "form", FormController(self.store))

    def visible(self) -> List[Task]:
        return visible_tasks(self.store.tasks, self.tab, self.search)

    def counts(self) -> TaskCounts:
        return count_tasks(self.store.tasks)


def reduce(state: AppState, action: Action) -> AppState:
    """Apply one action and return the resulting state.

    The returned AppState is a new object for tab, search and notice. The task
    store and the form controller are shared by every state derived from the
    same initial one: task mutations and draft changes (ChangeDraft,
    SubmitDraft, CancelEdit, BeginEdit) happen in place and are visible through
    earlier states too.

    Validation failures become a notice and keep the draft for correction.
    References to tasks that no longer exist are logged and otherwise ignored.
    """
    state = replace(state, notice=None)

    try:
        return _apply(state, action)
    except ValidationError as e:
        logger.info("Rejected %s: %s", type(action).__name__, e)
        return replace(state, notice=str(e))
    except NotFoundError as e:
        logger.warning("Ignoring %s: %s", type(action).__name__, e)
        return state


def _apply(state: AppState, action: Action) -> AppState:
    form = state.form

    if isinstance(action, SetSearch):
        return replace(state, search=action.text)

    if isinstance(action, SelectTab):
        return replace(state, tab=action.tab)

    if isinstance(action, ChangeDraft):
        if action.title is not None:
            form.set_title(action.title)
        if action.description is not None:
            form.set_description(action.description)
        if action.priority is not None:
            form.set_priority(action.priority)
        return state

    if isinstance(action, BeginEdit):
        task = state.store.get(action.task_id)
        if task.completed:
            return replace(state, notice="Completed tasks cannot be edited")
        return replace(state, tab=form.begin_edit(task))

    if isinstance(action, SubmitDraft):
        editing = form.draft.is_editing
        task = form.submit()
        verb = "updated" if editing else "added"
        return replace(state, notice=f"Task {verb}: {task.title}")

    if isinstance(action, CancelEdit):
        form.cancel()
        return state

    if isinstance(action, ToggleCompletion):
        state.store.toggle_completion(action.task_id)
        return state

    if isinstance(action, DeleteTask):
        state.store.delete(action.task_id)
        if form.draft.editing_id == action.task_id:
            form.cancel()
        return state

    raise TypeError(f"Unknown action: {action!r}")
