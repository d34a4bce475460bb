"""Plain-text rendering of the task list screen."""

from typing import List

from todo_tracker.models import Tab, Task
from todo_tracker.state import AppState

TAB_LABELS = {Tab.TODO: "To Do", Tab.COMPLETED: "Completed"}


def render_tabs(state: AppState) -> str:
    counts = state.counts()
    labels = []
    for tab, count in ((Tab.TODO, counts.todo), (Tab.COMPLETED, counts.completed)):
        label = f"{TAB_LABELS[tab]} ({count})"
        labels.append(f"[{label}]" if tab is state.tab else f" {label} ")
    return " | ".join(labels)


def render_task(task: Task) -> str:
    """Render one task card.

    The timestamp shown is the last update in local time.
    """
    badge = "Completed" if task.completed else "To Do"
    stamp = task.updated_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    lines = [f"#{task.id} [{badge}] {task.title}  ({stamp})"]
    if task.description:
        lines.append(f"    {task.description}")
    lines.append(f"    Priority: {task.priority.value}")
    return "\n".join(lines)


def render_draft(state: AppState) -> str:
    draft = state.form.draft
    heading = f"Editing #{draft.editing_id}" if draft.is_editing else "New task"
    return (
        f"{heading}: title={draft.title!r} description={draft.description!r} "
        f"priority={draft.priority.value}"
    )


def render_list(tasks: List[Task]) -> str:
    if not tasks:
        return "No tasks found."
    return "\n".join(render_task(task) for task in tasks)


def render_screen(state: AppState) -> str:
    lines = []
    if state.search:
        lines.append(f"Search: {state.search}")
    lines.append(render_tabs(state))
    lines.append(render_list(state.visible()))
    return "\n".join(lines)
