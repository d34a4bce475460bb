"""Derive the displayed task list from the store contents."""

from typing import Iterable, Iterator, List

from todo_tracker.models import Tab, Task
from todo_tracker.repository import TaskCounts


def filter_tasks(tasks: Iterable[Task], tab: Tab, search_text: str = "") -> Iterator[Task]:
    """Yield the tasks shown on a tab that match the search text.

    Matching is a case-insensitive substring test on title or description;
    empty search text matches everything. Store order is preserved. Calling
    again recomputes from scratch.

    Args:
        tasks: Tasks in store order
        tab: Which tab is active
        search_text: Text typed in the search box
    """
    needle = search_text.lower()
    for task in tasks:
        if not tab.matches(task):
            continue
        if needle in task.title.lower() or needle in task.description.lower():
            yield task


def visible_tasks(tasks: Iterable[Task], tab: Tab, search_text: str = "") -> List[Task]:
    return list(filter_tasks(tasks, tab, search_text))


def count_tasks(tasks: Iterable[Task]) -> TaskCounts:
    """Count tasks per tab, ignoring the search text."""
    todo = completed = 0
    for task in tasks:
        if task.completed:
            completed += 1
        else:
            todo += 1
    return TaskCounts(todo=todo, completed=completed)
