"""Tests for AppState and the reducer."""

import pytest

from todo_tracker.models import Draft, Priority, Tab
from todo_tracker.repository import TaskCounts
from todo_tracker.state import (
    AppState,
    BeginEdit,
    CancelEdit,
    ChangeDraft,
    DeleteTask,
    SelectTab,
    SetSearch,
    SubmitDraft,
    ToggleCompletion,
    reduce,
)


@pytest.fixture
def state(store):
    return AppState(store=store)


def add(state, title, **fields):
    state = reduce(state, ChangeDraft(title=title, **fields))
    return reduce(state, SubmitDraft())


class TestAppState:
    """Tests for the initial state."""

    def test_defaults(self, state):
        assert state.tab is Tab.TODO
        assert state.search == ""
        assert state.notice is None
        assert state.form.draft == Draft.empty()
        assert state.form.store is state.store


class TestReduce:
    """Tests for reduce()."""

    def test_returns_new_state(self, state):
        new_state = reduce(state, SetSearch("milk"))

        assert new_state is not state
        assert new_state.search == "milk"
        assert state.search == ""

    def test_draft_changes_are_shared_with_earlier_states(self, state):
        """Test that the form is one controller mutated in place."""
        before = reduce(state, SetSearch("milk"))
        after = reduce(before, ChangeDraft(title="Buy milk"))

        assert after.form is before.form is state.form
        assert state.form.draft.title == "Buy milk"
        assert state.search == ""
        assert before.search == "milk"

    def test_add_scenario(self, state):
        """Start empty, add one task, check tabs and counts."""
        state = add(state, "Buy milk", description="", priority=Priority.MEDIUM)

        assert len(state.store) == 1
        assert state.counts() == TaskCounts(todo=1, completed=0)
        assert [t.title for t in state.visible()] == ["Buy milk"]
        assert reduce(state, SelectTab(Tab.COMPLETED)).visible() == []
        assert state.notice == "Task added: Buy milk"

    def test_toggle_scenario(self, state):
        state = add(state, "A")
        task = state.store.tasks[0]

        state = reduce(state, ToggleCompletion(task.id))

        assert state.store.get(task.id).completed is True
        assert state.visible() == []
        assert [t.title for t in reduce(state, SelectTab(Tab.COMPLETED)).visible()] == ["A"]

    def test_blank_title_sets_notice_and_keeps_draft(self, state):
        state = reduce(state, ChangeDraft(title="   ", description="keep me"))
        state = reduce(state, SubmitDraft())

        assert state.notice == "Title cannot be empty"
        assert len(state.store) == 0
        assert state.form.draft.description == "keep me"

    def test_notice_cleared_by_next_action(self, state):
        state = reduce(state, SubmitDraft())
        assert state.notice

        state = reduce(state, SetSearch(""))
        assert state.notice is None

    def test_begin_edit_switches_to_todo_tab(self, state):
        state = add(state, "A")
        task = state.store.tasks[0]
        state = reduce(state, SelectTab(Tab.COMPLETED))

        state = reduce(state, BeginEdit(task.id))

        assert state.tab is Tab.TODO
        assert state.form.draft.editing_id == task.id

    def test_edit_and_submit_updates(self, state):
        state = add(state, "A")
        task = state.store.tasks[0]

        state = reduce(state, BeginEdit(task.id))
        state = reduce(state, ChangeDraft(priority=Priority.HIGH))
        state = reduce(state, SubmitDraft())

        assert state.store.get(task.id).priority == Priority.HIGH
        assert state.notice == "Task updated: A"
        assert not state.form.draft.is_editing

    def test_completed_task_cannot_be_edited(self, state):
        state = add(state, "Done already")
        task = state.store.tasks[0]
        state = reduce(state, ToggleCompletion(task.id))

        state = reduce(state, BeginEdit(task.id))

        assert state.notice == "Completed tasks cannot be edited"
        assert not state.form.draft.is_editing

    def test_cancel_edit(self, state):
        state = add(state, "A")
        state = reduce(state, BeginEdit(state.store.tasks[0].id))

        state = reduce(state, CancelEdit())

        assert state.form.draft == Draft.empty()

    def test_search_filters_visible(self, state):
        state = add(state, "Buy milk")
        state = add(state, "Pay rent")

        state = reduce(state, SetSearch("RENT"))

        assert [t.title for t in state.visible()] == ["Pay rent"]
        assert state.counts() == TaskCounts(todo=2, completed=0)

    def test_delete(self, state):
        state = add(state, "A")
        task = state.store.tasks[0]

        state = reduce(state, DeleteTask(task.id))

        assert len(state.store) == 0

    def test_delete_task_being_edited_clears_draft(self, state):
        state = add(state, "A")
        task = state.store.tasks[0]
        state = reduce(state, BeginEdit(task.id))

        state = reduce(state, DeleteTask(task.id))

        assert state.form.draft == Draft.empty()

    @pytest.mark.parametrize("action", [
        DeleteTask(404), ToggleCompletion(404), BeginEdit(404),
    ])
    def test_unknown_ids_are_ignored(self, state, action):
        state = add(state, "A")
        before = state.store.tasks

        new_state = reduce(state, action)

        assert new_state.store.tasks == before
        assert new_state.notice is None

    def test_unknown_action_raises(self, state):
        with pytest.raises(TypeError):
            reduce(state, object())
