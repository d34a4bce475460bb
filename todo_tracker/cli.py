"""Command-line interface for todo-tracker.

This module provides the CLI interface for managing tasks using argparse.
It supports the following commands:
- add: Create a new task
- list: Show the to do or completed tab, optionally searched
- edit: Change the title, description or priority of an open task
- toggle (alias done): Flip a task between to do and completed
- delete: Delete a task after confirmation
- shell: Interactive session with search, tabs and a draft form
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from todo_tracker.clock import Clock
from todo_tracker.config import load_settings
from todo_tracker.errors import NotFoundError, TodoError
from todo_tracker.logging_setup import setup_logging
from todo_tracker.models import Priority, Tab
from todo_tracker.persistence import TaskPersistence
from todo_tracker.render import render_draft, render_screen
from todo_tracker.repository import TaskStore
from todo_tracker.state import (
    Action,
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
from todo_tracker.storage import JsonStorage

logger = logging.getLogger(__name__)

PRIORITY_CHOICES = ["high", "medium", "low"]
TAB_CHOICES = [tab.value for tab in Tab]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Local task tracker with to do and completed tabs"
    )
    parser.add_argument("--db", help="JSON storage file (default: $TODO_DB_PATH or todos.json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("title", help="Task title")
    add_parser.add_argument("--description", "-d", default="", help="Task description")
    add_parser.add_argument(
        "--priority",
        choices=PRIORITY_CHOICES,
        default="medium",
        help="Task priority (default: medium)"
    )

    # List command
    list_parser = subparsers.add_parser("list", help="List tasks on a tab")
    list_parser.add_argument(
        "--tab",
        choices=TAB_CHOICES,
        default=Tab.TODO.value,
        help="Which tab to show (default: todo)"
    )
    list_parser.add_argument("--search", "-s", default="", help="Filter by title or description")

    # Edit command
    edit_parser = subparsers.add_parser("edit", help="Edit an open task")
    edit_parser.add_argument("id", type=int, help="Task ID")
    edit_parser.add_argument("--title", help="New title")
    edit_parser.add_argument("--description", "-d", help="New description")
    edit_parser.add_argument("--priority", choices=PRIORITY_CHOICES, help="New priority")

    # Toggle command
    toggle_parser = subparsers.add_parser(
        "toggle", aliases=["done"], help="Toggle a task between to do and completed"
    )
    toggle_parser.add_argument("id", type=int, help="Task ID")

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task ID")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    subparsers.add_parser("shell", help="Interactive session")

    return parser


def confirm(prompt: str, read: Optional[Callable[[str], str]] = None) -> bool:
    """Ask a yes/no question; anything but y/yes counts as no."""
    read = read or input
    try:
        answer = read(f"{prompt} [y/N] ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() in ("y", "yes")


def cmd_add(args: argparse.Namespace, state: AppState) -> int:
    """Handle the 'add' command.

    Returns:
        Exit code (0 for success)
    """
    form = state.form
    form.set_title(args.title)
    form.set_description(args.description)
    form.set_priority(Priority.parse(args.priority))
    task = form.submit()
    print(f"Task added: #{task.id} {task.title} [{task.priority.value}]")
    return 0


def cmd_list(args: argparse.Namespace, state: AppState) -> int:
    """Handle the 'list' command.

    Returns:
        Exit code (0 for success)
    """
    state = reduce(state, SelectTab(Tab(args.tab)))
    state = reduce(state, SetSearch(args.search))
    print(render_screen(state))
    return 0


def cmd_edit(args: argparse.Namespace, state: AppState) -> int:
    """Handle the 'edit' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = state.store.get(args.id)
    if task.completed:
        print(f"Error: Task #{task.id} is completed and cannot be edited.", file=sys.stderr)
        return 1

    form = state.form
    form.begin_edit(task)
    if args.title is not None:
        form.set_title(args.title)
    if args.description is not None:
        form.set_description(args.description)
    if args.priority is not None:
        form.set_priority(Priority.parse(args.priority))
    task = form.submit()
    print(f"Task #{task.id} updated: {task.title} [{task.priority.value}]")
    return 0


def cmd_toggle(args: argparse.Namespace, state: AppState) -> int:
    """Handle the 'toggle' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = state.store.toggle_completion(args.id)
    label = "completed" if task.completed else "to do"
    print(f"Task #{task.id} marked as {label}: {task.title}")
    return 0


def cmd_delete(args: argparse.Namespace, state: AppState) -> int:
    """Handle the 'delete' command.

    Returns:
        Exit code (0 for success, 1 for error or declined confirmation)
    """
    state.store.get(args.id)  # unknown IDs fail before prompting
    if not args.yes and not confirm("Delete this task?"):
        print("Cancelled.")
        return 1

    state.store.delete(args.id)
    print(f"Task #{args.id} deleted.")
    return 0


SHELL_HELP = """Commands:
  search TEXT            filter by title or description (empty clears)
  tab todo|completed     switch tab
  title TEXT             set draft title
  desc TEXT              set draft description
  priority high|medium|low
  submit                 add the draft, or save the task being edited
  cancel                 clear the draft
  edit ID                load an open task into the draft
  toggle ID              flip completed
  delete ID              delete after confirmation
  show                   redraw the list
  help                   this text
  quit                   leave the shell"""


def parse_shell_line(line: str) -> Optional[Action]:
    """Translate one shell line into an action.

    Returns:
        The action, or None for lines handled by the shell itself

    Raises:
        ValueError: If the line is not a valid command
    """
    name, _, rest = line.strip().partition(" ")
    name = name.lower()
    rest = rest.strip()

    if name == "search":
        return SetSearch(rest)
    if name == "tab":
        return SelectTab(Tab(rest.lower()))
    if name == "title":
        return ChangeDraft(title=rest)
    if name in ("desc", "description"):
        return ChangeDraft(description=rest)
    if name == "priority":
        return ChangeDraft(priority=Priority.parse(rest))
    if name == "submit":
        return SubmitDraft()
    if name == "cancel":
        return CancelEdit()
    if name == "edit":
        return BeginEdit(int(rest))
    if name in ("toggle", "done"):
        return ToggleCompletion(int(rest))
    if name == "delete":
        return DeleteTask(int(rest))
    if name in ("show", "help", ""):
        return None
    raise ValueError(f"Unknown command: {name}")


def run_shell(state: AppState, read: Optional[Callable[[str], str]] = None) -> AppState:
    """Run the interactive loop until quit or end of input.

    Returns:
        The final state
    """
    read = read or input
    print(render_screen(state))
    while True:
        try:
            line = read("todo> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        command = line.strip().split(" ", 1)[0].lower()
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(SHELL_HELP)
            continue

        try:
            action = parse_shell_line(line)
        except TodoError as e:
            print(f"Error: {e}")
            continue
        except ValueError as e:
            print(f"Error: {e}. Type 'help' for commands.")
            continue

        if isinstance(action, DeleteTask):
            try:
                state.store.get(action.task_id)
            except NotFoundError as e:
                print(f"Error: {e}")
                continue
            if not confirm("Delete this task?", read):
                print("Cancelled.")
                continue

        if action is not None:
            state = reduce(state, action)

        if state.notice:
            print(state.notice)
        if isinstance(action, ChangeDraft) or state.form.draft.is_editing:
            print(render_draft(state))
        else:
            print(render_screen(state))

    return state


def cmd_shell(args: argparse.Namespace, state: AppState) -> int:
    run_shell(state)
    return 0


def build_state(
    db_path: str, storage_key: str = "todos", clock: Optional[Clock] = None
) -> AppState:
    """Wire storage, persistence and the store, and load saved tasks."""
    persistence = TaskPersistence(JsonStorage(db_path), key=storage_key)
    store = TaskStore(persistence, clock)
    store.load()
    return AppState(store=store)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    settings = load_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    db_path = args.db or str(settings.db_path)
    logger.debug("Using storage file %s", db_path)
    state = build_state(db_path, settings.storage_key)

    # Dispatch to command handlers
    commands = {
        "add": cmd_add,
        "list": cmd_list,
        "edit": cmd_edit,
        "toggle": cmd_toggle,
        "done": cmd_toggle,
        "delete": cmd_delete,
        "shell": cmd_shell,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    try:
        return handler(args, state)
    except NotFoundError as e:
        print(f"Error: Task #{e.task_id} not found.", file=sys.stderr)
        return 1
    except TodoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
