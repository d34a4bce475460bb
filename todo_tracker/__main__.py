"""Entry point for todo-tracker when run as a module.

This allows the package to be run with: python -m todo_tracker
"""

import sys

from todo_tracker.cli import main

if __name__ == "__main__":
    sys.exit(main())
