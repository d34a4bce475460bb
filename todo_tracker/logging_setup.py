"""Logging configuration for the command-line entry point."""

import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """Send log records to stderr.

    Call this once, before the first log call. Existing root handlers are
    removed so repeated calls (tests, the shell) do not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)
