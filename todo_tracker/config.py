"""Settings loaded from environment variables.

TODO_DB_PATH      JSON file holding the storage slots (default: todos.json)
TODO_STORAGE_KEY  Slot name for the task list (default: todos)
TODO_LOG_LEVEL    Logging level name (default: WARNING)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from todo_tracker.persistence import DEFAULT_KEY


def _env(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    db_path: Path
    storage_key: str
    log_level: str


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env: Mapping to read instead of os.environ
    """
    if env is None:
        env = os.environ
    return Settings(
        db_path=Path(_env(env, "TODO_DB_PATH", "todos.json")).expanduser(),
        storage_key=_env(env, "TODO_STORAGE_KEY", DEFAULT_KEY),
        log_level=_env(env, "TODO_LOG_LEVEL", "WARNING").upper(),
    )
