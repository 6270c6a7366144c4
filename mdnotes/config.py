"""Runtime configuration read from the environment.

Values are looked up on every call so a changed environment (common in
tests) is picked up without reloading the module.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

APP_NAME = "mdnotes"
PLACEHOLDER_TITLE = "Untitled"


def _truthy_env(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default)
    return value not in {"0", "false", "False", ""}


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def data_dir() -> Path:
    home = os.getenv("MDNOTES_HOME")
    if home:
        return _ensure(Path(home))
    return _ensure(Path.home() / ".mdnotes")


def log_dir() -> Path:
    return _ensure(data_dir() / "logs")


def db_path() -> Path:
    env_path = os.getenv("MDNOTES_DB_PATH")
    if env_path:
        path = Path(env_path)
        _ensure(path.parent)
        return path
    return data_dir() / "mdnotes.db"


def db_url() -> str:
    return f"sqlite:///{db_path()}"


def log_level() -> int:
    name = os.getenv("MDNOTES_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def cloud_sync_requested() -> bool:
    return _truthy_env("MDNOTES_CLOUD_SYNC")


def cloud_sync_enabled() -> bool:
    # Sync is not implemented; the flag is accepted but never honoured.
    return False
