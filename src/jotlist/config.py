# src/jotlist/config.py

"""Settings loaded from environment variables (+ optional .env).

Resolved once at process start and passed down explicitly; nothing in the
task engine reads the environment on its own.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "JOTLIST"

DB_FILENAME = "tasks.json"
DEFAULT_DIR_NAME = ".jotlist"
DEBUG_DIR_NAME = "jotlist_debug"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_level(name: str, default: str) -> str:
    raw = _env(name, default).strip().upper()
    return raw if raw in _LOG_LEVELS else default


def debug_db_path() -> Path:
    return Path(tempfile.gettempdir()) / DEBUG_DIR_NAME / DB_FILENAME


def default_db_path(home: Path | None = None) -> Path:
    return (home if home is not None else Path.home()) / DEFAULT_DIR_NAME / DB_FILENAME


def resolve_db_path(raw: str | None, *, debug: bool = False, home: Path | None = None) -> Path:
    """
    Pick the task file location.

    - debug mode: fixed temp path, `raw` is ignored
    - raw names a directory (existing, or ends with a separator): append tasks.json
    - raw names anything else: use it as the file path
    - raw unset/blank: ~/.jotlist/tasks.json
    """
    if debug:
        return debug_db_path()
    if raw is None or raw.strip() == "":
        return default_db_path(home)

    raw = raw.strip()
    path = Path(raw).expanduser()
    seps = (os.sep, os.altsep) if os.altsep else (os.sep,)
    if raw.endswith(seps) or os.path.isdir(path):
        return path / DB_FILENAME
    return path


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str
    log_to_file: bool
    debug: bool
    db_path: Path

    @property
    def data_dir(self) -> Path:
        return self.db_path.parent

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            # Real environment variables always win over .env.
            load_dotenv(find_dotenv(usecwd=True), override=False)

        debug = _env_bool(_k("DEBUG"), False)
        return Settings(
            app_name=_env(_k("APP_NAME"), "jotlist").strip() or "jotlist",
            log_level=_env_level(_k("LOG_LEVEL"), "WARNING"),
            log_to_file=_env_bool(_k("LOG_FILE"), False),
            debug=debug,
            db_path=resolve_db_path(os.getenv(_k("DB")), debug=debug),
        )
