# src/jotlist/tasks/task_file.py

"""
JSON task file with atomic writes and a one-generation backup.

Files (all in the primary's directory):
- <name>                 primary, a JSON array of task objects
- <name>.backup          previous primary, copied before every save
- <name>.before_restore  primary as it was right before a restore
- <name>.tmp             scratch file for atomic writes

Write order on save: backup old content -> write temp -> fsync -> rename over primary.
A crash leaves either the old or the new primary on disk, never a partial one.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..core.ports import RestoreResult
from .dates import format_date, parse_date
from .errors import (
    CorruptionError,
    DateParseError,
    RestoreError,
    StorageIOError,
    TaskValidationError,
)
from .task_models import Task

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"
BEFORE_RESTORE_SUFFIX = ".before_restore"
TMP_SUFFIX = ".tmp"


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "date": format_date(task.date) if task.date is not None else None,
        "done": task.done,
    }


def task_from_dict(path: Path, index: int, raw: Any) -> Task:
    where = f"entry #{index + 1}"
    if not isinstance(raw, dict):
        raise CorruptionError(path, f"{where} is not an object")

    task_id = raw.get("id")
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise CorruptionError(path, f"{where} has no integer id")

    text = raw.get("text")
    if not isinstance(text, str):
        raise CorruptionError(path, f"{where} (id {task_id}) has no text")

    date_raw = raw.get("date")
    date = None
    if date_raw is not None:
        if not isinstance(date_raw, str):
            raise CorruptionError(path, f"{where} (id {task_id}) has a non-string date")
        try:
            date = parse_date(date_raw)
        except DateParseError as e:
            raise CorruptionError(path, f"{where} (id {task_id}): {e}") from e

    done = raw.get("done", False)
    if not isinstance(done, bool):
        raise CorruptionError(path, f"{where} (id {task_id}) has a non-boolean done flag")

    try:
        return Task(id=task_id, text=text, date=date, done=done)
    except TaskValidationError as e:
        raise CorruptionError(path, f"{where}: {e}") from e


def dump_tasks(tasks: Sequence[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False, indent=2) + "\n"


def parse_tasks(path: Path, data: bytes) -> list[Task]:
    """Decode a task file's bytes. Anything but a complete, valid array is corruption."""
    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CorruptionError(path, f"not valid UTF-8 ({e.reason})") from e

    if not content.strip():
        raise CorruptionError(path, "file is empty")

    # json.loads rejects trailing content after the value ("Extra data").
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise CorruptionError(path, f"invalid JSON ({e.msg} at line {e.lineno} column {e.colno})") from e

    if not isinstance(raw, list):
        raise CorruptionError(path, "expected a JSON array of tasks")

    tasks = [task_from_dict(path, i, item) for i, item in enumerate(raw)]
    seen: set[int] = set()
    for task in tasks:
        if task.id in seen:
            raise CorruptionError(path, f"duplicate task id {task.id}")
        seen.add(task.id)
    return tasks


class TaskFile:
    """Persistence layer for one task file. Agnostic to how its path was chosen."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"TaskFile({str(self.path)!r})"

    def _sibling(self, suffix: str) -> Path:
        return self.path.with_name(self.path.name + suffix)

    @property
    def backup_path(self) -> Path:
        return self._sibling(BACKUP_SUFFIX)

    @property
    def before_restore_path(self) -> Path:
        return self._sibling(BEFORE_RESTORE_SUFFIX)

    @property
    def tmp_path(self) -> Path:
        return self._sibling(TMP_SUFFIX)

    # ---- low-level helpers ----

    @staticmethod
    def _exists(path: Path) -> bool:
        try:
            path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise StorageIOError(path, "access", e) from e
        return True

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageIOError(path, "read", e) from e

    def _read(self, path: Path) -> list[Task]:
        return parse_tasks(path, self._read_bytes(path))

    def _ensure_dir(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(self.path.parent, "create directory", e) from e

    def _copy(self, src: Path, dst: Path) -> None:
        try:
            shutil.copyfile(src, dst)
        except OSError as e:
            raise StorageIOError(dst, f"copy '{src}' to", e) from e

    def _atomic_write(self, data: bytes) -> None:
        tmp = self.tmp_path
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageIOError(self.path, "write", e) from e

        # Persist the rename itself. Not every platform can fsync a directory.
        if hasattr(os, "O_DIRECTORY"):
            with contextlib.suppress(OSError):
                fd = os.open(self.path.parent, os.O_RDONLY | os.O_DIRECTORY)
                try:
                    os.fsync(fd)
                finally:
                    os.close(fd)

    # ---- public API ----

    def load(self) -> list[Task]:
        """
        Load tasks.

        A missing file is a first run and yields []. A present file that is
        empty or malformed raises CorruptionError.
        """
        if not self._exists(self.path):
            logger.debug("Task file %s does not exist yet, starting empty", self.path)
            return []
        tasks = self._read(self.path)
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        self._ensure_dir()
        if self._exists(self.path):
            self._copy(self.path, self.backup_path)
            logger.debug("Backed up %s to %s", self.path, self.backup_path)
        self._atomic_write(dump_tasks(tasks).encode("utf-8"))
        logger.info("Saved %d tasks to %s", len(tasks), self.path)

    def restore(self) -> RestoreResult:
        """
        Promote the backup to primary.

        The backup is validated first; on any RestoreError the primary is left
        untouched. A valid current primary is kept as <name>.before_restore.
        """
        backup = self.backup_path
        if not self._exists(backup):
            raise RestoreError(self.path, f"no backup file found at '{backup}'")

        data = self._read_bytes(backup)
        try:
            tasks = parse_tasks(backup, data)
        except CorruptionError as e:
            raise RestoreError(self.path, f"backup is not usable: {e}") from e

        safety_path: Path | None = None
        if self._exists(self.path):
            try:
                self._read(self.path)
            except CorruptionError:
                logger.warning("Current task file %s is corrupted, not keeping a copy", self.path)
            else:
                self._copy(self.path, self.before_restore_path)
                safety_path = self.before_restore_path
                logger.info("Kept current task file as %s", safety_path)

        self._ensure_dir()
        self._atomic_write(data)
        logger.info("Restored %d tasks from %s", len(tasks), backup)
        return RestoreResult(tasks=tasks, backup_path=backup, safety_path=safety_path)
