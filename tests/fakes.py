# tests/fakes.py

from __future__ import annotations

import errno
from collections.abc import Sequence
from pathlib import Path

from jotlist.core.ports import RestoreResult
from jotlist.tasks.errors import RestoreError, StorageIOError
from jotlist.tasks.task_models import Task

FAKE_PATH = Path("fake/tasks.json")


class FakeTaskPersistence:
    """
    In-memory TaskPersistence.

    Mirrors the file layer's backup rule (previous contents become the backup
    on every save) and records each save so tests can count writes.
    """

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self.tasks: list[Task] = list(tasks)
        self.backup: list[Task] | None = None
        self.saves: list[list[Task]] = []

    def load(self) -> list[Task]:
        return list(self.tasks)

    def save(self, tasks: Sequence[Task]) -> None:
        self.backup = list(self.tasks)
        self.tasks = list(tasks)
        self.saves.append(list(tasks))

    def restore(self) -> RestoreResult:
        if self.backup is None:
            raise RestoreError(FAKE_PATH, "no backup")
        self.tasks = list(self.backup)
        return RestoreResult(tasks=list(self.backup), backup_path=FAKE_PATH, safety_path=None)


class FailingTaskPersistence(FakeTaskPersistence):
    """Every save fails like a full disk."""

    def save(self, tasks: Sequence[Task]) -> None:
        raise StorageIOError(FAKE_PATH, "write", OSError(errno.ENOSPC, "No space left on device"))
