# src/jotlist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskStore depends on this Protocol instead of the concrete JSON file layer,
so tests can swap in an in-memory fake and count writes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task


@dataclass(frozen=True, slots=True)
class RestoreResult:
    tasks: list[Task]
    backup_path: Path
    # Copy of the primary taken before it was replaced (None if there was nothing valid to keep).
    safety_path: Path | None


class TaskPersistence(Protocol):
    """Durable storage for an ordered list of tasks."""

    def load(self) -> list[Task]: ...

    def save(self, tasks: Sequence[Task]) -> None: ...

    def restore(self) -> RestoreResult: ...
