# src/jotlist/tasks/task_store.py

from __future__ import annotations

import dataclasses
import datetime as dt
import logging
from collections.abc import Iterable, Iterator

from ..core.ports import RestoreResult, TaskPersistence
from .errors import TaskValidationError
from .task_models import UNSET, BatchReport, IdOutcome, Outcome, Task, _Unset

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(int(i) for i in ids))


class TaskStore:
    """
    In-memory ordered task collection.

    Order is insertion order and survives load/save; it is the list order.

    Dirty tracking:
    - clean: matches what the persistence layer last loaded or saved
    - dirty: a mutation changed data that is not on disk yet

    Only mutations that actually change data mark the store dirty. When a
    persistence layer is attached, every such mutation is saved right away.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        persistence: TaskPersistence | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        ids = [t.id for t in self._tasks]
        if len(ids) != len(set(ids)):
            raise TaskValidationError("Duplicate task ids in store contents")
        self._persistence = persistence
        self._dirty = False

    @classmethod
    def open(cls, persistence: TaskPersistence) -> TaskStore:
        store = cls(persistence.load(), persistence=persistence)
        logger.debug("TaskStore loaded total=%d", len(store))
        return store

    @classmethod
    def from_backup(cls, persistence: TaskPersistence) -> tuple[TaskStore, RestoreResult]:
        result = persistence.restore()
        logger.info("TaskStore restored total=%d from %s", len(result.tasks), result.backup_path)
        return cls(result.tasks, persistence=persistence), result

    # ---- state ----

    @property
    def dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def save(self) -> bool:
        """Write pending changes. Returns True if a write happened."""
        if not self._dirty or self._persistence is None:
            return False
        self._persistence.save(list(self._tasks))
        self._dirty = False
        return True

    def _changed(self) -> None:
        self._dirty = True
        self.save()

    def _index_of(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- queries ----

    def next_id(self) -> int:
        return max((t.id for t in self._tasks), default=0) + 1

    def list(self, *, done: bool | None = None) -> list[Task]:
        if done is None:
            return list(self._tasks)
        return [t for t in self._tasks if t.done == done]

    def find(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    # ---- mutations ----

    def add(self, text: str, date: dt.date | None = None) -> Task:
        task = Task(id=self.next_id(), text=text, date=date)
        self._tasks.append(task)
        logger.debug("Task added id=%s date=%s", task.id, task.date)
        self._changed()
        return task

    def mark(self, ids: Iterable[int]) -> BatchReport:
        """Toggle done for every existing id; unknown ids are reported, not fatal."""
        report = BatchReport()
        for task_id in _unique(ids):
            idx = self._index_of(task_id)
            if idx is None:
                report.outcomes.append(IdOutcome(task_id, Outcome.NOT_FOUND))
                continue
            task = dataclasses.replace(self._tasks[idx], done=not self._tasks[idx].done)
            self._tasks[idx] = task
            report.outcomes.append(IdOutcome(task_id, Outcome.CHANGED, task))

        if report.any_changed:
            logger.debug("Tasks marked ids=%s", report.changed)
            self._changed()
        return report

    def edit(
        self,
        ids: Iterable[int],
        text: str | None = None,
        date: dt.date | None | _Unset = UNSET,
    ) -> BatchReport:
        """
        Apply the same text and/or date to every existing id.

        text=None leaves the text alone. date=UNSET leaves the date alone,
        date=None clears it. Tasks that already hold the requested values are
        reported as unchanged; if nothing changes nothing is written.
        """
        new_text: str | None = None
        if text is not None:
            new_text = text.strip()
            if not new_text:
                raise TaskValidationError("Task text cannot be empty")

        report = BatchReport()
        for task_id in _unique(ids):
            idx = self._index_of(task_id)
            if idx is None:
                report.outcomes.append(IdOutcome(task_id, Outcome.NOT_FOUND))
                continue

            current = self._tasks[idx]
            changes: dict[str, object] = {}
            if new_text is not None and new_text != current.text:
                changes["text"] = new_text
            if date is not UNSET and date != current.date:
                changes["date"] = date

            if not changes:
                report.outcomes.append(IdOutcome(task_id, Outcome.UNCHANGED, current))
                continue

            updated = dataclasses.replace(current, **changes)
            self._tasks[idx] = updated
            report.outcomes.append(IdOutcome(task_id, Outcome.CHANGED, updated))

        if report.any_changed:
            logger.debug("Tasks edited ids=%s unchanged=%s", report.changed, report.unchanged)
            self._changed()
        return report

    def delete(self, ids: Iterable[int]) -> BatchReport:
        report = BatchReport()
        for task_id in _unique(ids):
            idx = self._index_of(task_id)
            if idx is None:
                report.outcomes.append(IdOutcome(task_id, Outcome.NOT_FOUND))
                continue
            removed = self._tasks.pop(idx)
            report.outcomes.append(IdOutcome(task_id, Outcome.CHANGED, removed))

        if report.any_changed:
            logger.debug("Tasks deleted ids=%s", report.changed)
            self._changed()
        return report

    def delete_done(self) -> int:
        remaining = [t for t in self._tasks if not t.done]
        removed = len(self._tasks) - len(remaining)
        if removed == 0:
            return 0
        self._tasks = remaining
        logger.debug("Done tasks deleted count=%d", removed)
        self._changed()
        return removed
