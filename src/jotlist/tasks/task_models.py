# src/jotlist/tasks/task_models.py

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum, StrEnum

from .errors import TaskValidationError


class _Unset(Enum):
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"


# "Argument not provided". Lets edit() tell "leave the date alone" from "clear it" (None).
UNSET = _Unset.UNSET


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Instances are immutable; the store replaces them on edit/mark.
    `text` is trimmed on construction and may never be blank.
    """

    id: int
    text: str
    date: dt.date | None = None
    done: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise TaskValidationError(f"Task id must be a positive integer, got {self.id!r}")
        text = self.text.strip() if isinstance(self.text, str) else ""
        if not text:
            raise TaskValidationError("Task text cannot be empty")
        if self.date is not None and (
            not isinstance(self.date, dt.date) or isinstance(self.date, dt.datetime)
        ):
            raise TaskValidationError(f"Task date must be a calendar date, got {self.date!r}")
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "done", bool(self.done))


class Outcome(StrEnum):
    """Per-id result of a batch operation."""

    CHANGED = "changed"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class IdOutcome:
    id: int
    outcome: Outcome
    # State after the operation (the removed task for delete, None when not found).
    task: Task | None = None


@dataclass(slots=True)
class BatchReport:
    outcomes: list[IdOutcome] = field(default_factory=list)

    def _ids(self, outcome: Outcome) -> list[int]:
        return [o.id for o in self.outcomes if o.outcome is outcome]

    @property
    def changed(self) -> list[int]:
        return self._ids(Outcome.CHANGED)

    @property
    def unchanged(self) -> list[int]:
        return self._ids(Outcome.UNCHANGED)

    @property
    def not_found(self) -> list[int]:
        return self._ids(Outcome.NOT_FOUND)

    @property
    def any_changed(self) -> bool:
        return any(o.outcome is Outcome.CHANGED for o in self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)


MarkReport = BatchReport
EditReport = BatchReport
DeleteReport = BatchReport
