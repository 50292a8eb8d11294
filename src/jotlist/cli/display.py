# src/jotlist/cli/display.py

"""
Task list rendering.

Shell completion scripts parse these lines with a regex, so the shape is fixed:

    "  <marker> <id right-aligned in 3> <date centred in 10 or blanks> <text>"

The id is the first numeric field and a date, when present, is a DD-MM-YYYY token.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

import typer

from ..tasks.dates import format_date
from ..tasks.task_models import Task

DONE_MARKER = "✔"
PENDING_MARKER = "•"
DATE_WIDTH = 10

HEADER = "  #  id    date       task"
RULE = "  " + "─" * 46


def is_overdue(task: Task, today: dt.date) -> bool:
    return task.date is not None and not task.done and task.date < today


def render_task_line(task: Task, *, today: dt.date, color: bool = False) -> str:
    marker = DONE_MARKER if task.done else PENDING_MARKER
    date_s = format_date(task.date) if task.date is not None else ""
    date_cell = f"{date_s:^{DATE_WIDTH}}"
    id_cell = f"{task.id:>3}"

    if color:
        if task.done:
            marker = typer.style(marker, fg=typer.colors.GREEN)
        id_cell = typer.style(id_cell, bold=True)
        if date_s:
            fg = typer.colors.RED if is_overdue(task, today) else typer.colors.CYAN
            date_cell = typer.style(date_cell, fg=fg)

    return f"  {marker} {id_cell} {date_cell} {task.text}"


def render_task_list(tasks: Iterable[Task], *, today: dt.date, color: bool = False) -> list[str]:
    lines = [render_task_line(t, today=today, color=color) for t in tasks]
    if not lines:
        return []
    return ["", HEADER, RULE, *lines, ""]
