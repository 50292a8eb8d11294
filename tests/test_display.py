# tests/test_display.py

from __future__ import annotations

import datetime as dt

import typer

from jotlist.cli.display import HEADER, is_overdue, render_task_line, render_task_list
from jotlist.tasks.task_models import Task

TODAY = dt.date(2025, 6, 10)


def test_line_shape_without_date() -> None:
    line = render_task_line(Task(id=7, text="Buy milk"), today=TODAY)
    assert line == "  •   7            Buy milk"


def test_line_shape_with_date_and_done() -> None:
    line = render_task_line(Task(id=12, text="Walk dog", date=dt.date(2025, 6, 5), done=True), today=TODAY)
    assert line == "  ✔  12 05-06-2025 Walk dog"


def test_colour_does_not_change_visible_text() -> None:
    task = Task(id=3, text="Pay rent", date=dt.date(2025, 6, 1))
    plain = render_task_line(task, today=TODAY)
    coloured = render_task_line(task, today=TODAY, color=True)
    assert coloured != plain
    assert typer.unstyle(coloured) == plain


def test_overdue() -> None:
    assert is_overdue(Task(id=1, text="x", date=dt.date(2025, 6, 9)), TODAY)
    assert not is_overdue(Task(id=1, text="x", date=dt.date(2025, 6, 9), done=True), TODAY)
    assert not is_overdue(Task(id=1, text="x", date=TODAY), TODAY)
    assert not is_overdue(Task(id=1, text="x"), TODAY)


def test_list_has_header_only_when_tasks_exist() -> None:
    assert render_task_list([], today=TODAY) == []
    lines = render_task_list([Task(id=1, text="a")], today=TODAY)
    assert HEADER in lines
    assert lines[-2] == "  •   1            a"
