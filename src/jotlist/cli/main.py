# src/jotlist/cli/main.py

"""
CLI entrypoint.

One command per process: resolve Settings, set up logging, open the store,
run the command, exit. Every mutation saves itself through the store.
"""

from __future__ import annotations

import contextlib
import datetime as dt
import logging
from collections.abc import Iterator
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

import typer

from ..config import Settings
from ..logging_setup import setup_logging
from ..tasks.dates import parse_date
from ..tasks.errors import CorruptionError, JotlistError
from ..tasks.ids import parse_ids, split_edit_args
from ..tasks.task_models import UNSET, Outcome
from .bootstrap import open_store, restore_store
from .display import render_task_list

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="jotlist",
    help="Personal task tracker. Tasks are kept in a local JSON file.",
    no_args_is_help=True,
    add_completion=False,
)

IdsArgument = Annotated[
    list[str],
    typer.Argument(help="Task ids: '1 2', '1,2' or ranges like '3-5'", show_default=False),
]
DateOption = Annotated[
    str | None,
    typer.Option("--date", "-d", help="Due date: DD-MM-YYYY, D/M/YY, today or tomorrow"),
]


def _today() -> dt.date:
    return dt.date.today()


def _resolve_date(raw: str, today: dt.date) -> dt.date:
    key = raw.strip().lower()
    if key == "today":
        return today
    if key == "tomorrow":
        return today + dt.timedelta(days=1)
    return parse_date(raw)


def _say(label: str, color: str, rest: str = "") -> None:
    styled = typer.style(label, fg=color)
    typer.echo(f"{styled} {rest}" if rest else styled)


def _report_not_found(ids: list[int]) -> None:
    if ids:
        _say("Tasks not found IDs:", typer.colors.YELLOW, " ".join(str(i) for i in ids))


@contextlib.contextmanager
def _errors_to_exit() -> Iterator[None]:
    try:
        yield
    except CorruptionError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        typer.echo("Run 'jotlist restore' to go back to the last backup.", err=True)
        raise typer.Exit(code=1) from e
    except JotlistError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        typer.echo(f"jotlist {version('jotlist')}")
    except PackageNotFoundError:
        typer.echo("jotlist (not installed)")
    raise typer.Exit()


@app.callback()
def _root(
    ctx: typer.Context,
    show_version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    settings = Settings.from_env()
    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(
        console_level=console_level,
        log_dir=settings.data_dir if settings.log_to_file else None,
    )
    logger.debug("Starting %s db=%s debug=%s", settings.app_name, settings.db_path, settings.debug)
    ctx.obj = settings


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    text: Annotated[list[str], typer.Argument(help="Task text", show_default=False)],
    date: DateOption = None,
) -> None:
    """Add a new task."""
    with _errors_to_exit():
        due = _resolve_date(date, _today()) if date is not None else None
        store = open_store(ctx.obj)
        task = store.add(" ".join(text), due)
    _say("Added task:", typer.colors.GREEN, f"{task.id}: {task.text}")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    done: Annotated[bool, typer.Option("--done", help="Only done tasks")] = False,
    pending: Annotated[bool, typer.Option("--pending", help="Only pending tasks")] = False,
) -> None:
    """List tasks in insertion order."""
    if done and pending:
        raise typer.BadParameter("--done and --pending cannot be combined")
    with _errors_to_exit():
        store = open_store(ctx.obj)
    tasks = store.list(done=True if done else False if pending else None)
    if not tasks:
        typer.secho("No tasks", fg=typer.colors.YELLOW)
        return
    for line in render_task_list(tasks, today=_today(), color=True):
        typer.echo(line)


@app.command("mark")
def mark_cmd(ctx: typer.Context, ids: IdsArgument) -> None:
    """Toggle tasks between done and undone."""
    with _errors_to_exit():
        id_list = parse_ids(ids)
        store = open_store(ctx.obj)
        report = store.mark(id_list)
    for item in report:
        if item.outcome is Outcome.CHANGED and item.task is not None:
            status = "done" if item.task.done else "undone"
            _say(f"Marked task as {status}:", typer.colors.GREEN, f"{item.id}: {item.task.text}")
    _report_not_found(report.not_found)


@app.command("edit")
def edit_cmd(
    ctx: typer.Context,
    args: Annotated[
        list[str],
        typer.Argument(metavar="IDS... [TEXT]...", help="Task ids, then the new text", show_default=False),
    ],
    date: DateOption = None,
    clear_date: Annotated[bool, typer.Option("--clear-date", help="Remove the due date")] = False,
) -> None:
    """Change the text and/or due date of one or more tasks."""
    if date is not None and clear_date:
        raise typer.BadParameter("--date and --clear-date cannot be combined")

    with _errors_to_exit():
        id_tokens, words = split_edit_args(args)
        id_list = parse_ids(id_tokens)
        text = " ".join(words) if words else None
        new_date = UNSET
        if clear_date:
            new_date = None
        elif date is not None:
            new_date = _resolve_date(date, _today())
        if text is None and new_date is UNSET:
            raise typer.BadParameter("nothing to change: give new text, --date or --clear-date")

        store = open_store(ctx.obj)
        report = store.edit(id_list, text, new_date)

    for item in report:
        if item.task is None:
            continue
        if item.outcome is Outcome.CHANGED:
            _say("Edited task:", typer.colors.GREEN, f"{item.id}: {item.task.text}")
        elif item.outcome is Outcome.UNCHANGED:
            _say("Task already has this content:", typer.colors.MAGENTA, f"{item.id}: {item.task.text}")
    _report_not_found(report.not_found)


@app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    ids: Annotated[
        list[str] | None,
        typer.Argument(help="Task ids: '1 2', '1,2' or ranges like '3-5'", show_default=False),
    ] = None,
    done: Annotated[bool, typer.Option("--done", help="Delete all done tasks")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    """Delete tasks by id, or every done task with --done."""
    if done and ids:
        raise typer.BadParameter("give either task ids or --done, not both")
    if not done and not ids:
        raise typer.BadParameter("specify task id(s) or --done")

    if done:
        with _errors_to_exit():
            store = open_store(ctx.obj)
            count = len(store.list(done=True))
            if count == 0:
                typer.secho("No done tasks to delete.", fg=typer.colors.YELLOW)
                return
            if not yes and not typer.confirm(f"Delete all done tasks ({count})?", default=False):
                typer.echo("Canceled.")
                return
            removed = store.delete_done()
        _say("Deleted", typer.colors.RED, f"{removed} done tasks.")
        return

    with _errors_to_exit():
        id_list = parse_ids(ids or [])
        store = open_store(ctx.obj)
        confirmed: list[int] = []
        not_found: list[int] = []
        for task_id in id_list:
            task = store.find(task_id)
            if task is None:
                not_found.append(task_id)
            elif yes or typer.confirm(f"Delete '{task.text}'?", default=False):
                confirmed.append(task_id)
            else:
                typer.echo(f"Canceled deletion of task {task_id}.")
        report = store.delete(confirmed)

    if report.changed:
        _say("Deleted", typer.colors.RED, f"{len(report.changed)} task(s).")
    _report_not_found(not_found + report.not_found)


@app.command("restore")
def restore_cmd(ctx: typer.Context) -> None:
    """Replace the task file with its last backup."""
    with _errors_to_exit():
        store, result = restore_store(ctx.obj)
    if result.safety_path is not None:
        typer.echo(f"Current database backed up to: {result.safety_path}")
    _say("Successfully restored", typer.colors.GREEN, f"{len(store)} tasks from backup")
    typer.echo(f"Backup file: {result.backup_path}")


@app.command("path")
def path_cmd(ctx: typer.Context) -> None:
    """Print the resolved task file path."""
    typer.echo(str(ctx.obj.db_path))


# Short aliases.
app.command("a", hidden=True)(add_cmd)
app.command("l", hidden=True)(list_cmd)
app.command("m", hidden=True)(mark_cmd)
app.command("e", hidden=True)(edit_cmd)
app.command("d", hidden=True)(delete_cmd)
app.command("r", hidden=True)(restore_cmd)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
