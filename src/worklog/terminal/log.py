# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from worklog.errors import NotFoundError
from worklog.repository.daily_log import get_daily_log_repository
from worklog.service.daily_log import (
    add_task,
    delete_log,
    draft_log_for_date,
    save_or_update_log,
    set_task_status,
)
from worklog.service.document import document_to_new_log, log_to_document
from worklog.terminal.custom_typer import WorklogTyperGroup
from worklog.terminal.parse import open_editor_for_text, parse_date, parse_status
from worklog.time import date_to_str, today
from worklog.view.view.views.daily_log import history_view, single_log_view

app = typer.Typer(cls=WorklogTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, or day offset like -1"


def __show_saved_log(date: pendulum.Date) -> None:
    saved_log = get_daily_log_repository().get(date)
    if saved_log is not None:
        single_log_view("log", saved_log)


@app.command("add, a")
def add(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """
    Write the log of a day in your editor.

    A new day starts with the unfinished tasks of the previous log.
    """
    log_date = date or today()
    repo = get_daily_log_repository()

    draft = draft_log_for_date(repo.fetch_all(), log_date)
    text = open_editor_for_text(log_to_document(draft))
    if text is None:
        Console().print("Empty document, nothing saved")
        return

    new_log = document_to_new_log(text)
    if new_log.get("date") is None:
        new_log["date"] = log_date
    save_or_update_log(repo, new_log)

    __show_saved_log(new_log.get("date") or log_date)


@app.command("edit, e")
def edit(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
) -> None:
    """Edit an existing log in your editor."""
    repo = get_daily_log_repository()
    log = repo.get(date)
    if log is None:
        raise NotFoundError(f"No daily log for {date_to_str(date)}")

    text = open_editor_for_text(log_to_document(log))
    if text is None:
        Console().print("Empty document, nothing saved")
        return

    save_or_update_log(repo, document_to_new_log(text), log["id"])

    __show_saved_log(log["date"])


@app.command("add-task, at")
def add_task_command(
    description: Annotated[str, typer.Argument()],
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Add a task to the log of a day without opening an editor."""
    log_date = date or today()
    add_task(get_daily_log_repository(), log_date, description)

    __show_saved_log(log_date)


@app.command("status, st")
def status(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    task_number: Annotated[int, typer.Argument(help="task number shown by 'log show'")],
    new_status: Annotated[
        str,
        typer.Argument(
            metavar="STATUS",
            parser=parse_status,
            help="e.g. done, in-progress, wait-review, wait-test, cancel",
        ),
    ],
    time_spent: Annotated[
        Optional[float],
        typer.Option("--time", "-h", help="hours spent on the task that day"),
    ] = None,
) -> None:
    """Change the status of one task in a day's log."""
    set_task_status(
        get_daily_log_repository(), date, task_number, new_status, time_spent
    )

    __show_saved_log(date)


@app.command("delete, d")
def delete(
    date: Annotated[pendulum.Date, typer.Argument(parser=parse_date, help=DATE_HELP)],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="do not ask for confirmation")
    ] = False,
) -> None:
    """Delete the log of a day."""
    repo = get_daily_log_repository()
    log = repo.get(date)
    if log is None:
        raise NotFoundError(f"No daily log for {date_to_str(date)}")

    if not yes:
        typer.confirm(f"Delete the log for {date_to_str(date)}?", abort=True)

    delete_log(repo, log["id"])
    Console().print(f"Deleted the log for {date_to_str(date)}")


@app.command("list, ls")
def list_logs() -> None:
    """List every log, newest first."""
    history_view("logs", get_daily_log_repository().fetch_all())


@app.command("show, s")
def show(
    date: Annotated[
        Optional[pendulum.Date],
        typer.Argument(parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Show the log of a day (today by default)."""
    log_date = date or today()
    log = get_daily_log_repository().get(log_date)
    if log is None:
        raise NotFoundError(f"No daily log for {date_to_str(log_date)}")
    single_log_view("log", log)
