# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from worklog.color import MISSING_LOG_COLOR
from worklog.model.daily_log import DailyLog
from worklog.model.task_status import is_resolved_status
from worklog.service.summary import missing_log_dates
from worklog.time import (
    date_to_display_str,
    date_to_long_display_str,
    days_between,
)
from worklog.view.view.util import (
    colored_pull_request_status,
    colored_status,
    format_blockers,
    format_days,
    format_hours,
    task_state,
)
from worklog.view.view.views.header import header


def history_view(report_name: str, logs: list[DailyLog]) -> None:
    """
    Display the log history, newest first, with a marker for every gap.

    Args:
        report_name: The name of the report
        logs: The logs to display, sorted by date descending
    """
    header(report_name)

    console = Console()
    if len(logs) == 0:
        console.print("\n[dim]No logs yet.[/dim]\n")
        return

    missing_dates = set(missing_log_dates(logs))

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("date")
    history_table.add_column("tasks", justify="right")
    history_table.add_column("open", justify="right")
    history_table.add_column("done", justify="right")
    history_table.add_column("hours", justify="right")
    history_table.add_column("blockers", justify="right")
    history_table.add_column("prs", justify="right")

    for log in logs:
        open_count = len(
            [task for task in log["tasks"] if not is_resolved_status(task["status"])]
        )
        blocker_count = sum(
            len([b for b in task["blockers"] if not b["resolved"]])
            for task in log["tasks"]
        )
        hours = sum(task["time_spent"] for task in log["tasks"])
        history_table.add_row(
            date_to_display_str(log["date"]),
            str(len(log["tasks"])),
            str(open_count),
            str(len(log["tasks"]) - open_count),
            format_hours(hours),
            str(blocker_count) if blocker_count > 0 else "",
            str(len(log["pull_requests"])) if log["pull_requests"] else "",
        )

        # Gaps are shown below the newer log, like the history cards
        missing_date = log["date"].subtract(days=1)
        if missing_date in missing_dates:
            history_table.add_row(
                f"[{MISSING_LOG_COLOR}]{date_to_display_str(missing_date)}"
                f"[/{MISSING_LOG_COLOR}]",
                f"[{MISSING_LOG_COLOR}]missing log[/{MISSING_LOG_COLOR}]",
            )

    console.print(history_table)


def single_log_view(report_name: str, log: DailyLog) -> None:
    header(report_name, date_to_long_display_str(log["date"]))

    console = Console()

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("#", justify="right")
    tasks_table.add_column("state")
    tasks_table.add_column("description")
    tasks_table.add_column("status")
    tasks_table.add_column("hours", justify="right")
    tasks_table.add_column("age", justify="right")
    tasks_table.add_column("blockers")

    for number, task in enumerate(log["tasks"], start=1):
        start_date = task["start_date"] or log["date"]
        age_days = days_between(start_date, log["date"]) + 1
        tasks_table.add_row(
            str(number),
            task_state(task),
            escape(task["description"]),
            colored_status(task["status"]),
            format_hours(task["time_spent"]),
            format_days(age_days),
            format_blockers(task["blockers"]),
        )
    console.print(tasks_table)

    if len(log["pull_requests"]) > 0:
        pull_requests_table = Table(box=box.SIMPLE)
        pull_requests_table.add_column("pull request")
        pull_requests_table.add_column("status")
        for pull_request in log["pull_requests"]:
            pull_requests_table.add_row(
                escape(pull_request["url"]),
                colored_pull_request_status(pull_request),
            )
        console.print(pull_requests_table)

    if log["summary"] is not None and log["summary"] != "":
        console.print(
            Panel(escape(log["summary"]), title="Summary", border_style="blue")
        )
