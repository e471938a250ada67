# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from worklog.repository.configuration import CONFIGURATION_REPO
from worklog.repository.daily_log import get_daily_log_repository
from worklog.service.calendar import month_layout
from worklog.service.consolidate import consolidate_tasks
from worklog.service.summary import (
    activity_heatmap,
    common_blockers,
    has_active_blockers,
    key_metrics,
    status_distribution,
    time_ranking,
)
from worklog.terminal.custom_typer import WorklogTyperGroup
from worklog.terminal.parse import parse_month
from worklog.time import today
from worklog.view.view.views.calendar import month_calendar_view
from worklog.view.view.views.span import spans_view
from worklog.view.view.views.summary import summary_view

app = typer.Typer(cls=WorklogTyperGroup, no_args_is_help=True)


@app.command("spans, sp")
def spans() -> None:
    """Show every task as one span from its first to its last day."""
    logs = get_daily_log_repository().fetch_all()
    spans_view("spans", consolidate_tasks(logs, today()))


@app.command("calendar, cal")
def calendar(
    month: Annotated[
        Optional[str],
        typer.Option(
            "--month",
            "-m",
            metavar="YYYY-MM",
            help="month to show, defaults to the current month",
        ),
    ] = None,
) -> None:
    """Show task spans on a month calendar."""
    current_day = today()
    year, month_number = parse_month(month) or (current_day.year, current_day.month)

    logs = get_daily_log_repository().fetch_all()
    layout = month_layout(consolidate_tasks(logs, current_day), year, month_number)
    month_calendar_view("calendar", layout, logs, year, month_number, current_day)


@app.command("summary, su")
def summary() -> None:
    """Show metrics over the whole history."""
    config = CONFIGURATION_REPO.get_config()
    current_day = today()
    logs = get_daily_log_repository().fetch_all()

    summary_view(
        "summary",
        key_metrics(logs),
        status_distribution(logs),
        time_ranking(logs, config["summary_top_n"]),
        common_blockers(logs, config["summary_top_n"]),
        activity_heatmap(logs, current_day, config["heatmap_days"]),
        has_active_blockers(logs),
    )
