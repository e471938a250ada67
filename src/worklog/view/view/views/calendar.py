# SPDX-License-Identifier: MIT

import pendulum
from rich.console import Console
from rich.text import Text

from worklog.model.daily_log import DailyLog
from worklog.service.calendar import CalendarBar, CalendarWeek
from worklog.view.view.util import format_days
from worklog.view.view.views.header import header

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _day_line(
    week: CalendarWeek,
    month: int,
    log_dates: set[pendulum.Date],
    today: pendulum.Date,
    cell_width: int,
) -> Text:
    line = Text()
    for day in week["days"]:
        marker = "*" if day in log_dates else " "
        label = f"{marker}{day.day:>2}".ljust(cell_width)
        if day == today:
            style = "bold reverse"
        elif day.month != month:
            style = "dim"
        else:
            style = "bold" if day in log_dates else ""
        line.append(label, style=style)
    return line


def _bar_line(bars: list[CalendarBar], slot: int, cell_width: int) -> Text:
    line = Text()
    day_index = 0
    while day_index < 7:
        bar = next(
            (
                b
                for b in bars
                if b["slot"] == slot and b["start_day"] <= day_index <= b["end_day"]
            ),
            None,
        )
        if bar is None:
            line.append(" " * cell_width)
            day_index += 1
            continue

        width = (bar["end_day"] - day_index + 1) * cell_width - 1
        span = bar["span"]
        label = f" {span['description']} ({format_days(span['duration_in_days'])})"
        line.append(label[:width].ljust(width), style=f"black on {span['color']}")
        line.append(" ")
        day_index = bar["end_day"] + 1
    return line


def month_calendar_view(
    report_name: str,
    layout: list[CalendarWeek],
    logs: list[DailyLog],
    year: int,
    month: int,
    today: pendulum.Date,
    cell_width: int = 14,
) -> None:
    """
    Display a month grid with task spans drawn as bars across the days.

    Days that have a log are marked with "*" and today is highlighted.

    Args:
        report_name: The name of the report
        layout: Weeks and bars from the calendar layout service
        logs: All logs, used to mark the days that have one
        year: The displayed year
        month: The displayed month
        today: The current date
        cell_width: Width of one day column
    """
    header(report_name, pendulum.Date(year, month, 1).format("MMMM YYYY"))

    console = Console()
    log_dates = {log["date"] for log in logs}

    weekday_line = Text()
    for name in WEEKDAY_NAMES:
        weekday_line.append(name.ljust(cell_width), style="bold cyan")
    console.print()
    console.print(weekday_line)

    for week in layout:
        console.print(_day_line(week, month, log_dates, today, cell_width))
        slot_count = max((bar["slot"] for bar in week["bars"]), default=-1) + 1
        for slot in range(slot_count):
            console.print(_bar_line(week["bars"], slot, cell_width))
        console.print()
