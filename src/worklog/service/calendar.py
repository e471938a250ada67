# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from worklog.model.task_span import TaskSpan


class CalendarBar(TypedDict):
    span: TaskSpan
    start_day: int
    end_day: int
    slot: int


class CalendarWeek(TypedDict):
    days: list[pendulum.Date]
    bars: list[CalendarBar]


def month_weeks(year: int, month: int) -> list[list[pendulum.Date]]:
    """Sunday-first weeks covering every day of the month."""
    month_start = pendulum.Date(year, month, 1)
    month_end = month_start.end_of("month")

    # isoweekday: Monday=1 ... Sunday=7, so Sunday maps to 0
    calendar_start = month_start.subtract(days=month_start.isoweekday() % 7)
    calendar_end = month_end.add(days=6 - month_end.isoweekday() % 7)

    weeks: list[list[pendulum.Date]] = []
    current_week: list[pendulum.Date] = []
    day = calendar_start
    while day <= calendar_end:
        current_week.append(day)
        if len(current_week) == 7:
            weeks.append(current_week)
            current_week = []
        day = day.add(days=1)
    return weeks


def _first_free_slot(bars: list[CalendarBar], start_day: int, end_day: int) -> int:
    slot = 0
    while any(
        bar["slot"] == slot and bar["start_day"] <= end_day and bar["end_day"] >= start_day
        for bar in bars
    ):
        slot += 1
    return slot


def month_layout(spans: list[TaskSpan], year: int, month: int) -> list[CalendarWeek]:
    """
    Lay out task spans on a month calendar.

    Each span overlapping a week becomes a bar clipped to that week. Bars are
    stacked in the lowest slot not already taken by an overlapping bar.

    Args:
        spans: Consolidated task spans
        year: Calendar year
        month: Calendar month (1-12)

    Returns:
        The weeks of the month grid with their bars
    """
    layout: list[CalendarWeek] = [
        {"days": days, "bars": []} for days in month_weeks(year, month)
    ]

    for span in spans:
        for week in layout:
            week_start = week["days"][0]
            week_end = week["days"][6]
            if span["start_date"] > week_end or span["end_date"] < week_start:
                continue

            start_day = (
                0
                if span["start_date"] < week_start
                else span["start_date"].isoweekday() % 7
            )
            end_day = (
                6 if span["end_date"] > week_end else span["end_date"].isoweekday() % 7
            )
            week["bars"].append(
                {
                    "span": span,
                    "start_day": start_day,
                    "end_day": end_day,
                    "slot": _first_free_slot(week["bars"], start_day, end_day),
                }
            )

    return layout
