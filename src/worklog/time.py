# SPDX-License-Identifier: MIT

import datetime
from typing import Optional, cast

import pendulum


def today() -> pendulum.Date:
    return pendulum.today("local").date()


def date_to_str(date: datetime.date) -> str:
    return date.strftime("%Y-%m-%d")


def date_to_str_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_value(value: str | datetime.date) -> pendulum.Date:
    """Convert a 'YYYY-MM-DD' string or a python date into a pendulum.Date.

    YAML loaders turn unquoted dates into python dates, so both shapes reach here.
    """
    if isinstance(value, datetime.datetime):
        return pendulum.Date(value.year, value.month, value.day)
    if isinstance(value, datetime.date):
        return pendulum.Date(value.year, value.month, value.day)
    return cast(pendulum.DateTime, pendulum.parse(str(value), tz="local")).date()


def date_from_value_optional(
    value: Optional[str | datetime.date],
) -> Optional[pendulum.Date]:
    if value is None:
        return None
    return date_from_value(value)


def to_pendulum_date(date: datetime.date) -> pendulum.Date:
    return pendulum.Date(date.year, date.month, date.day)


def date_to_display_str(date: datetime.date) -> str:
    return to_pendulum_date(date).format("YYYY-MM-DD ddd")


def date_to_long_display_str(date: datetime.date) -> str:
    return to_pendulum_date(date).format("MMMM D, YYYY")


def days_between(start: datetime.date, end: datetime.date) -> int:
    """Signed number of whole days from start to end."""
    return (to_pendulum_date(end) - to_pendulum_date(start)).in_days()
