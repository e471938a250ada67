# SPDX-License-Identifier: MIT

from worklog.model.daily_log import DailyLog


def sort_logs(logs: list[DailyLog], descending: bool = True) -> list[DailyLog]:
    """Return a new list of logs ordered by date, newest first by default."""
    return sorted(logs, key=lambda log: log["date"], reverse=descending)
