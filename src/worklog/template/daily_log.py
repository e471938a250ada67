# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from worklog.model.daily_log import NewDailyLog


def get_new_daily_log_template(date: Optional[pendulum.Date] = None) -> NewDailyLog:
    return {
        "date": date,
        "tasks": [],
        "pull_requests": [],
        "summary": None,
    }
