# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from worklog import time
from worklog.color import task_status_color
from worklog.model.daily_log import DailyLog
from worklog.model.entity_id import EntityId
from worklog.model.task import Task
from worklog.model.task_span import TaskSpan
from worklog.model.task_status import is_resolved_status


def group_task_instances(
    logs: list[DailyLog],
) -> dict[EntityId, list[tuple[pendulum.Date, Task]]]:
    """
    Group every task instance by persistent id, each group in log date order.

    Tasks without a persistent id are grouped by their own id.
    """
    groups: dict[EntityId, list[tuple[pendulum.Date, Task]]] = {}
    for log in logs:
        for task in log["tasks"]:
            persistent_id = task.get("persistent_id") or task["id"]
            groups.setdefault(persistent_id, []).append((log["date"], task))

    for instances in groups.values():
        instances.sort(key=lambda instance: instance[0])
    return groups


def consolidate_task_instances(
    persistent_id: EntityId,
    instances: list[tuple[pendulum.Date, Task]],
    today: pendulum.Date,
) -> TaskSpan:
    first_date, first_task = instances[0]
    last_date, last_task = instances[-1]

    start_date = first_task.get("start_date") or first_date

    if is_resolved_status(last_task["status"]):
        end_date = last_task.get("end_date") or last_date
    else:
        # An open task is still running, its span reaches today
        end_date = max(last_date, today)

    return {
        "persistent_id": persistent_id,
        "description": last_task["description"],
        "status": last_task["status"],
        "color": task_status_color(last_task["status"]),
        "start_date": start_date,
        "end_date": end_date,
        "duration_in_days": time.days_between(start_date, end_date) + 1,
    }


def consolidate_tasks(
    logs: list[DailyLog], today: Optional[pendulum.Date] = None
) -> list[TaskSpan]:
    """
    Turn the per-day task snapshots into one continuous span per work item.

    This is a read-only projection: the logs are not modified and the result
    is the same for the same logs and day.

    Args:
        logs: All daily logs, in any order
        today: The current date (defaults to today in the local timezone)

    Returns:
        Spans ordered by start date, then persistent id
    """
    if today is None:
        today = time.today()

    spans = [
        consolidate_task_instances(persistent_id, instances, today)
        for persistent_id, instances in group_task_instances(logs).items()
    ]
    spans.sort(key=lambda span: (span["start_date"], span["persistent_id"]))
    return spans
