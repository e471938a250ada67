# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from worklog import time
from worklog.model.daily_log import DailyLog
from worklog.model.entity_id import EntityId
from worklog.model.task import Task
from worklog.model.task_status import TASK_STATUSES, TaskStatus, is_resolved_status
from worklog.query.sort import sort_logs


class KeyMetrics(TypedDict):
    total_tasks: int
    completed_count: int
    active_blockers_count: int
    average_completion_days: Optional[float]


class StatusCount(TypedDict):
    status: str
    count: int
    percentage: float


class HeatmapDay(TypedDict):
    date: pendulum.Date
    count: int


def has_unresolved_blocker(task: Task) -> bool:
    return any(not blocker["resolved"] for blocker in task["blockers"])


def latest_task_states(logs: list[DailyLog]) -> dict[EntityId, Task]:
    """Return the most recent snapshot of every work item, keyed by persistent id."""
    latest: dict[EntityId, Task] = {}
    for log in sort_logs(logs, descending=False):
        for task in log["tasks"]:
            latest[task.get("persistent_id") or task["id"]] = task
    return latest


def completion_durations(logs: list[DailyLog]) -> list[int]:
    """
    Days taken by every completed work item, first day and last day included.

    An item starts on the earliest start date of any of its snapshots and ends
    on the end date of its latest Done or Cancel snapshot that has one. Items
    reopened after that snapshot still count.
    """
    start_dates: dict[EntityId, pendulum.Date] = {}
    end_dates: dict[EntityId, pendulum.Date] = {}
    for log in sort_logs(logs, descending=False):
        for task in log["tasks"]:
            persistent_id = task.get("persistent_id") or task["id"]
            start_date = task["start_date"]
            if start_date is not None and (
                persistent_id not in start_dates
                or start_date < start_dates[persistent_id]
            ):
                start_dates[persistent_id] = start_date
            if is_resolved_status(task["status"]) and task["end_date"] is not None:
                end_dates[persistent_id] = task["end_date"]

    return [
        time.days_between(start_dates[persistent_id], end_date) + 1
        for persistent_id, end_date in end_dates.items()
        if persistent_id in start_dates and end_date >= start_dates[persistent_id]
    ]


def key_metrics(logs: list[DailyLog]) -> KeyMetrics:
    latest_tasks = latest_task_states(logs).values()

    completed_count = len(
        [task for task in latest_tasks if is_resolved_status(task["status"])]
    )
    active_blockers_count = len(
        [
            task
            for task in latest_tasks
            if not is_resolved_status(task["status"]) and has_unresolved_blocker(task)
        ]
    )

    durations = completion_durations(logs)
    average_completion_days: Optional[float] = None
    if len(durations) > 0:
        average_completion_days = round(sum(durations) / len(durations), 1)

    return {
        "total_tasks": len(latest_tasks),
        "completed_count": completed_count,
        "active_blockers_count": active_blockers_count,
        "average_completion_days": average_completion_days,
    }


def status_distribution(logs: list[DailyLog]) -> list[StatusCount]:
    """Count work items by their latest status, largest group first."""
    counts: dict[str, int] = {status: 0 for status in TASK_STATUSES}
    total = 0
    for task in latest_task_states(logs).values():
        if task["status"] in counts:
            counts[task["status"]] += 1
            total += 1

    if total == 0:
        return []

    distribution: list[StatusCount] = [
        {
            "status": status,
            "count": count,
            "percentage": round(count / total * 100, 1),
        }
        for status, count in counts.items()
        if count > 0
    ]
    distribution.sort(key=lambda item: item["count"], reverse=True)
    return distribution


def time_ranking(logs: list[DailyLog], limit: int = 5) -> list[tuple[str, float]]:
    """Hours logged per task description, most time first."""
    time_by_task: dict[str, float] = {}
    for log in logs:
        for task in log["tasks"]:
            if task["time_spent"] > 0:
                description = task["description"].strip()
                time_by_task[description] = (
                    time_by_task.get(description, 0) + task["time_spent"]
                )

    ranking = sorted(time_by_task.items(), key=lambda item: item[1], reverse=True)
    return ranking[:limit]


def common_blockers(logs: list[DailyLog], limit: int = 5) -> list[tuple[str, int]]:
    """How often each blocker text was recorded, most frequent first."""
    blocker_counts: dict[str, int] = {}
    for log in logs:
        for task in log["tasks"]:
            for blocker in task["blockers"]:
                description = blocker["description"].strip()
                if description:
                    blocker_counts[description] = blocker_counts.get(description, 0) + 1

    ranking = sorted(blocker_counts.items(), key=lambda item: item[1], reverse=True)
    return ranking[:limit]


def activity_heatmap(
    logs: list[DailyLog], today: Optional[pendulum.Date] = None, days: int = 35
) -> list[HeatmapDay]:
    """Number of tasks marked Done on each of the trailing days, oldest first."""
    if today is None:
        today = time.today()

    done_by_date: dict[pendulum.Date, int] = {}
    for log in logs:
        done_by_date[log["date"]] = len(
            [task for task in log["tasks"] if task["status"] == TaskStatus.DONE]
        )

    start = today.subtract(days=days - 1)
    return [
        {
            "date": start.add(days=offset),
            "count": done_by_date.get(start.add(days=offset), 0),
        }
        for offset in range(days)
    ]


def has_active_blockers(logs: list[DailyLog]) -> bool:
    return any(
        not is_resolved_status(task["status"]) and has_unresolved_blocker(task)
        for log in logs
        for task in log["tasks"]
    )


def missing_log_dates(logs: list[DailyLog]) -> list[pendulum.Date]:
    """
    Find the gaps in the history.

    For every pair of consecutive logs more than one day apart, returns the
    day before the newer log, newest first.
    """
    sorted_logs = sort_logs(logs)
    missing_dates: list[pendulum.Date] = []
    for newer_log, older_log in zip(sorted_logs, sorted_logs[1:]):
        if time.days_between(older_log["date"], newer_log["date"]) > 1:
            missing_dates.append(newer_log["date"].subtract(days=1))
    return missing_dates
