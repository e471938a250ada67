"""Shared fixtures: log and task builders plus a store in a temp directory."""

from typing import Any, Callable, Optional

import pendulum
import pytest

from worklog.model.blocker import Blocker
from worklog.model.daily_log import DailyLog
from worklog.model.task import Task
from worklog.model.task_status import TaskStatus
from worklog.repository.daily_log import DailyLogRepository


def day(value: str) -> pendulum.Date:
    year, month, day_of_month = (int(part) for part in value.split("-"))
    return pendulum.date(year, month, day_of_month)


def _task(
    description: str,
    persistent_id: str,
    status: str = TaskStatus.IN_PROGRESS,
    id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    time_spent: float = 0,
    blockers: Optional[list[Blocker]] = None,
) -> Task:
    return {
        "id": id or persistent_id,
        "persistent_id": persistent_id,
        "description": description,
        "status": status,
        "blockers": blockers or [],
        "time_spent": time_spent,
        "start_date": day(start_date) if start_date else None,
        "end_date": day(end_date) if end_date else None,
    }


def _log(date: str, tasks: list[Task], id: Optional[str] = None) -> DailyLog:
    return {
        "id": id or f"log-{date}",
        "date": day(date),
        "tasks": tasks,
        "pull_requests": [],
        "summary": None,
    }


@pytest.fixture
def make_task() -> Callable[..., Task]:
    return _task


@pytest.fixture
def make_log() -> Callable[..., DailyLog]:
    return _log


@pytest.fixture
def as_date() -> Callable[[str], pendulum.Date]:
    return day


@pytest.fixture
def repo(tmp_path: Any) -> DailyLogRepository:
    return DailyLogRepository(tmp_path / "daily-logs.yaml")
