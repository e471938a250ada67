# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from worklog import time
from worklog.errors import ValidationError
from worklog.model.blocker import Blocker
from worklog.model.daily_log import DailyLog, NewDailyLog
from worklog.model.pull_request import PullRequest
from worklog.model.task import Task
from worklog.model.task_status import (
    PULL_REQUEST_STATUSES,
    TASK_STATUSES,
    PullRequestStatus,
    TaskStatus,
)


def log_to_document(log: NewDailyLog | DailyLog) -> str:
    """Render a log as the YAML document opened in the editor."""
    date = log.get("date")
    date_str = time.date_to_str(date) if date is not None else "today"
    header_lines = [
        f"# Daily log for {date_str}",
        f"# Task statuses: {', '.join(TASK_STATUSES)}",
        f"# Pull request statuses: {', '.join(PULL_REQUEST_STATUSES)}",
        "# New tasks only need a description. Keep the ids of carried tasks.",
    ]

    document: dict[str, Any] = {
        "date": time.date_to_str_optional(date),
        "tasks": [
            {
                "description": task["description"],
                "status": task["status"],
                "time_spent": task["time_spent"],
                "blockers": [
                    {"description": b["description"], "resolved": b["resolved"]}
                    for b in task["blockers"]
                ],
                "id": task["id"],
                "persistent_id": task["persistent_id"],
                "start_date": time.date_to_str_optional(task["start_date"]),
                "end_date": time.date_to_str_optional(task["end_date"]),
            }
            for task in log["tasks"]
        ],
        "pull_requests": [
            {"url": pr["url"], "status": pr["status"]} for pr in log["pull_requests"]
        ],
        "summary": log.get("summary"),
    }

    if len(document["tasks"]) == 0:
        document["tasks"] = [
            {"description": "", "status": TaskStatus.IN_PROGRESS, "time_spent": 0}
        ]

    body = dump(document, Dumper=Dumper, sort_keys=False, allow_unicode=True)
    return "\n".join(header_lines) + "\n" + body


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be a mapping")
    return value


def _require_list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{what} must be a list")
    return value


def _parse_date(value: Any, what: str) -> Optional[pendulum.Date]:
    try:
        return time.date_from_value_optional(value)
    except ValueError as e:
        raise ValidationError(f"{what} is not a valid YYYY-MM-DD date: {value}") from e


def _parse_blocker(raw: Any, what: str) -> Blocker:
    raw_blocker = _require_mapping(raw, what)
    return {
        "id": str(raw_blocker.get("id") or ""),
        "description": str(raw_blocker.get("description") or ""),
        "resolved": bool(raw_blocker.get("resolved", False)),
    }


def _parse_task(raw: Any, number: int) -> Task:
    what = f"Task {number}"
    raw_task = _require_mapping(raw, what)

    try:
        time_spent = float(raw_task.get("time_spent") or 0)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{what} time spent must be a number of hours") from e

    return {
        "id": str(raw_task.get("id") or ""),
        "persistent_id": str(raw_task.get("persistent_id") or ""),
        "description": str(raw_task.get("description") or ""),
        "status": str(raw_task.get("status") or TaskStatus.IN_PROGRESS),
        "blockers": [
            _parse_blocker(blocker, f"{what} blocker")
            for blocker in _require_list(raw_task.get("blockers"), f"{what} blockers")
        ],
        "time_spent": time_spent,
        "start_date": _parse_date(raw_task.get("start_date"), f"{what} start_date"),
        "end_date": _parse_date(raw_task.get("end_date"), f"{what} end_date"),
    }


def _parse_pull_request(raw: Any) -> PullRequest:
    raw_pull_request = _require_mapping(raw, "Pull request")
    return {
        "id": str(raw_pull_request.get("id") or ""),
        "url": str(raw_pull_request.get("url") or ""),
        "status": str(raw_pull_request.get("status") or PullRequestStatus.REVIEWING),
    }


def document_to_new_log(text: str) -> NewDailyLog:
    """
    Parse an edited YAML document back into a log.

    Tasks with an empty description are dropped so the blank task offered
    for new logs can be left untouched.

    Raises:
        ValidationError: If the document is not valid YAML or has the wrong shape
    """
    try:
        raw = load(text, Loader=Loader)
    except (YAMLError, ValueError) as e:
        raise ValidationError(f"Could not parse the log document: {e}") from e

    raw_log = _require_mapping(raw, "The log document")
    tasks = [
        _parse_task(raw_task, number)
        for number, raw_task in enumerate(
            _require_list(raw_log.get("tasks"), "tasks"), start=1
        )
    ]

    return {
        "date": _parse_date(raw_log.get("date"), "date"),
        "tasks": [task for task in tasks if task["description"].strip() != ""],
        "pull_requests": [
            _parse_pull_request(pr)
            for pr in _require_list(raw_log.get("pull_requests"), "pull_requests")
        ],
        "summary": raw_log.get("summary") or None,
    }
