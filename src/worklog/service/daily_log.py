# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

import pendulum

from worklog import time
from worklog.errors import NotFoundError, ValidationError
from worklog.model.blocker import Blocker
from worklog.model.daily_log import DailyLog, NewDailyLog
from worklog.model.entity_id import EntityId, carryover_task_id, generate_entity_id
from worklog.model.pull_request import PullRequest
from worklog.model.task import Task
from worklog.model.task_status import (
    PULL_REQUEST_STATUSES,
    TASK_STATUSES,
    TaskStatus,
    is_resolved_status,
)
from worklog.query.sort import sort_logs
from worklog.repository.daily_log import DailyLogRepository
from worklog.service.reconcile import reconcile_future_logs
from worklog.template.daily_log import get_new_daily_log_template
from worklog.template.task import get_task_template

logger = logging.getLogger(__name__)


def validate_new_log(new_log: NewDailyLog) -> None:
    """
    Check a submitted log before anything is written.

    Raises:
        ValidationError: If the log has no tasks or any task or pull request is invalid
    """
    if len(new_log["tasks"]) == 0:
        raise ValidationError("Please add at least one task.")

    seen_persistent_ids: set[EntityId] = set()
    for number, task in enumerate(new_log["tasks"], start=1):
        if not task["description"] or not task["description"].strip():
            raise ValidationError(f"Task {number} needs a description.")
        if task["status"] not in TASK_STATUSES:
            raise ValidationError(
                f"Task {number} has unknown status '{task['status']}', "
                f"expected one of: {', '.join(TASK_STATUSES)}"
            )
        if not isinstance(task["time_spent"], (int, float)) or task["time_spent"] < 0:
            raise ValidationError(
                f"Task {number} time spent must be zero or more hours."
            )

        persistent_id = task.get("persistent_id") or task.get("id")
        if persistent_id:
            if persistent_id in seen_persistent_ids:
                raise ValidationError(
                    f"Task {number} appears more than once in the same log."
                )
            seen_persistent_ids.add(persistent_id)

    for pull_request in new_log["pull_requests"]:
        url = pull_request["url"].strip() if pull_request["url"] else ""
        if url == "" or not url.startswith("http"):
            raise ValidationError("Please enter a valid URL for the Pull Request.")
        if pull_request["status"] not in PULL_REQUEST_STATUSES:
            raise ValidationError(
                f"Pull request {url} has unknown status '{pull_request['status']}', "
                f"expected one of: {', '.join(PULL_REQUEST_STATUSES)}"
            )


def normalize_task(task: Task, log_date: pendulum.Date) -> Task:
    normalized = deepcopy(task)
    if not normalized.get("id"):
        normalized["id"] = generate_entity_id("task")
    if not normalized.get("persistent_id"):
        normalized["persistent_id"] = normalized["id"]
    normalized["description"] = normalized["description"].strip()

    if normalized.get("start_date") is None:
        normalized["start_date"] = log_date

    if is_resolved_status(normalized["status"]):
        if normalized.get("end_date") is None:
            normalized["end_date"] = log_date
        start_date = normalized["start_date"]
        if start_date is not None and normalized["end_date"] < start_date:
            normalized["end_date"] = start_date
    else:
        normalized["end_date"] = None

    # Blockers without text carry no information, resolved or not
    blockers: list[Blocker] = []
    for blocker in normalized.get("blockers") or []:
        description = (blocker.get("description") or "").strip()
        if description == "":
            continue
        blockers.append(
            {
                "id": blocker.get("id") or generate_entity_id("blocker"),
                "description": description,
                "resolved": bool(blocker.get("resolved")),
            }
        )
    normalized["blockers"] = blockers
    return normalized


def normalize_pull_request(pull_request: PullRequest) -> PullRequest:
    return {
        "id": pull_request.get("id") or generate_entity_id("pr"),
        "url": pull_request["url"].strip(),
        "status": pull_request["status"],
    }


def normalize_new_log(new_log: NewDailyLog, log_date: pendulum.Date) -> NewDailyLog:
    return {
        "date": log_date,
        "tasks": [normalize_task(task, log_date) for task in new_log["tasks"]],
        "pull_requests": [
            normalize_pull_request(pr) for pr in new_log["pull_requests"]
        ],
        "summary": new_log.get("summary"),
    }


def _require_not_future(log_date: pendulum.Date) -> None:
    if log_date > time.today():
        raise ValidationError("Cannot add or edit logs for future dates.")


def save_or_update_log(
    repo: DailyLogRepository,
    new_log: NewDailyLog,
    log_id_to_update: Optional[EntityId] = None,
) -> list[DailyLog]:
    """
    Save a day's log and carry its unfinished tasks forward into later days.

    When no id is given but a log already exists for the submitted date, that
    log is updated so there is never more than one log per day.

    Args:
        repo: The log store
        new_log: The submitted log
        log_id_to_update: Id of the existing log to update, if editing

    Returns:
        The full, reconciled collection sorted by date descending

    Raises:
        ValidationError: The submitted log is invalid or dated after today
            (nothing is written)
        NotFoundError: log_id_to_update does not exist (nothing is written)
        StorageWriteError: A write failed; the reconciled state is not returned
    """
    validate_new_log(new_log)

    existing_log: Optional[DailyLog] = None
    if log_id_to_update is not None:
        existing_log = repo.get_by_id(log_id_to_update)
    else:
        existing_log = repo.get(new_log.get("date") or time.today())

    if existing_log is not None:
        log_date = existing_log["date"]
        _require_not_future(log_date)
        prepared_log = normalize_new_log(new_log, log_date)
        saved_log = repo.replace(
            {
                "id": existing_log["id"],
                "date": log_date,
                "tasks": prepared_log["tasks"],
                "pull_requests": prepared_log["pull_requests"],
                "summary": prepared_log.get("summary"),
            }
        )
        logger.info("Updated daily log for %s", time.date_to_str(log_date))
    else:
        log_date = new_log.get("date") or time.today()
        _require_not_future(log_date)
        saved_log = repo.insert(normalize_new_log(new_log, log_date))
        logger.info("Saved daily log for %s", time.date_to_str(log_date))

    current_logs = repo.fetch_all()
    reconciled_logs, changed = reconcile_future_logs(saved_log, current_logs)
    if not changed:
        return sort_logs(current_logs)

    # One bulk write so no partially reconciled collection is ever stored
    repo.replace_all(reconciled_logs)
    logger.info(
        "Reconciled logs after %s with carried over tasks",
        time.date_to_str(saved_log["date"]),
    )
    return reconciled_logs


def delete_log(repo: DailyLogRepository, id: EntityId) -> None:
    repo.remove(id)
    logger.info("Deleted daily log %s", id)


def draft_log_for_date(logs: list[DailyLog], date: pendulum.Date) -> NewDailyLog:
    """
    Build the starting point for editing the log of a date.

    An existing log is returned as is. Otherwise the unfinished tasks of the
    most recent earlier log are carried into a new draft.
    """
    for log in logs:
        if log["date"] == date:
            return {
                "date": log["date"],
                "tasks": deepcopy(log["tasks"]),
                "pull_requests": deepcopy(log["pull_requests"]),
                "summary": log["summary"],
            }

    draft = get_new_daily_log_template(date)
    previous_logs = [log for log in sort_logs(logs) if log["date"] < date]
    if len(previous_logs) == 0:
        return draft

    previous_log = previous_logs[0]
    for task in previous_log["tasks"]:
        if is_resolved_status(task["status"]):
            continue
        carried_task = deepcopy(task)
        carried_task["id"] = carryover_task_id(
            task["persistent_id"], time.date_to_str(date)
        )
        carried_task["status"] = TaskStatus.IN_PROGRESS
        carried_task["time_spent"] = 0
        carried_task["start_date"] = task["start_date"] or previous_log["date"]
        carried_task["end_date"] = None
        draft["tasks"].append(carried_task)
    return draft


def add_task(
    repo: DailyLogRepository, date: pendulum.Date, description: str
) -> list[DailyLog]:
    """Add a new work item to the log of a date, creating the log if needed."""
    draft = draft_log_for_date(repo.fetch_all(), date)
    draft["tasks"].insert(0, get_task_template(description.strip(), date))
    return save_or_update_log(repo, draft)


def set_task_status(
    repo: DailyLogRepository,
    date: pendulum.Date,
    task_number: int,
    status: str,
    time_spent: Optional[float] = None,
) -> list[DailyLog]:
    """
    Change the status (and optionally the hours) of one task in a day's log.

    Closing a task sets its end date to the log's date; reopening clears it.

    Args:
        repo: The log store
        date: Date of the log
        task_number: 1-based position of the task in the log
        status: The new status
        time_spent: Hours spent on the task that day, if changing
    """
    log = repo.get(date)
    if log is None:
        raise NotFoundError(f"No daily log for {time.date_to_str(date)}")
    if task_number < 1 or task_number > len(log["tasks"]):
        raise ValidationError(
            f"Task number must be between 1 and {len(log['tasks'])}, got {task_number}"
        )
    if status not in TASK_STATUSES:
        raise ValidationError(
            f"Unknown status '{status}', expected one of: {', '.join(TASK_STATUSES)}"
        )

    task = log["tasks"][task_number - 1]
    was_resolved = is_resolved_status(task["status"])
    is_now_resolved = is_resolved_status(status)
    if is_now_resolved and not was_resolved:
        task["end_date"] = log["date"]
    elif not is_now_resolved and was_resolved:
        task["end_date"] = None
    task["status"] = status
    if time_spent is not None:
        task["time_spent"] = time_spent

    return save_or_update_log(
        repo,
        {
            "date": log["date"],
            "tasks": log["tasks"],
            "pull_requests": log["pull_requests"],
            "summary": log["summary"],
        },
        log["id"],
    )
