# SPDX-License-Identifier: MIT

from rich.markup import escape

from worklog.color import BLOCKER_COLOR, pull_request_status_color, task_status_color
from worklog.model.blocker import Blocker
from worklog.model.pull_request import PullRequest
from worklog.model.task import Task
from worklog.model.task_status import TaskStatus


def task_state(task: Task) -> str:
    """
    Get the state symbol for a task.

    Returns:
        "X" if done, "/" if cancelled, "?" while waiting on review or test,
        " " while in progress
    """
    if task["status"] == TaskStatus.DONE:
        return "X"
    elif task["status"] == TaskStatus.CANCEL:
        return "/"
    elif task["status"] in (TaskStatus.WAIT_REVIEW, TaskStatus.WAIT_TEST):
        return "?"
    return " "


def colored_status(status: str) -> str:
    color = task_status_color(status)
    return f"[{color}]{escape(status)}[/{color}]"


def colored_pull_request_status(pull_request: PullRequest) -> str:
    color = pull_request_status_color(pull_request["status"])
    return f"[{color}]{escape(pull_request['status'])}[/{color}]"


def format_blocker(blocker: Blocker) -> str:
    description = escape(blocker["description"])
    if blocker["resolved"]:
        return f"[strike dim]{description}[/strike dim] (resolved)"
    return f"[{BLOCKER_COLOR}]{description}[/{BLOCKER_COLOR}]"


def format_blockers(blockers: list[Blocker]) -> str:
    """Format blockers one per line, unresolved first."""
    ordered = sorted(blockers, key=lambda blocker: blocker["resolved"])
    return "\n".join(format_blocker(blocker) for blocker in ordered)


def format_hours(hours: float) -> str:
    if hours == 0:
        return ""
    return f"{hours:.1f}h"


def format_days(days: int) -> str:
    return f"{days} {'day' if days == 1 else 'days'}"


def short_id(id: str) -> str:
    return f"#{id[-6:]}"
