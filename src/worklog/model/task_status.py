# SPDX-License-Identifier: MIT


class TaskStatus:
    IN_PROGRESS = "In Progress"
    WAIT_REVIEW = "Wait Review"
    WAIT_TEST = "Wait Test"
    DONE = "Done"
    CANCEL = "Cancel"


TASK_STATUSES: list[str] = [
    TaskStatus.IN_PROGRESS,
    TaskStatus.WAIT_REVIEW,
    TaskStatus.WAIT_TEST,
    TaskStatus.DONE,
    TaskStatus.CANCEL,
]

RESOLVED_STATUSES: frozenset[str] = frozenset({TaskStatus.DONE, TaskStatus.CANCEL})


class PullRequestStatus:
    REVIEWING = "Reviewing"
    APPROVED = "Approved"
    REQUEST_CHANGE = "Request Change"


PULL_REQUEST_STATUSES: list[str] = [
    PullRequestStatus.REVIEWING,
    PullRequestStatus.APPROVED,
    PullRequestStatus.REQUEST_CHANGE,
]


def is_resolved_status(status: str) -> bool:
    return status in RESOLVED_STATUSES
