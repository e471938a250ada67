# SPDX-License-Identifier: MIT

from worklog.model.task_status import PullRequestStatus, TaskStatus

DEFAULT_COLOR = "white"

TASK_STATUS_COLORS: dict[str, str] = {
    TaskStatus.DONE: "green",
    TaskStatus.IN_PROGRESS: "blue",
    TaskStatus.WAIT_REVIEW: "magenta",
    TaskStatus.WAIT_TEST: "yellow",
    TaskStatus.CANCEL: "red",
}

PULL_REQUEST_STATUS_COLORS: dict[str, str] = {
    PullRequestStatus.APPROVED: "green",
    PullRequestStatus.REVIEWING: "yellow",
    PullRequestStatus.REQUEST_CHANGE: "red",
}

MISSING_LOG_COLOR = "bright_black"
BLOCKER_COLOR = "dark_orange"

# Heatmap shades from no activity to most activity
HEATMAP_COLORS = [
    "grey23",
    "blue",
    "dodger_blue2",
    "deep_sky_blue1",
    "bright_cyan",
]


def task_status_color(status: str) -> str:
    return TASK_STATUS_COLORS.get(status, DEFAULT_COLOR)


def pull_request_status_color(status: str) -> str:
    return PULL_REQUEST_STATUS_COLORS.get(status, DEFAULT_COLOR)


def heatmap_color(count: int) -> str:
    if count == 0:
        return HEATMAP_COLORS[0]
    if count <= 1:
        return HEATMAP_COLORS[1]
    if count <= 3:
        return HEATMAP_COLORS[2]
    if count <= 5:
        return HEATMAP_COLORS[3]
    return HEATMAP_COLORS[4]
