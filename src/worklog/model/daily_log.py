# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from worklog.model.entity_id import EntityId
from worklog.model.pull_request import PullRequest
from worklog.model.task import Task


class NewDailyLog(TypedDict):
    date: NotRequired[Optional[pendulum.Date]]
    tasks: list[Task]
    pull_requests: list[PullRequest]
    summary: NotRequired[Optional[str]]


class DailyLog(TypedDict):
    id: EntityId
    date: pendulum.Date
    tasks: list[Task]
    pull_requests: list[PullRequest]
    summary: Optional[str]
