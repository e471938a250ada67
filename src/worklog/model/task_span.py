# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from worklog.model.entity_id import EntityId


class TaskSpan(TypedDict):
    persistent_id: EntityId
    description: str
    status: str
    color: str
    start_date: pendulum.Date
    end_date: pendulum.Date
    duration_in_days: int
