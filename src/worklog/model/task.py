# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from worklog.model.blocker import Blocker
from worklog.model.entity_id import EntityId


class Task(TypedDict):
    id: EntityId
    persistent_id: EntityId
    description: str
    status: str
    blockers: list[Blocker]
    time_spent: float
    start_date: Optional[pendulum.Date]
    end_date: Optional[pendulum.Date]
