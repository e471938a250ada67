# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from worklog.model.entity_id import generate_entity_id
from worklog.model.task import Task
from worklog.model.task_status import TaskStatus


def get_task_template(
    description: str = "", start_date: Optional[pendulum.Date] = None
) -> Task:
    # The first instance of a work item defines its persistent identity
    id = generate_entity_id("task")
    return {
        "id": id,
        "persistent_id": id,
        "description": description,
        "status": TaskStatus.IN_PROGRESS,
        "blockers": [],
        "time_spent": 0,
        "start_date": start_date,
        "end_date": None,
    }
