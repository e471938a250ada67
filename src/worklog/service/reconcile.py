# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from worklog import time
from worklog.model.daily_log import DailyLog
from worklog.model.entity_id import EntityId, carryover_task_id
from worklog.model.task import Task
from worklog.model.task_status import TaskStatus, is_resolved_status
from worklog.query.sort import sort_logs

logger = logging.getLogger(__name__)


def _find_task_index(tasks: list[Task], persistent_id: EntityId) -> Optional[int]:
    for index, task in enumerate(tasks):
        if task["persistent_id"] == persistent_id:
            return index
    return None


def _carry_task_into_log(task: Task, log: DailyLog) -> Task:
    carried_task = deepcopy(task)
    carried_task["id"] = carryover_task_id(
        task["persistent_id"], time.date_to_str(log["date"])
    )
    carried_task["status"] = TaskStatus.IN_PROGRESS
    carried_task["end_date"] = None
    # Hours are tracked on the day they were worked
    carried_task["time_spent"] = 0
    return carried_task


def reconcile_log_tasks(saved_log: DailyLog, future_log: DailyLog) -> bool:
    """
    Bring one later log in line with the tasks of the saved log.

    Mutates future_log in place and returns whether its task list changed.

    For every task of the saved log, matched by persistent id:
        - resolved and present later: the later instance is removed
        - open and present later but resolved there: the later instance is reopened
        - open and missing later: a carried instance is appended
        - resolved and missing later: nothing to do
    """
    changed = False
    future_tasks = future_log["tasks"]

    for saved_task in saved_log["tasks"]:
        is_saved_task_resolved = is_resolved_status(saved_task["status"])
        index = _find_task_index(future_tasks, saved_task["persistent_id"])

        if index is not None:
            if is_saved_task_resolved:
                del future_tasks[index]
                changed = True
            elif is_resolved_status(future_tasks[index]["status"]):
                future_tasks[index]["status"] = TaskStatus.IN_PROGRESS
                future_tasks[index]["end_date"] = None
                changed = True
        elif not is_saved_task_resolved:
            future_tasks.append(_carry_task_into_log(saved_task, future_log))
            changed = True

    return changed


def reconcile_future_logs(
    saved_log: DailyLog, all_logs: list[DailyLog]
) -> tuple[list[DailyLog], bool]:
    """
    Propagate the saved log's tasks forward into every later log.

    Reconciliation only looks forward in time: logs dated on or before the
    saved log are returned untouched. Neither argument is mutated.

    Args:
        saved_log: The log that was just written
        all_logs: The full collection as currently stored

    Returns:
        The full collection sorted by date descending, and whether any later
        log changed
    """
    reconciled_logs = deepcopy(all_logs)
    future_logs = [log for log in reconciled_logs if log["date"] > saved_log["date"]]

    any_changed = False
    for future_log in sort_logs(future_logs, descending=False):
        if reconcile_log_tasks(saved_log, future_log):
            logger.debug(
                "Carried tasks from %s into %s",
                time.date_to_str(saved_log["date"]),
                time.date_to_str(future_log["date"]),
            )
            any_changed = True

    return sort_logs(reconciled_logs), any_changed
