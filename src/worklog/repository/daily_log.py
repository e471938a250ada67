# SPDX-License-Identifier: MIT

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from worklog import configuration, time
from worklog.errors import (
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from worklog.model.blocker import Blocker
from worklog.model.daily_log import DailyLog, NewDailyLog
from worklog.model.entity_id import EntityId, generate_entity_id
from worklog.model.pull_request import PullRequest
from worklog.model.task import Task
from worklog.query.sort import sort_logs

logger = logging.getLogger(__name__)


class DailyLogRepository:
    """
    Stores every daily log as one YAML list in a single data file.

    The date is the natural key: there is at most one log per calendar date.
    Reads re-sort by date because the on-disk order is only a convention.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._logs: Optional[list[DailyLog]] = None

    @property
    def logs(self) -> list[DailyLog]:
        if self._logs is None:
            self.__load_data()
        if self._logs is None:
            raise ValueError()
        return self._logs

    def __load_data(self) -> None:
        try:
            self._logs = self.__read_logs()
        except StorageReadError as e:
            logger.warning(
                "Ignoring unreadable log data in %s, starting empty: %s", self.path, e
            )
            self._logs = []

    def __read_logs(self) -> list[DailyLog]:
        if not self.path.is_file():
            return []
        try:
            raw_logs = load(self.path.read_text(), Loader=Loader)
        except (OSError, YAMLError, ValueError) as e:
            raise StorageReadError(str(e)) from e
        if raw_logs is None:
            return []
        if not isinstance(raw_logs, list):
            raise StorageReadError("expected a list of daily logs")
        try:
            return sort_logs(
                [self.__convert_log_for_deserialization(raw) for raw in raw_logs]
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageReadError(f"malformed daily log: {e!r}") from e

    def __save_data(self, logs: list[DailyLog]) -> None:
        serializable_logs = [
            self.__convert_log_for_serialization(log) for log in sort_logs(logs)
        ]
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(dump(serializable_logs, Dumper=Dumper))
            os.replace(tmp_path, self.path)
        except (OSError, YAMLError) as e:
            raise StorageWriteError(f"could not write {self.path}: {e}") from e

    def __commit(self, logs: list[DailyLog]) -> None:
        # The cache only changes once the file write went through
        self.__save_data(logs)
        self._logs = sort_logs(logs)

    def __convert_log_for_serialization(self, log: DailyLog) -> dict[str, Any]:
        return {
            "id": log["id"],
            "date": time.date_to_str(log["date"]),
            "tasks": [
                self.__convert_task_for_serialization(task) for task in log["tasks"]
            ],
            "pull_requests": [dict(pr) for pr in log["pull_requests"]],
            "summary": log["summary"],
        }

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], deepcopy(task))
        serializable_task["blockers"] = [dict(b) for b in task["blockers"]]
        serializable_task["start_date"] = time.date_to_str_optional(
            task["start_date"]
        )
        serializable_task["end_date"] = time.date_to_str_optional(task["end_date"])
        return serializable_task

    def __convert_log_for_deserialization(self, log: dict[str, Any]) -> DailyLog:
        return {
            "id": str(log["id"]),
            "date": time.date_from_value(log["date"]),
            "tasks": [
                self.__convert_task_for_deserialization(task) for task in log["tasks"]
            ],
            "pull_requests": [
                cast(
                    PullRequest,
                    {
                        "id": str(pr["id"]),
                        "url": str(pr["url"]),
                        "status": str(pr["status"]),
                    },
                )
                for pr in log.get("pull_requests") or []
            ],
            "summary": log.get("summary"),
        }

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        blockers: list[Blocker] = [
            {
                "id": str(blocker["id"]),
                "description": str(blocker["description"]),
                "resolved": bool(blocker["resolved"]),
            }
            for blocker in task.get("blockers") or []
        ]
        return {
            "id": str(task["id"]),
            # Records written before persistent ids existed link by their own id
            "persistent_id": str(task.get("persistent_id") or task["id"]),
            "description": str(task["description"]),
            "status": str(task["status"]),
            "blockers": blockers,
            "time_spent": float(task.get("time_spent") or 0),
            "start_date": time.date_from_value_optional(task.get("start_date")),
            "end_date": time.date_from_value_optional(task.get("end_date")),
        }

    def fetch_all(self) -> list[DailyLog]:
        return deepcopy(self.logs)

    def get(self, date: pendulum.Date) -> Optional[DailyLog]:
        for log in self.logs:
            if log["date"] == date:
                return deepcopy(log)
        return None

    def get_by_id(self, id: EntityId) -> DailyLog:
        for log in self.logs:
            if log["id"] == id:
                return deepcopy(log)
        raise NotFoundError(f"daily log {id} not found")

    def insert(self, new_log: NewDailyLog) -> DailyLog:
        date = new_log.get("date") or time.today()
        if any(log["date"] == date for log in self.logs):
            raise ValidationError(
                f"a daily log for {time.date_to_str(date)} already exists"
            )

        saved_log: DailyLog = {
            "id": generate_entity_id("log"),
            "date": date,
            "tasks": deepcopy(new_log["tasks"]),
            "pull_requests": deepcopy(new_log["pull_requests"]),
            "summary": new_log.get("summary"),
        }
        self.__commit([saved_log, *self.logs])
        logger.debug("Inserted daily log %s for %s", saved_log["id"], date)
        return deepcopy(saved_log)

    def replace(self, log: DailyLog) -> DailyLog:
        index = self.__index_of(log["id"])
        if index is None:
            raise NotFoundError(f"daily log {log['id']} not found")

        updated_log = deepcopy(log)
        # Editing a log never moves it to another date
        updated_log["date"] = self.logs[index]["date"]
        logs = list(self.logs)
        logs[index] = updated_log
        self.__commit(logs)
        logger.debug("Replaced daily log %s", log["id"])
        return deepcopy(updated_log)

    def put(self, log: DailyLog) -> DailyLog:
        if self.__index_of(log["id"]) is not None:
            return self.replace(log)

        logs = [existing for existing in self.logs if existing["date"] != log["date"]]
        logs.append(deepcopy(log))
        self.__commit(logs)
        return deepcopy(log)

    def remove(self, id: EntityId) -> None:
        logs = [log for log in self.logs if log["id"] != id]
        if len(logs) == len(self.logs):
            logger.debug("Daily log %s not present, nothing to remove", id)
            return
        self.__commit(logs)
        logger.debug("Removed daily log %s", id)

    def replace_all(self, logs: list[DailyLog]) -> None:
        self.__commit(deepcopy(logs))
        logger.debug("Replaced all daily logs (%d records)", len(logs))

    def __index_of(self, id: EntityId) -> Optional[int]:
        for index, log in enumerate(self.logs):
            if log["id"] == id:
                return index
        return None

    # Defined last so the name does not shadow the builtin in the annotations above
    def list(self) -> list[DailyLog]:
        return self.fetch_all()


def get_daily_log_repository() -> DailyLogRepository:
    """Open the log store at the configured data path."""
    return DailyLogRepository(configuration.DATA_DAILY_LOGS_PATH)
