"""Tests for saving, drafting and updating daily logs."""

import pytest

from worklog import time as worklog_time
from worklog.errors import NotFoundError, StorageWriteError, ValidationError
from worklog.model.task_status import PullRequestStatus, TaskStatus
from worklog.repository.daily_log import DailyLogRepository
from worklog.service.daily_log import (
    add_task,
    delete_log,
    draft_log_for_date,
    normalize_task,
    save_or_update_log,
    set_task_status,
)


def _new_log(date, tasks, pull_requests=None):
    return {
        "date": date,
        "tasks": tasks,
        "pull_requests": pull_requests or [],
        "summary": None,
    }


def _fresh_task(description, status=TaskStatus.IN_PROGRESS, **fields):
    task = {
        "id": "",
        "persistent_id": "",
        "description": description,
        "status": status,
        "blockers": [],
        "time_spent": 0,
        "start_date": None,
        "end_date": None,
    }
    task.update(fields)
    return task


class TestValidation:
    @pytest.mark.parametrize(
        "tasks, pull_requests",
        [
            ([], []),
            ([_fresh_task("   ")], []),
            ([_fresh_task("Work", "Pending")], []),
            ([_fresh_task("Work", time_spent=-1)], []),
            (
                [_fresh_task("Work")],
                [{"id": "", "url": "not-a-url", "status": PullRequestStatus.APPROVED}],
            ),
            (
                [_fresh_task("Work")],
                [{"id": "", "url": "https://example.com/pr/1", "status": "Merged"}],
            ),
            (
                [
                    _fresh_task("Work", persistent_id="task-a"),
                    _fresh_task("Work again", persistent_id="task-a"),
                ],
                [],
            ),
        ],
    )
    def test_invalid_logs_never_reach_the_store(
        self, repo, as_date, tasks, pull_requests
    ) -> None:
        with pytest.raises(ValidationError):
            save_or_update_log(
                repo, _new_log(as_date("2024-01-01"), tasks, pull_requests)
            )
        assert not repo.path.exists()

    def test_empty_task_list_message(self, repo, as_date) -> None:
        with pytest.raises(ValidationError, match="Please add at least one task."):
            save_or_update_log(repo, _new_log(as_date("2024-01-01"), []))


class TestNormalizeTask:
    def test_fresh_task_gets_ids_and_dates(self, as_date) -> None:
        task = normalize_task(_fresh_task("  Fix login  "), as_date("2024-01-02"))

        assert task["id"].startswith("task-")
        assert task["persistent_id"] == task["id"]
        assert task["description"] == "Fix login"
        assert task["start_date"] == as_date("2024-01-02")
        assert task["end_date"] is None

    def test_resolved_task_ends_on_the_log_date(self, as_date) -> None:
        task = normalize_task(
            _fresh_task("Fix login", TaskStatus.DONE), as_date("2024-01-02")
        )
        assert task["end_date"] == as_date("2024-01-02")

    def test_end_date_never_precedes_start_date(self, as_date) -> None:
        task = normalize_task(
            _fresh_task(
                "Fix login",
                TaskStatus.CANCEL,
                start_date=as_date("2024-01-05"),
                end_date=as_date("2024-01-01"),
            ),
            as_date("2024-01-06"),
        )
        assert task["end_date"] == as_date("2024-01-05")

    def test_open_task_has_no_end_date(self, as_date) -> None:
        task = normalize_task(
            _fresh_task("Fix login", end_date=as_date("2024-01-01")),
            as_date("2024-01-02"),
        )
        assert task["end_date"] is None

    def test_blockers_without_text_are_dropped(self, as_date) -> None:
        task = normalize_task(
            _fresh_task(
                "Fix login",
                blockers=[
                    {"id": "", "description": "  ", "resolved": False},
                    {"id": "", "description": "", "resolved": True},
                    {"id": "", "description": " CI down ", "resolved": False},
                ],
            ),
            as_date("2024-01-02"),
        )

        assert len(task["blockers"]) == 1
        assert task["blockers"][0]["description"] == "CI down"
        assert task["blockers"][0]["id"].startswith("blocker-")


class TestSaveOrUpdateLog:
    def test_inserts_a_new_log(self, repo, as_date) -> None:
        logs = save_or_update_log(
            repo,
            _new_log(
                as_date("2024-01-01"),
                [_fresh_task("Fix login")],
                [
                    {
                        "id": "",
                        "url": " https://example.com/pr/1 ",
                        "status": PullRequestStatus.REVIEWING,
                    }
                ],
            ),
        )

        assert len(logs) == 1
        assert logs[0]["pull_requests"][0]["url"] == "https://example.com/pr/1"
        assert logs[0]["pull_requests"][0]["id"].startswith("pr-")
        assert DailyLogRepository(repo.path).fetch_all() == logs

    def test_second_save_for_a_date_updates_it(self, repo, as_date) -> None:
        save_or_update_log(repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")]))
        logs = save_or_update_log(
            repo, _new_log(as_date("2024-01-01"), [_fresh_task("B")])
        )

        assert len(logs) == 1
        assert [task["description"] for task in logs[0]["tasks"]] == ["B"]

    def test_unknown_id_raises_before_any_write(self, repo, as_date) -> None:
        save_or_update_log(repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")]))
        contents_before = repo.path.read_text()

        with pytest.raises(NotFoundError):
            save_or_update_log(
                repo, _new_log(as_date("2024-01-02"), [_fresh_task("B")]), "log-nope"
            )

        assert repo.path.read_text() == contents_before

    def test_update_by_id_keeps_the_date(self, repo, as_date) -> None:
        logs = save_or_update_log(
            repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")])
        )

        updated = save_or_update_log(
            repo, _new_log(as_date("2024-05-05"), [_fresh_task("B")]), logs[0]["id"]
        )

        assert len(updated) == 1
        assert updated[0]["date"] == as_date("2024-01-01")

    def test_future_dates_are_rejected_before_any_write(self, repo) -> None:
        tomorrow = worklog_time.today().add(days=1)

        with pytest.raises(ValidationError, match="future dates"):
            save_or_update_log(repo, _new_log(tomorrow, [_fresh_task("A")]))
        with pytest.raises(ValidationError, match="future dates"):
            add_task(repo, tomorrow, "A")

        assert not repo.path.exists()

    def test_today_is_accepted(self, repo) -> None:
        logs = save_or_update_log(
            repo, _new_log(worklog_time.today(), [_fresh_task("A")])
        )

        assert [log["date"] for log in logs] == [worklog_time.today()]

    def test_open_tasks_flow_into_later_logs(self, repo, as_date) -> None:
        save_or_update_log(repo, _new_log(as_date("2024-01-03"), [_fresh_task("B")]))

        logs = save_or_update_log(
            repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")])
        )

        assert [str(log["date"]) for log in logs] == ["2024-01-03", "2024-01-01"]
        assert [task["description"] for task in logs[0]["tasks"]] == ["B", "A"]
        assert logs[0]["tasks"][1]["persistent_id"] == logs[1]["tasks"][0]["id"]
        assert DailyLogRepository(repo.path).fetch_all() == logs

    def test_closing_a_task_removes_it_from_later_logs(self, repo, as_date) -> None:
        save_or_update_log(repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")]))
        draft = draft_log_for_date(repo.fetch_all(), as_date("2024-01-02"))
        save_or_update_log(repo, draft)
        assert len(repo.get(as_date("2024-01-02"))["tasks"]) == 1

        set_task_status(repo, as_date("2024-01-01"), 1, TaskStatus.DONE)

        assert repo.get(as_date("2024-01-02"))["tasks"] == []

    def test_failed_bulk_write_leaves_later_logs_unchanged(
        self, repo, as_date, monkeypatch
    ) -> None:
        save_or_update_log(repo, _new_log(as_date("2024-01-03"), [_fresh_task("B")]))

        def fail(logs):
            raise StorageWriteError("disk full")

        monkeypatch.setattr(repo, "replace_all", fail)

        with pytest.raises(StorageWriteError):
            save_or_update_log(
                repo, _new_log(as_date("2024-01-01"), [_fresh_task("A")])
            )

        later_log = DailyLogRepository(repo.path).get(as_date("2024-01-03"))
        assert [task["description"] for task in later_log["tasks"]] == ["B"]


class TestDraftLogForDate:
    def test_existing_log_is_returned_as_is(self, make_log, make_task, as_date) -> None:
        logs = [make_log("2024-01-01", [make_task("A", "a", TaskStatus.DONE)])]

        draft = draft_log_for_date(logs, as_date("2024-01-01"))

        assert draft["tasks"] == logs[0]["tasks"]

    def test_unfinished_tasks_of_the_previous_log_are_carried(
        self, make_log, make_task, as_date
    ) -> None:
        logs = [
            make_log("2023-12-30", [make_task("Ancient", "z")]),
            make_log(
                "2024-01-01",
                [
                    make_task(
                        "Open",
                        "a",
                        TaskStatus.WAIT_REVIEW,
                        start_date="2023-12-31",
                        time_spent=3,
                    ),
                    make_task("Closed", "b", TaskStatus.DONE),
                ],
            ),
        ]

        draft = draft_log_for_date(logs, as_date("2024-01-04"))

        assert draft["date"] == as_date("2024-01-04")
        assert len(draft["tasks"]) == 1
        carried = draft["tasks"][0]
        assert carried["id"] == "carryover-a-2024-01-04"
        assert carried["persistent_id"] == "a"
        assert carried["status"] == TaskStatus.IN_PROGRESS
        assert carried["time_spent"] == 0
        assert carried["start_date"] == as_date("2023-12-31")
        assert carried["end_date"] is None

    def test_no_earlier_log_gives_an_empty_draft(self, make_log, make_task, as_date) -> None:
        logs = [make_log("2024-01-05", [make_task("Later", "a")])]

        draft = draft_log_for_date(logs, as_date("2024-01-01"))

        assert draft["tasks"] == []


class TestQuickEdits:
    def test_add_task_creates_the_log(self, repo, as_date) -> None:
        add_task(repo, as_date("2024-01-01"), " Write tests ")

        log = repo.get(as_date("2024-01-01"))
        assert [task["description"] for task in log["tasks"]] == ["Write tests"]

    def test_add_task_keeps_carried_tasks(self, repo, as_date) -> None:
        add_task(repo, as_date("2024-01-01"), "First")
        add_task(repo, as_date("2024-01-02"), "Second")

        log = repo.get(as_date("2024-01-02"))
        assert [task["description"] for task in log["tasks"]] == ["Second", "First"]

    def test_set_task_status_closes_and_reopens(self, repo, as_date) -> None:
        add_task(repo, as_date("2024-01-01"), "Fix login")

        set_task_status(repo, as_date("2024-01-01"), 1, TaskStatus.DONE, 2.5)
        task = repo.get(as_date("2024-01-01"))["tasks"][0]
        assert task["status"] == TaskStatus.DONE
        assert task["end_date"] == as_date("2024-01-01")
        assert task["time_spent"] == 2.5

        set_task_status(repo, as_date("2024-01-01"), 1, TaskStatus.IN_PROGRESS)
        task = repo.get(as_date("2024-01-01"))["tasks"][0]
        assert task["end_date"] is None
        assert task["time_spent"] == 2.5

    def test_set_task_status_without_a_log(self, repo, as_date) -> None:
        with pytest.raises(NotFoundError):
            set_task_status(repo, as_date("2024-01-01"), 1, TaskStatus.DONE)

    @pytest.mark.parametrize("task_number", [0, 2])
    def test_set_task_status_out_of_range(self, repo, as_date, task_number) -> None:
        add_task(repo, as_date("2024-01-01"), "Fix login")

        with pytest.raises(ValidationError):
            set_task_status(repo, as_date("2024-01-01"), task_number, TaskStatus.DONE)

    def test_delete_log(self, repo, as_date) -> None:
        logs = add_task(repo, as_date("2024-01-01"), "Fix login")

        delete_log(repo, logs[0]["id"])

        assert repo.fetch_all() == []
