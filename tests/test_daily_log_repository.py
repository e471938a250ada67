"""Tests for the YAML-backed daily log store."""

import logging

import pytest

from worklog import time as worklog_time
from worklog.errors import NotFoundError, StorageWriteError, ValidationError
from worklog.model.task_status import TaskStatus
from worklog.repository.daily_log import DailyLogRepository


def _new_log(date, tasks):
    return {"date": date, "tasks": tasks, "pull_requests": [], "summary": None}


class TestReading:
    def test_missing_file_is_an_empty_collection(self, repo) -> None:
        assert repo.fetch_all() == []
        assert not repo.path.exists()

    def test_empty_file_is_an_empty_collection(self, repo) -> None:
        repo.path.write_text("")
        assert repo.fetch_all() == []

    @pytest.mark.parametrize(
        "payload",
        [
            "tasks: [unclosed",
            "just: a mapping\n",
            "- id: log-1\n  tasks: []\n",
            "- id: log-1\n  date: 2024-13-45\n  tasks: []\n",
        ],
    )
    def test_malformed_payload_is_treated_as_empty(
        self, repo, caplog, payload
    ) -> None:
        repo.path.write_text(payload)

        with caplog.at_level(logging.WARNING, logger="worklog"):
            assert repo.fetch_all() == []

        assert any(record.levelno == logging.WARNING for record in caplog.records)

    def test_records_without_persistent_id_use_their_id(self, repo, as_date) -> None:
        repo.path.write_text(
            "- id: log-1\n"
            "  date: '2024-01-01'\n"
            "  tasks:\n"
            "  - id: task-1\n"
            "    description: Old task\n"
            "    status: In Progress\n"
            "  pull_requests: []\n"
            "  summary: null\n"
        )

        task = repo.get(as_date("2024-01-01"))["tasks"][0]

        assert task["persistent_id"] == "task-1"
        assert task["blockers"] == []
        assert task["time_spent"] == 0
        assert task["start_date"] is None

    def test_fetch_all_is_sorted_newest_first(self, repo, make_task, as_date) -> None:
        for date in ("2024-01-02", "2024-01-03", "2024-01-01"):
            repo.insert(_new_log(as_date(date), [make_task("Work", date)]))

        assert [str(log["date"]) for log in repo.fetch_all()] == [
            "2024-01-03",
            "2024-01-02",
            "2024-01-01",
        ]

    def test_reads_return_copies(self, repo, make_task, as_date) -> None:
        repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))

        repo.fetch_all()[0]["tasks"].clear()
        repo.get(as_date("2024-01-01"))["tasks"].clear()

        assert len(repo.list()[0]["tasks"]) == 1


class TestWriting:
    def test_insert_round_trips_through_the_file(
        self, repo, make_task, as_date
    ) -> None:
        task = make_task(
            "Fix login",
            "a",
            TaskStatus.DONE,
            start_date="2023-12-30",
            end_date="2024-01-01",
            time_spent=1.5,
            blockers=[{"id": "b-1", "description": "CI down", "resolved": True}],
        )
        saved = repo.insert(_new_log(as_date("2024-01-01"), [task]))

        reloaded = DailyLogRepository(repo.path).get_by_id(saved["id"])

        assert reloaded == saved
        assert reloaded["tasks"][0] == task
        assert "2024-01-01" in repo.path.read_text()

    def test_insert_defaults_to_today(self, repo, make_task, monkeypatch, as_date) -> None:
        monkeypatch.setattr(worklog_time, "today", lambda: as_date("2024-02-02"))

        saved = repo.insert(
            {"tasks": [make_task("Work", "a")], "pull_requests": []}
        )

        assert saved["date"] == as_date("2024-02-02")
        assert saved["summary"] is None

    def test_insert_rejects_a_second_log_for_a_date(
        self, repo, make_task, as_date
    ) -> None:
        repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))

        with pytest.raises(ValidationError):
            repo.insert(_new_log(as_date("2024-01-01"), [make_task("More", "b")]))

    def test_replace_unknown_id_raises(self, repo, make_log, make_task) -> None:
        with pytest.raises(NotFoundError):
            repo.replace(make_log("2024-01-01", [make_task("Work", "a")]))
        assert not repo.path.exists()

    def test_replace_keeps_the_stored_date(
        self, repo, make_task, as_date
    ) -> None:
        saved = repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))
        saved["date"] = as_date("2024-03-03")
        saved["summary"] = "Moved?"

        replaced = repo.replace(saved)

        assert replaced["date"] == as_date("2024-01-01")
        assert repo.get_by_id(saved["id"])["summary"] == "Moved?"

    def test_get_by_id_unknown_raises(self, repo) -> None:
        with pytest.raises(NotFoundError):
            repo.get_by_id("log-missing")

    def test_put_upserts_by_date(self, repo, make_log, make_task, as_date) -> None:
        repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))

        repo.put(make_log("2024-01-01", [make_task("Other", "b")], id="log-new"))

        logs = repo.fetch_all()
        assert len(logs) == 1
        assert logs[0]["id"] == "log-new"

    def test_remove(self, repo, make_task, as_date) -> None:
        saved = repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))

        repo.remove("log-missing")
        assert len(repo.fetch_all()) == 1

        repo.remove(saved["id"])
        assert DailyLogRepository(repo.path).fetch_all() == []

    def test_replace_all_overwrites_everything(
        self, repo, make_log, make_task, as_date
    ) -> None:
        repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))
        replacement = [
            make_log(
                "2024-02-03",
                [
                    make_task(
                        "Ship",
                        "c",
                        TaskStatus.DONE,
                        start_date="2024-02-01",
                        end_date="2024-02-03",
                        time_spent=1.5,
                    )
                ],
            ),
            make_log(
                "2024-02-01",
                [
                    make_task(
                        "New",
                        "b",
                        start_date="2024-02-01",
                        blockers=[
                            {"id": "blk-1", "description": "Waiting", "resolved": False}
                        ],
                    )
                ],
            ),
        ]

        repo.replace_all(replacement)

        logs = DailyLogRepository(repo.path).fetch_all()
        assert sorted(logs, key=lambda log: log["id"]) == sorted(
            replacement, key=lambda log: log["id"]
        )
        assert not repo.path.with_suffix(".tmp").exists()


    def test_failed_write_raises_and_keeps_the_cache(
        self, tmp_path, make_task, as_date
    ) -> None:
        (tmp_path / "blocked").write_text("a file, not a directory")
        repo = DailyLogRepository(tmp_path / "blocked" / "daily-logs.yaml")

        with pytest.raises(StorageWriteError):
            repo.insert(_new_log(as_date("2024-01-01"), [make_task("Work", "a")]))

        assert repo.fetch_all() == []
