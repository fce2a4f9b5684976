"""Tests for CLI commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from prenatal.cli import app
from prenatal.config import reload_settings
from prenatal.db import DatabaseConnection, set_db

runner = CliRunner()


def invoke_json(args: list[str]) -> dict:
    result = runner.invoke(app, [*args, "--json"])
    return json.loads(result.stdout)


def add_iron(times: tuple[str, ...] = ("08:00", "20:00")) -> str:
    args = ["reminders", "add", "Iron", "--dosage", "27mg"]
    for t in times:
        args += ["--time", t]
    return invoke_json(args)["data"]["reminder_id"]


class TestMainCommands:
    """Tests for top-level commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "pregnancy" in result.output.lower()

    def test_status_with_explicit_due_date(self):
        data = invoke_json(["status", "--due", "2026-01-01", "--on", "2025-10-02"])
        assert data["success"] is True
        assert data["data"]["current_week"] == 27
        assert data["data"]["trimester"] == 2
        assert data["data"]["days_remaining"] == 91
        assert data["data"]["weeks_remaining"] == 13

    def test_status_includes_insight_for_early_weeks(self):
        data = invoke_json(["status", "--due", "2026-01-01", "--on", "2025-05-08"])
        assert data["data"]["current_week"] == 6
        assert "heart" in data["data"]["insight"]["baby"]

    def test_status_invalid_date(self):
        result = runner.invoke(app, ["status", "--due", "next spring", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["success"] is False

    def test_status_without_pregnancy(self, temp_db):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1
        assert "No pregnancy" in result.output

    def test_status_markdown(self):
        result = runner.invoke(
            app, ["status", "--due", "2026-01-01", "--on", "2025-10-02", "--format", "markdown"]
        )
        assert result.exit_code == 0
        assert "# Week 27" in result.stdout

    def test_status_unknown_format(self):
        result = runner.invoke(app, ["status", "--due", "2026-01-01", "--format", "xml"])
        assert result.exit_code == 1

    def test_size(self):
        result = runner.invoke(app, ["size", "2"])
        assert result.exit_code == 0
        assert "Poppy Seed" in result.output

    def test_checklist(self):
        data = invoke_json(["checklist", "--trimester", "3"])
        assert len(data["data"]["tasks"]) == 3

    def test_checklist_unknown_trimester(self):
        result = runner.invoke(app, ["checklist", "--trimester", "5"])
        assert result.exit_code == 1


class TestPregnancyCommands:
    """Tests for pregnancy subcommands."""

    def test_set_from_lmp_then_status(self, temp_db):
        data = invoke_json(["pregnancy", "set", "--lmp", "2025-03-27"])
        assert data["data"]["due_date"] == "2026-01-01"

        status = invoke_json(["status", "--on", "2025-10-02"])
        assert status["data"]["current_week"] == 27

    def test_set_requires_exactly_one(self, temp_db):
        result = runner.invoke(
            app, ["pregnancy", "set", "--due", "2026-01-01", "--lmp", "2025-03-27"]
        )
        assert result.exit_code == 1

        result = runner.invoke(app, ["pregnancy", "set"])
        assert result.exit_code == 1

    def test_show(self, temp_db):
        runner.invoke(app, ["pregnancy", "set", "--due", "2026-01-01"])
        data = invoke_json(["pregnancy", "show"])
        assert data["data"]["lmp_date"] == "2025-03-27"


class TestReminderCommands:
    """Tests for reminders subcommands."""

    def test_add_and_list(self, temp_db):
        reminder_id = add_iron()
        data = invoke_json(["reminders", "list"])
        reminders = data["data"]["reminders"]
        assert [r["reminder_id"] for r in reminders] == [reminder_id]
        assert reminders[0]["times_of_day"] == ["08:00", "20:00"]

    def test_list_shows_frequency_label(self, temp_db):
        runner.invoke(app, [
            "reminders", "add", "Iron", "--dosage", "27mg",
            "--frequency", "twice_daily", "-t", "08:00", "-t", "20:00",
        ])
        data = invoke_json(["reminders", "list"])
        assert data["data"]["reminders"][0]["frequency_label"] == "2x Daily"

        result = runner.invoke(app, ["reminders", "list"])
        assert "2x Daily" in result.output

    def test_add_uses_default_time(self, temp_db):
        data = invoke_json(["reminders", "add", "Calcium", "--dosage", "1000mg"])
        assert data["data"]["times_of_day"] == ["08:00"]

    def test_add_too_many_times(self, temp_db):
        result = runner.invoke(
            app,
            ["reminders", "add", "Iron", "--dosage", "27mg",
             "-t", "06:00", "-t", "12:00", "-t", "18:00", "-t", "22:00"],
        )
        assert result.exit_code == 1

    def test_add_unknown_frequency(self, temp_db):
        result = runner.invoke(
            app, ["reminders", "add", "Iron", "--dosage", "27mg", "--frequency", "hourly"]
        )
        assert result.exit_code == 1

    def test_add_and_remove_time(self, temp_db):
        reminder_id = add_iron(("08:00",))
        data = invoke_json(["reminders", "add-time", reminder_id])
        assert data["data"]["times_of_day"] == ["08:00", "12:00"]

        data = invoke_json(["reminders", "remove-time", reminder_id, "0"])
        assert data["data"]["times_of_day"] == ["12:00"]

        result = runner.invoke(app, ["reminders", "remove-time", reminder_id, "0"])
        assert result.exit_code == 1

    def test_add_time_uses_unquoted_config_time(self, temp_db, tmp_path):
        (tmp_path / "config.yaml").write_text("reminders:\n  added_slot_time: 14:30\n")
        reload_settings()
        reminder_id = add_iron(("08:00",))
        data = invoke_json(["reminders", "add-time", reminder_id])
        assert data["data"]["times_of_day"] == ["08:00", "14:30"]

    def test_remove(self, temp_db):
        reminder_id = add_iron()
        result = runner.invoke(app, ["reminders", "remove", reminder_id])
        assert result.exit_code == 0
        assert invoke_json(["reminders", "list"])["data"]["reminders"] == []

    def test_remove_missing(self, temp_db):
        result = runner.invoke(app, ["reminders", "remove", "42"])
        assert result.exit_code == 1


class TestScheduleCommands:
    """Tests for schedule and take."""

    def test_take_marks_slot(self, temp_db):
        reminder_id = add_iron()
        take = invoke_json(["take", reminder_id, "08:00", "--day", "2025-06-15"])
        assert take["data"]["already_taken"] is False

        data = invoke_json(["schedule", "--day", "2025-06-15"])["data"]
        assert [(s["time"], s["taken"]) for s in data["slots"]] == [
            ("08:00", True),
            ("20:00", False),
        ]
        assert data["completion"]["progress_fraction"] == 0.5

    def test_take_twice_is_reported(self, temp_db):
        reminder_id = add_iron()
        runner.invoke(app, ["take", reminder_id, "8:00", "--day", "2025-06-15"])
        second = invoke_json(["take", reminder_id, "08:00", "--day", "2025-06-15"])
        assert second["data"]["already_taken"] is True

        data = invoke_json(["schedule", "--day", "2025-06-15"])["data"]
        assert data["completion"]["taken_count"] == 1

    def test_take_without_time_uses_next_pending(self, temp_db):
        reminder_id = add_iron()
        first = invoke_json(["take", reminder_id, "--day", "2025-06-15"])
        second = invoke_json(["take", reminder_id, "--day", "2025-06-15"])
        assert (first["data"]["time"], second["data"]["time"]) == ("08:00", "20:00")

        result = runner.invoke(app, ["take", reminder_id, "--day", "2025-06-15"])
        assert result.exit_code == 1
        assert "are taken" in result.output

    def test_take_unscheduled_time(self, temp_db):
        reminder_id = add_iron()
        result = runner.invoke(app, ["take", reminder_id, "09:00"])
        assert result.exit_code == 1
        assert "not scheduled" in result.output

    def test_take_unknown_reminder(self, temp_db):
        result = runner.invoke(app, ["take", "99", "08:00"])
        assert result.exit_code == 1

    def test_empty_schedule(self, temp_db):
        data = invoke_json(["schedule"])["data"]
        assert data["slots"] == []
        assert data["completion"]["progress_fraction"] == 0

    def test_schedule_from_file(self, tmp_path):
        path = tmp_path / "medications.json"
        path.write_text(json.dumps({
            "medications": [
                {
                    "id": "m1",
                    "name": "Iron",
                    "dosage": "27mg",
                    "timeOfDay": ["08:00", "20:00"],
                    "logs": [{"id": "l1", "taken": True, "scheduledFor": "2025-06-15T08:00:00.000Z"}],
                }
            ]
        }))
        data = invoke_json(["schedule", "--from-file", str(path), "--day", "2025-06-15"])["data"]
        assert [s["taken"] for s in data["slots"]] == [True, False]
        assert data["slots"][0]["log_id"] == "l1"

    def test_schedule_from_missing_file(self, tmp_path):
        result = runner.invoke(app, ["schedule", "--from-file", str(tmp_path / "nope.json")])
        assert result.exit_code == 1


class TestKickCommands:
    """Tests for kicks subcommands."""

    def test_log_and_list(self, temp_db):
        data = invoke_json(["kicks", "log", "--count", "10", "--minutes", "12"])
        assert data["data"]["duration_minutes"] == 12
        assert data["data"]["reached_target"] is True

        sessions = invoke_json(["kicks", "list"])["data"]["sessions"]
        assert len(sessions) == 1
        assert sessions[0]["count"] == 10

    def test_log_with_timestamps(self, temp_db):
        data = invoke_json([
            "kicks", "log", "--count", "6",
            "--start", "2025-06-15T20:00:00", "--end", "2025-06-15T20:30:30",
        ])
        assert data["data"]["duration_minutes"] == 31
        assert data["data"]["reached_target"] is False

    def test_log_mixed_offsets_fails_cleanly(self, temp_db):
        result = runner.invoke(app, [
            "kicks", "log", "--count", "10",
            "--start", "2025-06-15T20:00:00Z", "--end", "2025-06-15T20:30:00", "--json",
        ])
        assert result.exit_code == 1
        assert not isinstance(result.exception, TypeError)
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert "UTC offset" in data["errors"][0]

    def test_log_requires_duration(self, temp_db):
        result = runner.invoke(app, ["kicks", "log", "--count", "3"])
        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for config subcommands."""

    def test_show(self):
        data = invoke_json(["config", "show"])
        assert data["data"]["defaults"]["output_format"] == "table"

    def test_init_writes_file(self, tmp_path):
        path = tmp_path / "written.yaml"
        result = runner.invoke(app, ["config", "init", "--path", str(path)])
        assert result.exit_code == 0
        assert path.exists()


class TestSchemaSetup:
    """Tests for first-run schema creation."""

    def test_fresh_database_gets_schema(self, tmp_path):
        db = DatabaseConnection(tmp_path / "fresh.db")
        set_db(db)
        assert not db.table_exists("kick_sessions")

        result = runner.invoke(app, ["reminders", "list"])

        assert result.exit_code == 0
        for table in ("pregnancies", "reminders", "reminder_times", "intake_log", "kick_sessions"):
            assert db.table_exists(table)
