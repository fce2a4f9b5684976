"""Tests for YAML-backed settings."""

from __future__ import annotations

from pathlib import Path

from prenatal.config.settings import Settings, default_config_path


class TestSettings:
    """Tests for Settings.load and Settings.save."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.defaults.output_format == "table"
        assert settings.reminders.default_time == "08:00"
        assert settings.logging.level == "WARNING"

    def test_partial_file_overrides(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "database:\n"
            "  path: ~/custom/prenatal.db\n"
            "reminders:\n"
            "  intake_note: taken with breakfast\n"
            "logging:\n"
            "  level: debug\n"
        )
        settings = Settings.load(path)
        assert settings.database.path == Path("~/custom/prenatal.db").expanduser()
        assert settings.reminders.intake_note == "taken with breakfast"
        assert settings.reminders.added_slot_time == "12:00"
        assert settings.logging.level == "DEBUG"

    def test_unquoted_times_load_as_times(self, tmp_path) -> None:
        """Reminder times written without quotes keep their HH:MM form."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "reminders:\n"
            "  default_time: 21:30\n"
            "  added_slot_time: 12:00\n"
        )
        settings = Settings.load(path)
        assert settings.reminders.default_time == "21:30"
        assert settings.reminders.added_slot_time == "12:00"

    def test_save_and_reload(self, tmp_path) -> None:
        path = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.defaults.output_format = "markdown"
        settings.database.path = tmp_path / "db.sqlite"

        assert settings.save(path) == path
        loaded = Settings.load(path)

        assert loaded.defaults.output_format == "markdown"
        assert loaded.database.path == tmp_path / "db.sqlite"

    def test_env_override(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("PRENATAL_CONFIG", str(tmp_path / "alt.yaml"))
        assert default_config_path() == tmp_path / "alt.yaml"

    def test_saved_times_round_trip(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        settings = Settings()
        settings.reminders.added_slot_time = "13:45"
        settings.save(path)
        assert Settings.load(path).reminders.added_slot_time == "13:45"
