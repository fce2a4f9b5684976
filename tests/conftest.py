"""Pytest fixtures for prenatal tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from prenatal.config import reload_settings
from prenatal.db.connection import DatabaseConnection, set_db
from prenatal.schedule.models import IntakeLogEntry, ReminderDefinition


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point configuration at a temp file so tests never read ~/.prenatal."""
    monkeypatch.setenv("PRENATAL_CONFIG", str(tmp_path / "config.yaml"))
    settings = reload_settings()
    settings.database.path = tmp_path / "prenatal.db"

    yield settings

    set_db(None)
    monkeypatch.delenv("PRENATAL_CONFIG", raising=False)
    reload_settings()


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary database with schema and install it globally."""
    db = DatabaseConnection(tmp_path / "test.db")
    db.initialize_schema()
    set_db(db)

    yield db

    set_db(None)


@pytest.fixture
def today() -> date:
    return date(2025, 6, 15)


@pytest.fixture
def sample_reminders() -> list[ReminderDefinition]:
    """Three reminders, two sharing an 08:00 slot."""
    return [
        ReminderDefinition("r1", "Iron", "27mg", times_of_day=["08:00", "20:00"]),
        ReminderDefinition("r2", "Vitamin D", "600IU", times_of_day=["12:00"]),
        ReminderDefinition("r3", "Prenatal Multi", "1 Tablet", times_of_day=["08:00"]),
    ]


@pytest.fixture
def sample_logs(today) -> list[IntakeLogEntry]:
    """Iron at 08:00 was taken today; Vitamin D was taken yesterday only."""
    return [
        IntakeLogEntry(
            reminder_id="r1",
            scheduled_for=datetime(today.year, today.month, today.day, 8, 0),
            log_id="L1",
        ),
        IntakeLogEntry(
            reminder_id="r2",
            scheduled_for=datetime(today.year, today.month, today.day - 1, 12, 0),
            log_id="L0",
        ),
    ]
