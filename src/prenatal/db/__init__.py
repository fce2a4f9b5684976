"""SQLite persistence for pregnancies, reminders, intake logs and kick sessions."""

from prenatal.db.connection import DatabaseConnection, get_db, set_db

__all__ = ["DatabaseConnection", "get_db", "set_db"]
