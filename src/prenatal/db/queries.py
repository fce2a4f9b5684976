"""Database queries for pregnancies, reminders, intake logs and kick sessions."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from typing import Optional

from prenatal.gestation.clock import GestationalReference
from prenatal.kicks import KickSession
from prenatal.schedule.models import FrequencyCode, IntakeLogEntry, ReminderDefinition

logger = logging.getLogger(__name__)


class PregnancyQueries:
    """Database queries for the tracked pregnancy."""

    @staticmethod
    def set_due_date(conn: sqlite3.Connection, reference: GestationalReference) -> int:
        """Start tracking a pregnancy and return its pregnancy_id.

        The newest pregnancy is always the active one.
        """
        cursor = conn.execute(
            "INSERT INTO pregnancies (due_date) VALUES (?)",
            (reference.due_date.isoformat(),),
        )
        conn.commit()
        logger.info("Tracking pregnancy due %s", reference.due_date)
        return cursor.lastrowid or 0

    @staticmethod
    def get_active(
        conn: sqlite3.Connection,
    ) -> Optional[tuple[int, GestationalReference]]:
        """Get the active pregnancy as (pregnancy_id, reference)."""
        row = conn.execute(
            """
            SELECT pregnancy_id, due_date FROM pregnancies
            ORDER BY pregnancy_id DESC LIMIT 1
            """
        ).fetchone()

        if row is None:
            return None

        return row[0], GestationalReference(due_date=date.fromisoformat(row[1]))


class ReminderQueries:
    """Database queries for reminder definitions."""

    @staticmethod
    def _load_times(conn: sqlite3.Connection, reminder_id: int) -> list[str]:
        rows = conn.execute(
            """
            SELECT time_of_day FROM reminder_times
            WHERE reminder_id = ? ORDER BY position
            """,
            (reminder_id,),
        ).fetchall()
        return [r[0] for r in rows]

    @staticmethod
    def _row_to_reminder(conn: sqlite3.Connection, row: sqlite3.Row) -> ReminderDefinition:
        return ReminderDefinition(
            reminder_id=str(row[0]),
            name=row[1],
            dosage=row[2],
            frequency=FrequencyCode(row[3]),
            times_of_day=ReminderQueries._load_times(conn, row[0]),
        )

    @staticmethod
    def create(
        conn: sqlite3.Connection,
        name: str,
        dosage: str,
        frequency: FrequencyCode,
        times_of_day: list[str],
    ) -> ReminderDefinition:
        """Create a reminder; times are validated before anything is written."""
        # Validates name and times; the id is filled in after insert
        draft = ReminderDefinition(
            reminder_id="",
            name=name,
            dosage=dosage,
            frequency=frequency,
            times_of_day=times_of_day,
        )

        cursor = conn.execute(
            "INSERT INTO reminders (name, dosage, frequency) VALUES (?, ?, ?)",
            (draft.name, draft.dosage, draft.frequency.value),
        )
        reminder_id = cursor.lastrowid
        ReminderQueries._write_times(conn, reminder_id, draft.times_of_day)
        conn.commit()

        draft.reminder_id = str(reminder_id)
        logger.info("Created reminder %s (%s)", reminder_id, draft.name)
        return draft

    @staticmethod
    def _write_times(conn: sqlite3.Connection, reminder_id: int, times: list[str]) -> None:
        conn.execute("DELETE FROM reminder_times WHERE reminder_id = ?", (reminder_id,))
        conn.executemany(
            """
            INSERT INTO reminder_times (reminder_id, position, time_of_day)
            VALUES (?, ?, ?)
            """,
            [(reminder_id, i, t) for i, t in enumerate(times)],
        )

    @staticmethod
    def get(conn: sqlite3.Connection, reminder_id: str) -> Optional[ReminderDefinition]:
        """Get a reminder by ID."""
        row = conn.execute(
            """
            SELECT reminder_id, name, dosage, frequency
            FROM reminders WHERE reminder_id = ?
            """,
            (int(reminder_id),),
        ).fetchone()

        if row is None:
            return None
        return ReminderQueries._row_to_reminder(conn, row)

    @staticmethod
    def list_active(conn: sqlite3.Connection) -> list[ReminderDefinition]:
        """List all reminders in creation order."""
        rows = conn.execute(
            """
            SELECT reminder_id, name, dosage, frequency
            FROM reminders ORDER BY reminder_id
            """
        ).fetchall()
        return [ReminderQueries._row_to_reminder(conn, row) for row in rows]

    @staticmethod
    def update_times(conn: sqlite3.Connection, reminder: ReminderDefinition) -> None:
        """Replace a reminder's times of day with ``reminder.times_of_day``."""
        ReminderQueries._write_times(conn, int(reminder.reminder_id), reminder.times_of_day)
        conn.commit()

    @staticmethod
    def delete(conn: sqlite3.Connection, reminder_id: str) -> bool:
        """Delete a reminder with its times and logs. Returns False if not found."""
        rid = int(reminder_id)
        conn.execute("DELETE FROM reminder_times WHERE reminder_id = ?", (rid,))
        conn.execute("DELETE FROM intake_log WHERE reminder_id = ?", (rid,))
        cursor = conn.execute("DELETE FROM reminders WHERE reminder_id = ?", (rid,))
        conn.commit()
        return cursor.rowcount > 0


class IntakeQueries:
    """Database queries for intake log entries."""

    @staticmethod
    def record_intake(conn: sqlite3.Connection, entry: IntakeLogEntry) -> IntakeLogEntry:
        """
        Save an intake log entry.

        Keyed on (reminder, day, time): logging the same dose twice
        updates the existing row instead of adding a duplicate.
        """
        log_date = entry.scheduled_for.date().isoformat()
        time_of_day = entry.time_of_day

        conn.execute(
            """
            INSERT INTO intake_log (reminder_id, log_date, time_of_day, taken, notes)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(reminder_id, log_date, time_of_day) DO UPDATE SET
                taken = excluded.taken,
                notes = COALESCE(excluded.notes, intake_log.notes)
            """,
            (int(entry.reminder_id), log_date, time_of_day, entry.taken, entry.notes),
        )
        row = conn.execute(
            """
            SELECT log_id, notes FROM intake_log
            WHERE reminder_id = ? AND log_date = ? AND time_of_day = ?
            """,
            (int(entry.reminder_id), log_date, time_of_day),
        ).fetchone()
        conn.commit()

        logger.debug(
            "Recorded intake for reminder %s at %s %s", entry.reminder_id, log_date, time_of_day
        )
        return IntakeLogEntry(
            reminder_id=entry.reminder_id,
            scheduled_for=entry.scheduled_for,
            taken=entry.taken,
            notes=row[1],
            log_id=str(row[0]),
        )

    @staticmethod
    def logs_for_day(conn: sqlite3.Connection, day: date) -> list[IntakeLogEntry]:
        """Get all intake logs recorded for a calendar day."""
        rows = conn.execute(
            """
            SELECT log_id, reminder_id, log_date, time_of_day, taken, notes
            FROM intake_log
            WHERE log_date = ?
            ORDER BY log_id
            """,
            (day.isoformat(),),
        ).fetchall()

        return [
            IntakeLogEntry(
                reminder_id=str(row[1]),
                scheduled_for=datetime.fromisoformat(f"{row[2]}T{row[3]}"),
                taken=bool(row[4]),
                notes=row[5],
                log_id=str(row[0]),
            )
            for row in rows
        ]


class KickQueries:
    """Database queries for kick counter sessions."""

    @staticmethod
    def add_session(
        conn: sqlite3.Connection,
        session: KickSession,
        pregnancy_id: Optional[int] = None,
    ) -> KickSession:
        """Save a kick session and return it with its session_id set."""
        cursor = conn.execute(
            """
            INSERT INTO kick_sessions (pregnancy_id, count, duration_minutes,
                                       started_at, completed_at, notes)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                pregnancy_id,
                session.count,
                session.duration_minutes,
                session.started_at.isoformat(),
                session.completed_at.isoformat(),
                session.notes,
            ),
        )
        conn.commit()
        session.session_id = cursor.lastrowid
        return session

    @staticmethod
    def list_sessions(conn: sqlite3.Connection, limit: int = 20) -> list[KickSession]:
        """Get the most recent kick sessions, newest first."""
        rows = conn.execute(
            """
            SELECT session_id, count, duration_minutes, started_at, completed_at, notes
            FROM kick_sessions
            ORDER BY started_at DESC, session_id DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()

        return [
            KickSession(
                count=row[1],
                duration_minutes=row[2],
                started_at=datetime.fromisoformat(row[3]),
                completed_at=datetime.fromisoformat(row[4]),
                notes=row[5],
                session_id=row[0],
            )
            for row in rows
        ]
