"""Reconcile reminder definitions against a day's intake logs.

Each reminder expands into one slot per time of day. A slot is taken
when any log for the same reminder was recorded at the same wall-clock
HH:MM on the same calendar day. Times are compared as strings on the
log's own wall clock, so a log stored with a different UTC offset than
the reader still matches the slot it was recorded for.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, Optional

from prenatal.parsing import parse_time_of_day
from prenatal.schedule.models import (
    Completion,
    DailyScheduleSlot,
    IntakeLogEntry,
    ReminderDefinition,
)


def _index_logs(
    logs: Iterable[IntakeLogEntry], day: date
) -> dict[tuple[str, str], list[IntakeLogEntry]]:
    """Group the day's logs by (reminder_id, HH:MM), preserving order."""
    index: dict[tuple[str, str], list[IntakeLogEntry]] = {}
    for log in logs:
        if log.scheduled_for.date() != day:
            continue
        index.setdefault((log.reminder_id, log.time_of_day), []).append(log)
    return index


def _pick_log(matches: list[IntakeLogEntry]) -> Optional[IntakeLogEntry]:
    for log in matches:
        if log.taken:
            return log
    return matches[0] if matches else None


def build_daily_schedule(
    reminders: Iterable[ReminderDefinition],
    logs_for_day: Iterable[IntakeLogEntry],
    day: date,
) -> list[DailyScheduleSlot]:
    """Expand reminders into the day's dose slots and mark which were taken.

    Args:
        reminders: Active reminder definitions, in display order
        logs_for_day: Intake logs; entries for other days are ignored
        day: The calendar day being scheduled

    Returns:
        Slots sorted by time. Slots at the same time keep reminder order,
        then the reminder's own time order.

    Example:
        >>> r = ReminderDefinition("r1", "Iron", "27mg", times_of_day=["20:00", "08:00"])
        >>> [s.time for s in build_daily_schedule([r], [], date(2025, 1, 1))]
        ['08:00', '20:00']
    """
    index = _index_logs(logs_for_day, day)

    slots = []
    for reminder in reminders:
        for slot_time in reminder.times_of_day:
            matches = index.get((reminder.reminder_id, slot_time), [])
            log = _pick_log(matches)
            slots.append(
                DailyScheduleSlot(
                    reminder_id=reminder.reminder_id,
                    name=reminder.name,
                    dosage=reminder.dosage,
                    time=slot_time,
                    taken=any(m.taken for m in matches),
                    log_id=log.log_id if log else None,
                )
            )

    # sorted() is stable, so equal times keep insertion order
    return sorted(slots, key=lambda s: s.time)


def compute_completion(schedule: list[DailyScheduleSlot]) -> Completion:
    """Count taken doses. An empty schedule is 0 of 0 with fraction 0."""
    total = len(schedule)
    taken = sum(1 for slot in schedule if slot.taken)
    return Completion(
        taken_count=taken,
        total_count=total,
        progress_fraction=taken / total if total else 0.0,
    )


def pending_slots(schedule: list[DailyScheduleSlot]) -> list[DailyScheduleSlot]:
    """Return the slots still waiting to be taken, in schedule order."""
    return [slot for slot in schedule if not slot.taken]


def record_intake(
    reminder_id: str,
    slot_time: str,
    day: date,
    notes: Optional[str] = None,
) -> IntakeLogEntry:
    """Create a log entry marking the dose at ``day`` + ``slot_time`` as taken.

    This does not check for an existing log. Callers skip slots already
    marked taken, and the database layer upserts on (reminder, day, time).
    """
    hh_mm = parse_time_of_day(slot_time)
    scheduled_for = datetime.combine(day, time.fromisoformat(hh_mm))
    return IntakeLogEntry(
        reminder_id=reminder_id,
        scheduled_for=scheduled_for,
        taken=True,
        notes=notes,
    )
