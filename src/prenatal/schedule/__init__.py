"""Daily supplement schedule built from reminders and intake logs."""

from __future__ import annotations

from prenatal.schedule.models import (
    Completion,
    DailyScheduleSlot,
    FREQUENCY_LABELS,
    FrequencyCode,
    IntakeLogEntry,
    ReminderDefinition,
)
from prenatal.schedule.reconciler import (
    build_daily_schedule,
    compute_completion,
    pending_slots,
    record_intake,
)

__all__ = [
    "Completion",
    "DailyScheduleSlot",
    "FREQUENCY_LABELS",
    "FrequencyCode",
    "IntakeLogEntry",
    "ReminderDefinition",
    "build_daily_schedule",
    "compute_completion",
    "pending_slots",
    "record_intake",
]
