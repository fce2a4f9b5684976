"""Data models for supplement reminders and intake logging."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from prenatal.parsing import InvalidInput, parse_time_of_day

MIN_TIMES_PER_DAY = 1
MAX_TIMES_PER_DAY = 3
DEFAULT_ADDED_SLOT = "12:00"


class FrequencyCode(Enum):
    """How often a reminder fires each day."""
    DAILY = "DAILY"
    TWICE_DAILY = "TWICE_DAILY"
    THREE_TIMES_DAILY = "THREE_TIMES_DAILY"


FREQUENCY_LABELS = {
    FrequencyCode.DAILY: "Daily",
    FrequencyCode.TWICE_DAILY: "2x Daily",
    FrequencyCode.THREE_TIMES_DAILY: "3x Daily",
}


@dataclass
class ReminderDefinition:
    """A recurring medication or supplement reminder."""

    reminder_id: str
    name: str
    dosage: str
    frequency: FrequencyCode = FrequencyCode.DAILY
    times_of_day: list[str] = field(default_factory=lambda: ["08:00"])

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidInput("Reminder name must not be empty")
        if not MIN_TIMES_PER_DAY <= len(self.times_of_day) <= MAX_TIMES_PER_DAY:
            raise InvalidInput(
                f"A reminder needs {MIN_TIMES_PER_DAY}-{MAX_TIMES_PER_DAY} times of day, "
                f"got {len(self.times_of_day)}"
            )
        self.times_of_day = [parse_time_of_day(t) for t in self.times_of_day]
        if len(set(self.times_of_day)) != len(self.times_of_day):
            raise InvalidInput(f"Duplicate times of day: {self.times_of_day}")

    def with_added_slot(self, time: str = DEFAULT_ADDED_SLOT) -> "ReminderDefinition":
        """Return a copy with one more time slot appended."""
        if len(self.times_of_day) >= MAX_TIMES_PER_DAY:
            raise InvalidInput(
                f"'{self.name}' already has the maximum of {MAX_TIMES_PER_DAY} times"
            )
        return replace(self, times_of_day=[*self.times_of_day, time])

    def with_removed_slot(self, index: int) -> "ReminderDefinition":
        """Return a copy without the time slot at ``index``."""
        if len(self.times_of_day) <= MIN_TIMES_PER_DAY:
            raise InvalidInput(f"'{self.name}' must keep at least one time of day")
        self._check_index(index)
        times = [t for i, t in enumerate(self.times_of_day) if i != index]
        return replace(self, times_of_day=times)

    def with_updated_slot(self, index: int, time: str) -> "ReminderDefinition":
        """Return a copy with the time slot at ``index`` changed."""
        self._check_index(index)
        times = [time if i == index else t for i, t in enumerate(self.times_of_day)]
        return replace(self, times_of_day=times)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.times_of_day):
            raise InvalidInput(
                f"Slot index {index} out of range for {len(self.times_of_day)} times"
            )


@dataclass
class IntakeLogEntry:
    """A record that a scheduled dose was taken."""

    reminder_id: str
    scheduled_for: datetime
    taken: bool = True
    notes: Optional[str] = None
    log_id: Optional[str] = None

    @property
    def time_of_day(self) -> str:
        """Wall-clock HH:MM of the scheduled dose, timezone offset ignored."""
        return self.scheduled_for.strftime("%H:%M")


@dataclass(frozen=True)
class DailyScheduleSlot:
    """One dose on the day's schedule."""

    reminder_id: str
    name: str
    dosage: str
    time: str
    taken: bool
    log_id: Optional[str] = None


@dataclass(frozen=True)
class Completion:
    """How much of a day's schedule has been taken."""

    taken_count: int
    total_count: int
    progress_fraction: float

    @property
    def percent(self) -> float:
        return self.progress_fraction * 100
