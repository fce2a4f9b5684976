"""Gestational age calculator.

Converts an expected due date into a progress snapshot for a given
moment: completed gestational weeks, trimester, and time remaining.

Gestational age is counted from the first day of the last menstrual
period (LMP), which by Naegele's rule sits 280 days (40 weeks) before
the due date:
    LMP = due_date - 280 days
    week = floor((now - LMP) / 7 days)

Every value is clamped into a displayable range instead of raising, so a
snapshot can be rendered for any pair of dates, including a due date far
in the future or long past.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

# Naegele's rule: 40 weeks from LMP to due date
GESTATION_DAYS = 280
FULL_TERM_WEEKS = 40

MIN_WEEK = 1
MAX_WEEK = 42

# First week of each later trimester
SECOND_TRIMESTER_WEEK = 14
THIRD_TRIMESTER_WEEK = 28

TRIMESTER_NAMES = {
    1: "1st Trimester",
    2: "2nd Trimester",
    3: "3rd Trimester",
}

_SECONDS_PER_DAY = 24 * 60 * 60

Instant = Union[date, datetime]


@dataclass(frozen=True)
class GestationalReference:
    """The authoritative date a pregnancy is tracked from.

    Only the due date is stored. The LMP date is always derived from it,
    so the two can never disagree.
    """

    due_date: date

    @classmethod
    def from_due_date(cls, due_date: date) -> "GestationalReference":
        return cls(due_date=due_date)

    @classmethod
    def from_lmp(cls, lmp_date: date) -> "GestationalReference":
        return cls(due_date=derive_due_date_from_lmp(lmp_date))

    @property
    def lmp_date(self) -> date:
        return derive_lmp_from_due_date(self.due_date)

    def progress(self, now: Instant) -> "GestationalProgress":
        return compute_progress(self.due_date, now)


@dataclass(frozen=True)
class GestationalProgress:
    """Snapshot of pregnancy progress at one moment."""

    current_week: int          # Completed weeks since LMP, 1-42
    days_into_week: int        # 0-6
    trimester: int             # 1, 2 or 3
    days_remaining: int        # Days until due date, 0 once overdue
    weeks_remaining: int
    is_overdue: bool
    total_days_elapsed: int    # Raw days since LMP, negative before LMP

    @property
    def trimester_name(self) -> str:
        return TRIMESTER_NAMES[self.trimester]

    @property
    def percent_complete(self) -> float:
        """Share of a 40-week term completed, capped at 100."""
        return min(100.0, self.current_week / FULL_TERM_WEEKS * 100)


def derive_due_date_from_lmp(lmp_date: date) -> date:
    """Return the due date for a given last-menstrual-period date."""
    return lmp_date + timedelta(days=GESTATION_DAYS)


def derive_lmp_from_due_date(due_date: date) -> date:
    """Return the last-menstrual-period date for a given due date."""
    return due_date - timedelta(days=GESTATION_DAYS)


def trimester_for_week(week: int) -> int:
    """Return the trimester (1-3) a gestational week falls in.

    Boundary weeks belong to the later trimester: week 14 is the first
    week of the 2nd trimester and week 28 the first of the 3rd.
    """
    if week < SECOND_TRIMESTER_WEEK:
        return 1
    if week < THIRD_TRIMESTER_WEEK:
        return 2
    return 3


def _as_datetime(day: date, like: datetime) -> datetime:
    """Start of ``day`` in the same timezone (or naivety) as ``like``."""
    return datetime.combine(day, time.min, tzinfo=like.tzinfo)


def compute_progress(due_date: date, now: Instant) -> GestationalProgress:
    """Calculate pregnancy progress at ``now`` for a given due date.

    Args:
        due_date: Expected delivery date
        now: Moment to evaluate. A plain date means the start of that day.
             Aware datetimes are compared on their own wall clock.

    Returns:
        GestationalProgress with all fields clamped into range

    Example:
        >>> p = compute_progress(date(2026, 1, 1), date(2025, 10, 2))
        >>> (p.current_week, p.trimester, p.days_remaining, p.weeks_remaining)
        (27, 2, 91, 13)
    """
    if not isinstance(now, datetime):
        now = datetime.combine(now, time.min)

    lmp_start = _as_datetime(derive_lmp_from_due_date(due_date), now)
    due_start = _as_datetime(due_date, now)

    elapsed_seconds = (now - lmp_start).total_seconds()
    total_days_elapsed = math.floor(elapsed_seconds / _SECONDS_PER_DAY)

    current_week = max(MIN_WEEK, min(MAX_WEEK, total_days_elapsed // 7))
    # Before LMP there is no partial week to report
    days_into_week = total_days_elapsed % 7 if total_days_elapsed >= 0 else 0

    remaining_seconds = (due_start - now).total_seconds()
    days_remaining = max(0, math.ceil(remaining_seconds / _SECONDS_PER_DAY))
    weeks_remaining = math.ceil(days_remaining / 7)

    return GestationalProgress(
        current_week=current_week,
        days_into_week=days_into_week,
        trimester=trimester_for_week(current_week),
        days_remaining=days_remaining,
        weeks_remaining=weeks_remaining,
        is_overdue=now > due_start,
        total_days_elapsed=total_days_elapsed,
    )
