"""Kick counter sessions.

A session records how many fetal movements were felt and how long it
took. The usual guidance is to count until ten movements are felt.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from prenatal.parsing import InvalidInput

KICK_TARGET = 10


@dataclass
class KickSession:
    """A completed kick counting session."""

    count: int
    duration_minutes: int
    started_at: datetime
    completed_at: datetime
    notes: Optional[str] = None
    session_id: Optional[int] = None

    @property
    def reached_target(self) -> bool:
        return self.count >= KICK_TARGET


def session_duration_minutes(started_at: datetime, completed_at: datetime) -> int:
    """Whole minutes between start and end, rounded up (never negative)."""
    seconds = (completed_at - started_at).total_seconds()
    return max(0, math.ceil(seconds / 60))


def format_elapsed(seconds: int) -> str:
    """Format a running timer as ``m:ss``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


def build_session(
    count: int,
    started_at: datetime,
    completed_at: datetime,
    notes: Optional[str] = None,
) -> KickSession:
    """Validate and build a session from its start and end times."""
    if count < 0:
        raise InvalidInput(f"Kick count cannot be negative, got {count}")
    if (started_at.tzinfo is None) != (completed_at.tzinfo is None):
        raise InvalidInput(
            "Session start and end must both have a UTC offset or both omit it"
        )
    if completed_at < started_at:
        raise InvalidInput("Session cannot end before it starts")

    return KickSession(
        count=count,
        duration_minutes=session_duration_minutes(started_at, completed_at),
        started_at=started_at,
        completed_at=completed_at,
        notes=notes,
    )
