"""Gestational age, baby size and weekly reference content.

Key components:
- Due date / LMP conversion (Naegele's rule, 280 days)
- Progress snapshot: week, trimester, days remaining
- Baby size comparisons for weeks 4-40
- Milestones, weekly insights and trimester checklists
"""

from __future__ import annotations

from prenatal.gestation.baby_sizes import BabySizeEntry, lookup_baby_size
from prenatal.gestation.clock import (
    GESTATION_DAYS,
    GestationalProgress,
    GestationalReference,
    compute_progress,
    derive_due_date_from_lmp,
    derive_lmp_from_due_date,
    trimester_for_week,
)
from prenatal.gestation.milestones import (
    ChecklistTask,
    WeeklyInsight,
    checklist_for_trimester,
    get_milestone,
    get_weekly_insight,
)

__all__ = [
    "GESTATION_DAYS",
    "BabySizeEntry",
    "ChecklistTask",
    "GestationalProgress",
    "GestationalReference",
    "WeeklyInsight",
    "checklist_for_trimester",
    "compute_progress",
    "derive_due_date_from_lmp",
    "derive_lmp_from_due_date",
    "get_milestone",
    "get_weekly_insight",
    "lookup_baby_size",
    "trimester_for_week",
]
