"""Milestones, weekly insights and trimester checklists.

Static reference content shown alongside the progress snapshot. Lookups
return None (or an empty list) for weeks without content rather than
raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

MILESTONES = {
    8: "Baby's heart is beating!",
    12: "End of first trimester",
    16: "You might feel baby's first movements",
    20: "Halfway there!",
    24: "Baby can hear your voice",
    28: "Third trimester begins",
    32: "Baby is gaining weight rapidly",
    36: "Baby is full term",
    37: "Baby could arrive any day!",
}


@dataclass(frozen=True)
class WeeklyInsight:
    """What is happening for baby and mother in a given week."""

    week: int
    baby: str
    mother: str
    tip: str
    why_it_matters: str
    checklist: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ChecklistTask:
    """A to-do item recommended during a trimester."""

    task_id: str
    task: str
    description: str
    category: str  # 'Medical', 'Nutrition', 'Safety', 'Daily', 'Preparation'


WEEKLY_INSIGHTS: dict[int, WeeklyInsight] = {
    insight.week: insight
    for insight in [
        WeeklyInsight(
            week=1,
            baby="Your body is preparing for a potential pregnancy this week. This is a foundational stage for your cycle.",
            mother="Hormones are shifting to prepare your uterus for a new cycle. It's the start of a clean slate for your body.",
            tip="Focus on gentle movement and nourishing foods. Taking care of yourself now supports your future health.",
            why_it_matters="A healthy cycle provides the best environment for future development.",
            checklist=("Take folic acid", "Stay hydrated", "Gentle stretching"),
        ),
        WeeklyInsight(
            week=2,
            baby="Conception may occur at the end of this week as ovulation approaches. Your body is ready for new life.",
            mother="Your energy levels might feel higher due to rising estrogen. You are at your most fertile right now.",
            tip="Try to manage stress and get enough rest. A calm body supports healthy ovulation.",
            why_it_matters="Ovulation is the key moment that makes conception possible.",
            checklist=("Eat iron-rich foods", "Reduce caffeine", "Good sleep hygiene"),
        ),
        WeeklyInsight(
            week=3,
            baby="Fertilization happens and the tiny cells begin to divide and grow. This is the very beginning of your baby.",
            mother="The fertilized egg is traveling toward your uterus for implantation. You are officially starting your journey.",
            tip="Continue your healthy habits and listen to your body. Every small effort supports this early growth phase.",
            why_it_matters="The first cell divisions determine the blueprint for all future development.",
            checklist=("Eat omega-3s", "Meditate 5 mins", "Avoid high heat/saunas"),
        ),
        WeeklyInsight(
            week=4,
            baby="Implantation occurs as the embryo finds its home in your uterus. Your baby is now safely tucked away.",
            mother="Your body begins producing pregnancy hormones that support development. You might feel a slight change in energy.",
            tip="Stay patient and positive as your body adapts. This is a significant moment of connection with your baby.",
            why_it_matters="Implantation is what establishes the physical link between you and your baby.",
            checklist=("Book first appointment", "Stay hydrated", "Avoid heavy lifting"),
        ),
        WeeklyInsight(
            week=5,
            baby="The neural tube, which becomes the brain and spine, begins to form. This is a major step in development.",
            mother="You may start to feel early symptoms like mild fatigue or nausea. Your body is working hard to protect the baby.",
            tip="Rest whenever you feel tired and eat small, frequent meals. Listening to your body is the best form of care.",
            why_it_matters="The neural tube is the foundation for the entire nervous system.",
            checklist=("Small meal prep", "DHA supplements", "Early bedtime"),
        ),
        WeeklyInsight(
            week=6,
            baby="The heart starts beating and blood begins to circulate. This is a beautiful sign of life and growth.",
            mother="Your morning sickness might be more noticeable now. Your body is undergoing incredible changes to sustain life.",
            tip="Ginger tea or small crackers can help settle your stomach. Be kind to yourself as you navigate these early changes.",
            why_it_matters="The first heartbeat is a vital sign that the circulatory system is functioning.",
            checklist=("Ginger tea", "Comfortable clothes", "Vitamin B6 check"),
        ),
        WeeklyInsight(
            week=7,
            baby="The brain is growing rapidly and tiny buds for limbs appear. Your baby is evolving every single day.",
            mother="You may experience mood shifts as your hormones continue to surge. It's perfectly normal to feel a bit more emotional.",
            tip="Try journaling your thoughts or talking to a loved one. Sharing your experience can bring much-needed peace.",
            why_it_matters="Rapid brain growth requires consistent energy and stable nutrition.",
            checklist=("Focus on protein", "Mood journaling", "Fresh air walks"),
        ),
        WeeklyInsight(
            week=8,
            baby="Vital organs like the brain, heart, and lungs are starting to form. Your baby is becoming more defined.",
            mother="Your uterus is expanding to make more room for your growing baby. You are providing a safe and nurturing home.",
            tip="Wear comfortable, supportive clothing to stay relaxed. Your comfort is just as important as the baby's growth.",
            why_it_matters="Organogenesis is the process where all major body systems are established.",
            checklist=("Stretch gently", "Calcium-rich foods", "Plan 1st scan"),
        ),
        WeeklyInsight(
            week=9,
            baby="The embryonic tail is gone and distinct fingers and toes appear. Your baby is looking more like a person.",
            mother="You might notice your skin looking clearer or glowing. Your body is radiating the strength of new life.",
            tip="Stay connected with your healthcare provider for guidance. You are doing an amazing job nurturing this life.",
            why_it_matters="The transition from embryo to fetus is marked by the loss of the tail structure.",
            checklist=("Book blood tests", "Gentle skin care", "Hydration goal: 2L"),
        ),
    ]
}

TRIMESTER_CHECKLISTS: dict[int, list[ChecklistTask]] = {
    1: [
        ChecklistTask("1-1", "Book first prenatal appointment", "Usually between weeks 8-12.", "Medical"),
        ChecklistTask("1-2", "Start prenatal vitamins", "Ensure they have at least 400mcg of folic acid.", "Nutrition"),
        ChecklistTask("1-3", "Review medications", "Talk to your doctor about any current prescriptions.", "Safety"),
        ChecklistTask("1-4", "First Ultrasound", "Dating scan to confirm your due date.", "Medical"),
    ],
    2: [
        ChecklistTask("2-1", "Anatomy Scan (Level II Ultrasound)", "A detailed look at baby's heart, brain, and organs.", "Medical"),
        ChecklistTask("2-2", "Glucose Screening Test", "Checking for gestational diabetes (weeks 24-28).", "Medical"),
        ChecklistTask("2-3", "Monitor baby's kicks", "Start tracking daily movement patterns.", "Daily"),
    ],
    3: [
        ChecklistTask("3-1", "Pack Hospital Bag", "Items for you, partner, and the baby.", "Preparation"),
        ChecklistTask("3-2", "Group B Strep Test", "Routine screening between weeks 35-37.", "Medical"),
        ChecklistTask("3-3", "Finalize Birth Plan", "Discuss your preferences with your care team.", "Preparation"),
    ],
}


def get_milestone(week: int) -> Optional[str]:
    """Return the milestone reached in a week, if any."""
    return MILESTONES.get(week)


def get_weekly_insight(week: int) -> Optional[WeeklyInsight]:
    """Return the insight card for a week, if content exists for it."""
    return WEEKLY_INSIGHTS.get(week)


def checklist_for_trimester(trimester: int) -> list[ChecklistTask]:
    """Return the recommended tasks for a trimester (empty if unknown)."""
    return list(TRIMESTER_CHECKLISTS.get(trimester, []))
