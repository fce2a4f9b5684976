"""Tests for gestational age calculation."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from prenatal.gestation.clock import (
    GESTATION_DAYS,
    GestationalReference,
    compute_progress,
    derive_due_date_from_lmp,
    derive_lmp_from_due_date,
    trimester_for_week,
)

DUE = date(2026, 1, 1)
LMP = date(2025, 3, 27)


class TestDateConversion:
    """Tests for due date / LMP conversion."""

    def test_lmp_is_280_days_before_due(self) -> None:
        assert derive_lmp_from_due_date(DUE) == LMP
        assert (DUE - LMP).days == GESTATION_DAYS

    def test_due_from_lmp(self) -> None:
        assert derive_due_date_from_lmp(LMP) == DUE

    @pytest.mark.parametrize(
        "d",
        [date(2024, 2, 29), date(2025, 12, 31), date(2000, 1, 1), date(2030, 7, 4)],
    )
    def test_round_trip(self, d: date) -> None:
        """Conversions are exact inverses, including across leap days."""
        assert derive_due_date_from_lmp(derive_lmp_from_due_date(d)) == d
        assert derive_lmp_from_due_date(derive_due_date_from_lmp(d)) == d

    def test_reference_from_lmp(self) -> None:
        ref = GestationalReference.from_lmp(LMP)
        assert ref.due_date == DUE
        assert ref.lmp_date == LMP

    def test_reference_from_due_date(self) -> None:
        ref = GestationalReference.from_due_date(DUE)
        assert ref.lmp_date == LMP


class TestTrimester:
    """Tests for trimester boundaries."""

    def test_first_trimester(self) -> None:
        assert trimester_for_week(1) == 1
        assert trimester_for_week(13) == 1

    def test_week_14_starts_second(self) -> None:
        assert trimester_for_week(14) == 2
        assert trimester_for_week(27) == 2

    def test_week_28_starts_third(self) -> None:
        assert trimester_for_week(28) == 3
        assert trimester_for_week(42) == 3


class TestComputeProgress:
    """Tests for compute_progress."""

    def test_reference_scenario(self) -> None:
        """189 days after LMP is week 27, 2nd trimester, 91 days left."""
        p = compute_progress(DUE, date(2025, 10, 2))
        assert p.total_days_elapsed == 189
        assert p.current_week == 27
        assert p.days_into_week == 0
        assert p.trimester == 2
        assert p.days_remaining == 91
        assert p.weeks_remaining == 13
        assert p.is_overdue is False

    def test_days_into_week(self) -> None:
        p = compute_progress(DUE, LMP + timedelta(days=100))
        assert p.current_week == 14
        assert p.days_into_week == 2
        assert p.trimester == 2

    def test_datetime_partial_day_floors(self) -> None:
        """Elapsed days are floored; remaining days are rounded up."""
        now = datetime(2025, 10, 2, 18, 30)
        p = compute_progress(DUE, now)
        assert p.total_days_elapsed == 189
        assert p.days_remaining == 91

    def test_before_lmp_clamps_to_week_one(self) -> None:
        p = compute_progress(DUE, LMP - timedelta(days=10))
        assert p.current_week == 1
        assert p.days_into_week == 0
        assert p.trimester == 1
        assert p.total_days_elapsed == -10

    def test_first_week_clamps_to_one(self) -> None:
        p = compute_progress(DUE, LMP + timedelta(days=3))
        assert p.current_week == 1
        assert p.days_into_week == 3

    def test_far_future_clamps_to_42(self) -> None:
        p = compute_progress(DUE, DUE + timedelta(days=365))
        assert p.current_week == 42
        assert p.trimester == 3
        assert p.days_remaining == 0
        assert p.weeks_remaining == 0
        assert p.is_overdue is True

    def test_on_due_date_not_overdue_at_midnight(self) -> None:
        p = compute_progress(DUE, DUE)
        assert p.current_week == 40
        assert p.days_remaining == 0
        assert p.is_overdue is False

    def test_overdue_later_on_due_date(self) -> None:
        p = compute_progress(DUE, datetime(2026, 1, 1, 9, 0))
        assert p.is_overdue is True
        assert p.days_remaining == 0

    def test_weeks_remaining_rounds_up(self) -> None:
        p = compute_progress(DUE, DUE - timedelta(days=8))
        assert p.days_remaining == 8
        assert p.weeks_remaining == 2

    def test_aware_datetime_uses_wall_clock(self) -> None:
        tz = timezone(timedelta(hours=-5))
        naive = compute_progress(DUE, datetime(2025, 10, 2, 6, 0))
        aware = compute_progress(DUE, datetime(2025, 10, 2, 6, 0, tzinfo=tz))
        assert aware == naive

    def test_trimester_flips_at_boundaries(self) -> None:
        week13 = compute_progress(DUE, LMP + timedelta(days=13 * 7 + 6))
        week14 = compute_progress(DUE, LMP + timedelta(days=14 * 7))
        week27 = compute_progress(DUE, LMP + timedelta(days=27 * 7 + 6))
        week28 = compute_progress(DUE, LMP + timedelta(days=28 * 7))
        assert (week13.current_week, week13.trimester) == (13, 1)
        assert (week14.current_week, week14.trimester) == (14, 2)
        assert (week27.current_week, week27.trimester) == (27, 2)
        assert (week28.current_week, week28.trimester) == (28, 3)

    def test_week_is_monotonic(self) -> None:
        """Current week never decreases as time moves forward."""
        start = LMP - timedelta(days=30)
        weeks = [
            compute_progress(DUE, start + timedelta(days=n)).current_week
            for n in range(0, 400, 3)
        ]
        assert weeks == sorted(weeks)

    def test_ranges_hold_for_any_day(self) -> None:
        start = LMP - timedelta(days=60)
        for n in range(0, 420, 5):
            p = compute_progress(DUE, start + timedelta(days=n))
            assert 1 <= p.current_week <= 42
            assert 0 <= p.days_into_week <= 6
            assert p.trimester in (1, 2, 3)
            assert p.days_remaining >= 0
            assert p.weeks_remaining >= 0

    def test_snapshot_is_immutable(self) -> None:
        p = compute_progress(DUE, date(2025, 10, 2))
        with pytest.raises(AttributeError):
            p.current_week = 30  # type: ignore[misc]

    def test_trimester_name_and_percent(self) -> None:
        p = compute_progress(DUE, date(2025, 10, 2))
        assert p.trimester_name == "2nd Trimester"
        assert p.percent_complete == pytest.approx(27 / 40 * 100)

    def test_percent_capped_at_100(self) -> None:
        p = compute_progress(DUE, DUE + timedelta(days=14))
        assert p.percent_complete == 100.0

    def test_reference_progress_matches_function(self) -> None:
        ref = GestationalReference.from_due_date(DUE)
        assert ref.progress(date(2025, 10, 2)) == compute_progress(DUE, date(2025, 10, 2))
