"""Tests for the period engine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from custom_components.household_dashboard.engines.period_engine import (
    PERIOD_DAY,
    PERIOD_MONTH,
    PERIOD_WEEK,
    Period,
    compute_period,
    navigate,
    start_of_week,
)
from custom_components.household_dashboard.utils import dt_utils

# =============================================================================
# TEST: WEEK BOUNDARIES
# =============================================================================


class TestWeekPeriod:
    """Weeks run Sunday through Saturday."""

    @pytest.mark.parametrize(
        "reference",
        [date(2024, 3, 10), date(2024, 3, 13), date(2024, 3, 16)],
    )
    def test_every_day_of_week_maps_to_same_sunday(self, reference: date) -> None:
        """Sunday, Wednesday and Saturday share one week."""
        period = compute_period(reference, PERIOD_WEEK)
        assert period.start == date(2024, 3, 10)
        assert period.end == date(2024, 3, 17)

    def test_week_has_seven_ordered_days(self) -> None:
        period = compute_period(date(2024, 3, 13), PERIOD_WEEK)
        assert period.days == [date(2024, 3, day) for day in range(10, 17)]
        assert period.last_day == date(2024, 3, 16)

    def test_week_spanning_month_and_year(self) -> None:
        """Week containing New Year's Day starts in December."""
        period = compute_period(date(2025, 1, 1), PERIOD_WEEK)
        assert period.start == date(2024, 12, 29)
        assert period.end == date(2025, 1, 5)

    def test_start_of_week_on_sunday_is_same_day(self) -> None:
        assert start_of_week(date(2024, 3, 10)) == date(2024, 3, 10)

    def test_periods_from_different_references_are_equal(self) -> None:
        """The reference date does not take part in equality."""
        assert compute_period(date(2024, 3, 11)) == compute_period(date(2024, 3, 15))

    def test_timestamp_reference_uses_local_day(self) -> None:
        """A Sunday-night UTC instant that is Saturday in New York stays in the prior week."""
        dt_utils.set_default_timezone(ZoneInfo("America/New_York"))
        period = compute_period(datetime(2024, 3, 10, 2, 0, tzinfo=UTC), PERIOD_WEEK)
        assert period.start == date(2024, 3, 3)
        assert period.reference_date == date(2024, 3, 9)


# =============================================================================
# TEST: DAY AND MONTH
# =============================================================================


class TestDayAndMonthPeriods:
    """Single-day and calendar-month periods."""

    def test_day_period_has_equal_bounds_and_one_day(self) -> None:
        period = compute_period(date(2024, 3, 10), PERIOD_DAY)
        assert period.start == period.end == date(2024, 3, 10)
        assert period.days == [date(2024, 3, 10)]
        assert period.contains(date(2024, 3, 10))
        assert not period.contains(date(2024, 3, 11))

    def test_month_period_in_leap_february(self) -> None:
        period = compute_period(date(2024, 2, 14), PERIOD_MONTH)
        assert period.start == date(2024, 2, 1)
        assert period.end == date(2024, 3, 1)
        assert len(period.days) == 29

    def test_month_period_in_december(self) -> None:
        period = compute_period(date(2024, 12, 31), PERIOD_MONTH)
        assert period.end == date(2025, 1, 1)

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValueError):
            compute_period(date(2024, 3, 10), "fortnight")

    def test_window_is_local_midnight_to_midnight(self) -> None:
        tz = ZoneInfo("America/New_York")
        start, end = compute_period(date(2024, 3, 10), PERIOD_DAY).window(tz)
        assert start == datetime(2024, 3, 10, 0, 0, tzinfo=tz)
        assert end == datetime(2024, 3, 11, 0, 0, tzinfo=tz)

    def test_as_dict(self) -> None:
        period = compute_period(date(2024, 3, 13), PERIOD_WEEK)
        assert period.as_dict() == {
            "kind": "week",
            "reference_date": "2024-03-13",
            "start": "2024-03-10",
            "end": "2024-03-17",
        }


# =============================================================================
# TEST: NAVIGATION
# =============================================================================


class TestNavigation:
    """Stepping forwards and backwards."""

    def test_next_week(self) -> None:
        period = navigate(compute_period(date(2024, 3, 13)), 1)
        assert period.start == date(2024, 3, 17)
        assert period.reference_date == date(2024, 3, 20)

    def test_previous_day(self) -> None:
        period = navigate(compute_period(date(2024, 3, 1), PERIOD_DAY), -1)
        assert period.start == date(2024, 2, 29)

    def test_month_step_clamps_day_of_month(self) -> None:
        """Jan 31 steps to February, not March."""
        period = navigate(compute_period(date(2024, 1, 31), PERIOD_MONTH), 1)
        assert period.start == date(2024, 2, 1)
        assert period.reference_date == date(2024, 2, 29)

    def test_zero_direction_is_identity(self) -> None:
        period = compute_period(date(2024, 3, 13))
        assert navigate(period, 0) is period

    @pytest.mark.parametrize("kind", [PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH])
    def test_forward_then_back_returns_same_period(self, kind: str) -> None:
        period = compute_period(date(2024, 3, 13), kind)
        assert navigate(navigate(period, 1), -1) == period

    def test_multi_step(self) -> None:
        period = navigate(compute_period(date(2024, 3, 13)), -2)
        assert period == Period(
            reference_date=date(2024, 2, 28),
            kind=PERIOD_WEEK,
            start=date(2024, 2, 25),
            end=date(2024, 3, 3),
        )
