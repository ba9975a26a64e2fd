"""Tests for the status engine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from custom_components.household_dashboard.engines.status_engine import (
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_DUE_TODAY,
    STATUS_DUE_TOMORROW,
    STATUS_OVERDUE,
    STATUS_UPCOMING,
    STATUS_URGENT,
    StatusResult,
    classify,
    countdown_label,
    is_due_within,
)
from custom_components.household_dashboard.utils import dt_utils

TODAY = date(2024, 3, 10)

# =============================================================================
# TEST: CLASSIFICATION
# =============================================================================


class TestClassify:
    """Display status from raw status and due date."""

    def test_due_at_midnight_today_is_due_today(self) -> None:
        """A bill due 2024-03-10T00:00 on 2024-03-10 is due today."""
        result = classify("pending", datetime(2024, 3, 10, 0, 0, tzinfo=UTC), TODAY)
        assert result.status == STATUS_DUE_TODAY
        assert result.days_until == 0

    def test_due_at_end_of_day_is_still_today(self) -> None:
        """23:59 local today is the same calendar day, not tomorrow."""
        tz = ZoneInfo("America/New_York")
        dt_utils.set_default_timezone(tz)
        result = classify("pending", datetime(2024, 3, 10, 23, 59, tzinfo=tz), TODAY)
        assert result.status == STATUS_DUE_TODAY

    def test_past_due_is_overdue_with_magnitude(self) -> None:
        result = classify("pending", date(2024, 3, 5), TODAY)
        assert result.status == STATUS_OVERDUE
        assert result.days_until == -5
        assert result.days_overdue == 5
        assert not result.urgent

    def test_due_tomorrow(self) -> None:
        assert classify("pending", date(2024, 3, 11), TODAY).status == STATUS_DUE_TOMORROW

    def test_urgency_depends_on_threshold(self) -> None:
        """Wednesday the 13th is 3 days out: urgent at 3, not at 2."""
        at_three = classify("pending", date(2024, 3, 13), TODAY, urgency_days=3)
        at_two = classify("pending", date(2024, 3, 13), TODAY, urgency_days=2)
        assert at_three.days_until == 3
        assert at_three.status == STATUS_UPCOMING
        assert at_three.urgent
        assert at_three.display_status == STATUS_URGENT
        assert not at_two.urgent
        assert at_two.display_status == STATUS_UPCOMING

    def test_urgency_never_reaches_past_a_week(self) -> None:
        """A 10-day threshold still leaves an item 9 days out merely upcoming."""
        result = classify("pending", date(2024, 3, 19), TODAY, urgency_days=10)
        assert result.days_until == 9
        assert result.status == STATUS_UPCOMING
        assert not result.urgent
        assert result.display_status == STATUS_UPCOMING
        assert classify("pending", date(2024, 3, 17), TODAY, urgency_days=10).urgent

    def test_same_inputs_give_same_result(self) -> None:
        args = ("pending", date(2024, 3, 13), TODAY, 3)
        assert classify(*args) == classify(*args)

    @pytest.mark.parametrize("raw", ["paid", "completed", "PAID", " Completed "])
    def test_done_statuses_win_over_dates(self, raw: str) -> None:
        result = classify(raw, date(2024, 3, 1), TODAY)
        assert result.status == STATUS_COMPLETED
        assert not result.is_active

    def test_cancelled(self) -> None:
        result = classify("cancelled", date(2024, 3, 1), TODAY)
        assert result.status == STATUS_CANCELLED
        assert not result.is_active

    def test_raw_overdue_is_rederived_from_date(self) -> None:
        """A stale "overdue" status on a future date reads as upcoming."""
        result = classify("overdue", date(2024, 3, 20), TODAY)
        assert result.status == STATUS_UPCOMING

    def test_missing_raw_status_treated_as_active(self) -> None:
        assert classify(None, date(2024, 3, 10), TODAY).status == STATUS_DUE_TODAY

    def test_far_future_not_urgent(self) -> None:
        result = classify("pending", date(2024, 4, 10), TODAY)
        assert result.status == STATUS_UPCOMING
        assert not result.urgent

    def test_as_dict_reports_display_status(self) -> None:
        result = classify("pending", date(2024, 3, 12), TODAY)
        assert result.as_dict() == {
            "status": STATUS_URGENT,
            "days_until": 2,
            "days_overdue": 0,
            "urgent": True,
        }


# =============================================================================
# TEST: LABELS AND WINDOWS
# =============================================================================


class TestCountdownLabel:
    """Countdown text shown beside an item."""

    @pytest.mark.parametrize(
        ("due", "expected"),
        [
            (date(2024, 3, 10), "(Today!)"),
            (date(2024, 3, 11), "(Tomorrow)"),
            (date(2024, 3, 15), "(5 days)"),
            (date(2024, 3, 22), ""),
            (date(2024, 3, 9), "Overdue by 1 day"),
            (date(2024, 3, 8), "Overdue by 2 days"),
        ],
    )
    def test_labels(self, due: date, expected: str) -> None:
        assert countdown_label(classify("pending", due, TODAY)) == expected

    def test_completed_has_no_label(self) -> None:
        assert countdown_label(classify("paid", date(2024, 3, 11), TODAY)) == ""


class TestDueWithin:
    """Horizon checks for the "due this week" counters."""

    def test_today_and_seventh_day_inclusive(self) -> None:
        assert is_due_within(classify("pending", date(2024, 3, 10), TODAY))
        assert is_due_within(classify("pending", date(2024, 3, 17), TODAY))
        assert not is_due_within(classify("pending", date(2024, 3, 18), TODAY))

    def test_overdue_and_done_excluded(self) -> None:
        assert not is_due_within(classify("pending", date(2024, 3, 9), TODAY))
        assert not is_due_within(classify("paid", date(2024, 3, 12), TODAY))

    def test_custom_horizon(self) -> None:
        result = StatusResult(status=STATUS_UPCOMING, days_until=10)
        assert is_due_within(result, horizon_days=14)
