"""Tests for the bucket engine - pure logic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from custom_components.household_dashboard.engines.bucket_engine import (
    as_day_buckets,
    bucket_by_day,
    record_timestamp,
    upcoming_records,
)
from custom_components.household_dashboard.engines.period_engine import compute_period
from custom_components.household_dashboard.utils import dt_utils

WEEK = compute_period(date(2024, 3, 10)).days


def _event(event_id: str, start) -> dict:
    return {"id": event_id, "start": start}


# =============================================================================
# TEST: DAY BUCKETING
# =============================================================================


class TestBucketByDay:
    """Assigning records to calendar days."""

    def test_every_day_has_a_key_even_when_empty(self) -> None:
        """An empty day yields an empty list, not a missing key."""
        buckets = bucket_by_day([_event("e1", date(2024, 3, 12))], WEEK)
        assert list(buckets) == WEEK
        assert buckets[date(2024, 3, 11)] == []
        assert [e["id"] for e in buckets[date(2024, 3, 12)]] == ["e1"]

    def test_no_records_gives_seven_empty_buckets(self) -> None:
        buckets = bucket_by_day([], WEEK)
        assert len(buckets) == 7
        assert all(items == [] for items in buckets.values())

    def test_records_outside_period_are_dropped(self) -> None:
        buckets = bucket_by_day(
            [_event("before", date(2024, 3, 9)), _event("after", date(2024, 3, 17))], WEEK
        )
        assert sum(len(items) for items in buckets.values()) == 0

    def test_records_without_timestamp_are_dropped(self) -> None:
        buckets = bucket_by_day([{"id": "x"}, _event("e1", date(2024, 3, 10))], WEEK)
        assert [e["id"] for e in buckets[date(2024, 3, 10)]] == ["e1"]

    def test_late_evening_utc_lands_on_local_day(self) -> None:
        """02:00 UTC Tuesday is Monday evening in New York."""
        dt_utils.set_default_timezone(ZoneInfo("America/New_York"))
        event = _event("e1", datetime(2024, 3, 12, 2, 0, tzinfo=UTC))
        buckets = bucket_by_day([event], WEEK)
        assert buckets[date(2024, 3, 11)] == [event]
        assert buckets[date(2024, 3, 12)] == []

    def test_input_order_kept_without_sorting(self) -> None:
        late = _event("late", datetime(2024, 3, 10, 18, 0, tzinfo=UTC))
        early = _event("early", datetime(2024, 3, 10, 8, 0, tzinfo=UTC))
        buckets = bucket_by_day([late, early], WEEK)
        assert [e["id"] for e in buckets[date(2024, 3, 10)]] == ["late", "early"]

    def test_chronological_sort_is_stable(self) -> None:
        late = _event("late", datetime(2024, 3, 10, 18, 0, tzinfo=UTC))
        first = _event("first", datetime(2024, 3, 10, 8, 0, tzinfo=UTC))
        second = _event("second", datetime(2024, 3, 10, 8, 0, tzinfo=UTC))
        all_day = _event("all_day", date(2024, 3, 10))
        buckets = bucket_by_day(
            [late, first, second, all_day], WEEK, sort_chronologically=True
        )
        assert [e["id"] for e in buckets[date(2024, 3, 10)]] == [
            "all_day",
            "first",
            "second",
            "late",
        ]

    def test_custom_timestamp_accessor(self) -> None:
        bills = [{"id": "b1", "paid_on": date(2024, 3, 14)}]
        buckets = bucket_by_day(bills, WEEK, timestamp_fn=lambda b: b["paid_on"])
        assert buckets[date(2024, 3, 14)] == bills

    def test_as_day_buckets(self) -> None:
        result = as_day_buckets(bucket_by_day([_event("e1", date(2024, 3, 10))], WEEK))
        assert [bucket.date for bucket in result] == WEEK
        assert not result[0].is_empty
        assert result[1].is_empty


class TestRecordTimestamp:
    """Default timestamp accessor."""

    def test_prefers_start_then_due_date_then_date(self) -> None:
        assert record_timestamp({"start": date(2024, 3, 1), "date": date(2024, 3, 2)}) == date(
            2024, 3, 1
        )
        assert record_timestamp({"due_date": date(2024, 3, 3)}) == date(2024, 3, 3)
        assert record_timestamp({"date": date(2024, 3, 4)}) == date(2024, 3, 4)
        assert record_timestamp({"start": None, "name": "x"}) is None


# =============================================================================
# TEST: UPCOMING LIST
# =============================================================================


class TestUpcomingRecords:
    """Next-N selection."""

    def test_sorted_and_limited(self) -> None:
        events = [
            _event(f"e{day}", datetime(2024, 3, day, 9, 0, tzinfo=UTC))
            for day in (15, 11, 13, 12, 20, 14)
        ]
        result = upcoming_records(events, limit=3)
        assert [e["id"] for e in result] == ["e11", "e12", "e13"]

    def test_after_excludes_past(self) -> None:
        events = [
            _event("past", datetime(2024, 3, 10, 9, 0, tzinfo=UTC)),
            _event("future", datetime(2024, 3, 10, 15, 0, tzinfo=UTC)),
        ]
        result = upcoming_records(events, after=datetime(2024, 3, 10, 12, 0, tzinfo=UTC))
        assert [e["id"] for e in result] == ["future"]

    def test_after_date_keeps_whole_day(self) -> None:
        events = [_event("morning", datetime(2024, 3, 10, 1, 0, tzinfo=UTC))]
        assert upcoming_records(events, after=date(2024, 3, 10)) == events

    def test_zero_limit(self) -> None:
        assert upcoming_records([_event("e1", date(2024, 3, 10))], limit=0) == []
