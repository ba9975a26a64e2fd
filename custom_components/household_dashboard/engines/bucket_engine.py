"""Bucket Engine - group time-stamped records into calendar days.

Used by the week calendar, the meal plan grid and the upcoming-events list.
Records are plain dicts as produced by `data_builders`; the timestamp is read
through an accessor so the same engine serves events (`start`), bills and
chores (`due_date`), meal plans and medical records (`date`).

⚠️ ENGINE PURITY: NO `homeassistant.*` imports allowed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
import logging
from typing import Any, Final, TypeVar

from ..utils.dt_utils import as_utc, local_calendar_day, start_of_local_day

_LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Mapping[str, Any])
TimestampFn = Callable[[Any], "date | datetime | None"]

# Attribute names probed, in order, by the default timestamp accessor
TIMESTAMP_FIELDS: Final = ("start", "due_date", "date")

DEFAULT_UPCOMING_LIMIT: Final = 5


@dataclass(slots=True)
class DayBucket:
    """One calendar day and the records that fall on it."""

    date: date
    records: list[Any] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records


def record_timestamp(record: Mapping[str, Any]) -> date | datetime | None:
    """Default accessor: first of start / due_date / date that holds a value."""
    for key in TIMESTAMP_FIELDS:
        value = record.get(key)
        if isinstance(value, date):
            return value
    return None


def _instant(value: date | datetime) -> datetime:
    """Comparable UTC instant for a date (local midnight) or datetime."""
    if isinstance(value, datetime):
        return as_utc(value)
    return as_utc(start_of_local_day(value))


def bucket_by_day(
    records: Iterable[RecordT],
    days: Sequence[date],
    timestamp_fn: TimestampFn | None = None,
    sort_chronologically: bool = False,
) -> dict[date, list[RecordT]]:
    """Assign each record to the day it falls on.

    Every requested day gets a key, with an empty list when nothing falls on
    it. Records whose day is not requested, or that carry no timestamp, are
    dropped. Within a day, records keep their input order unless
    `sort_chronologically` is set, in which case they are stably sorted by
    instant.

    Args:
        records: Records to bucket
        days: Calendar days to produce buckets for (usually Period.days)
        timestamp_fn: Accessor returning the record's date or datetime.
            Defaults to `record_timestamp`.
        sort_chronologically: Sort each bucket by timestamp

    Returns:
        Mapping of day → records, with keys in the order of `days`.

    Example:
        >>> buckets = bucket_by_day(events, compute_period(today).days)
        >>> [len(v) for v in buckets.values()]
        [0, 2, 0, 1, 0, 0, 0]
    """
    accessor = timestamp_fn or record_timestamp
    buckets: dict[date, list[RecordT]] = {day: [] for day in days}
    dropped = 0

    for record in records:
        stamp = accessor(record)
        if stamp is None:
            dropped += 1
            continue
        bucket = buckets.get(local_calendar_day(stamp))
        if bucket is None:
            continue
        bucket.append(record)

    if dropped:
        _LOGGER.debug("Skipped %d records without a timestamp", dropped)

    if sort_chronologically:
        for day, bucket in buckets.items():
            buckets[day] = sorted(bucket, key=lambda rec: _instant(accessor(rec)))

    return buckets


def as_day_buckets(buckets: Mapping[date, list[Any]]) -> list[DayBucket]:
    """Convert a bucket mapping into an ordered list of DayBucket objects."""
    return [DayBucket(date=day, records=list(items)) for day, items in buckets.items()]


def upcoming_records(
    records: Iterable[RecordT],
    limit: int = DEFAULT_UPCOMING_LIMIT,
    after: date | datetime | None = None,
    timestamp_fn: TimestampFn | None = None,
) -> list[RecordT]:
    """Return the next `limit` records in ascending time order.

    Args:
        records: Candidate records
        limit: Maximum number of records returned
        after: When given, records before this instant (or before the start
            of this day, for a date) are excluded
        timestamp_fn: Accessor, defaults to `record_timestamp`

    Returns:
        Sorted, truncated list. Records without a timestamp are excluded.
    """
    accessor = timestamp_fn or record_timestamp
    threshold = _instant(after) if after is not None else None

    timed: list[tuple[datetime, RecordT]] = []
    for record in records:
        stamp = accessor(record)
        if stamp is None:
            continue
        instant = _instant(stamp)
        if threshold is not None and instant < threshold:
            continue
        timed.append((instant, record))

    timed.sort(key=lambda pair: pair[0])
    return [record for _, record in timed[: max(limit, 0)]]
