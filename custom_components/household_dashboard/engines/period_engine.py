"""Period Engine - calendar week, day and month boundaries.

Every dashboard view that shows "this week" (calendar, meal plan) or lets the
user page backwards and forwards derives its visible range here.

Design Principles:
    - Stateless: operates on the reference date passed in
    - Calendar arithmetic only: periods are ranges of local calendar days,
      never fixed-length spans of seconds, so DST transitions cannot shift a
      boundary
    - Week starts on Sunday

⚠️ ENGINE PURITY: NO `homeassistant.*` imports allowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Final

from dateutil.relativedelta import relativedelta

from ..utils.dt_utils import local_calendar_day, start_of_local_day

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

PERIOD_DAY: Final = "day"
PERIOD_WEEK: Final = "week"
PERIOD_MONTH: Final = "month"
PERIOD_KINDS: Final = (PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH)

DAYS_PER_WEEK: Final = 7

# date.weekday(): Monday=0 ... Sunday=6
_SUNDAY_WEEKDAY: Final = 6


@dataclass(frozen=True, slots=True)
class Period:
    """A contiguous range of calendar days.

    `end` is exclusive for week and month periods. A day period has
    `start == end` and still contains exactly one day.

    The reference date is carried for navigation but excluded from equality:
    two week periods containing the same seven days are the same period no
    matter which day inside them was used to compute them.
    """

    reference_date: date = field(compare=False)
    kind: str
    start: date
    end: date

    @property
    def days(self) -> list[date]:
        """Ordered calendar days covered by the period."""
        if self.kind == PERIOD_DAY:
            return [self.start]
        count = (self.end - self.start).days
        return [self.start + timedelta(days=offset) for offset in range(count)]

    @property
    def last_day(self) -> date:
        """Last calendar day included in the period."""
        return self.days[-1]

    def contains(self, day: date) -> bool:
        """Return True when the calendar day falls inside the period."""
        return self.start <= day <= self.last_day

    def window(self, tz: ZoneInfo | None = None) -> tuple[datetime, datetime]:
        """Return the half-open [start, end) instant range for backend fetches.

        Args:
            tz: Optional timezone override. Uses the configured default if None.

        Returns:
            Tuple of timezone-aware datetimes at local midnight.
        """
        return (
            start_of_local_day(self.start, tz),
            start_of_local_day(self.last_day + timedelta(days=1), tz),
        )

    def as_dict(self) -> dict[str, str]:
        """Serialize for service responses and entity attributes."""
        return {
            "kind": self.kind,
            "reference_date": self.reference_date.isoformat(),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


def start_of_week(day: date) -> date:
    """Return the most recent Sunday on or before `day`.

    Example:
        start_of_week(date(2024, 3, 13)) → date(2024, 3, 10)   # Wed → Sun
        start_of_week(date(2024, 3, 10)) → date(2024, 3, 10)   # Sunday itself
    """
    offset = (day.weekday() - _SUNDAY_WEEKDAY) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def compute_period(reference_date: date | datetime, kind: str = PERIOD_WEEK) -> Period:
    """Compute the period of the given kind containing the reference date.

    Args:
        reference_date: Any date, or a timestamp which is first reduced to its
            local calendar day.
        kind: One of PERIOD_DAY, PERIOD_WEEK, PERIOD_MONTH.

    Returns:
        The containing Period.

    Raises:
        ValueError: If `kind` is not a known period kind.

    Example:
        >>> compute_period(date(2024, 3, 13), PERIOD_WEEK)
        Period(reference_date=date(2024, 3, 13), kind='week',
               start=date(2024, 3, 10), end=date(2024, 3, 17))
    """
    ref = local_calendar_day(reference_date)

    if kind == PERIOD_DAY:
        return Period(reference_date=ref, kind=kind, start=ref, end=ref)

    if kind == PERIOD_WEEK:
        start = start_of_week(ref)
        return Period(
            reference_date=ref,
            kind=kind,
            start=start,
            end=start + timedelta(days=DAYS_PER_WEEK),
        )

    if kind == PERIOD_MONTH:
        start = ref.replace(day=1)
        return Period(
            reference_date=ref,
            kind=kind,
            start=start,
            end=start + relativedelta(months=1),
        )

    raise ValueError(f"Unknown period kind: {kind}")


def navigate(period: Period, direction: int) -> Period:
    """Step a period forwards (+1) or backwards (-1).

    Day and week periods shift their reference date by one period length in
    days. Month periods shift by calendar months, so stepping from a 31st
    clamps into the shorter month instead of skipping it.

    Args:
        period: The period currently displayed
        direction: Signed number of periods to move (usually +1 or -1)

    Returns:
        The adjacent Period. navigate(navigate(p, +1), -1) == p.
    """
    if direction == 0:
        return period

    if period.kind == PERIOD_MONTH:
        reference = period.reference_date + relativedelta(months=direction)
    else:
        step = 1 if period.kind == PERIOD_DAY else DAYS_PER_WEEK
        reference = period.reference_date + timedelta(days=direction * step)

    return compute_period(reference, period.kind)
