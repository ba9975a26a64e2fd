"""Status Engine - derive display status from a due date and a raw status.

Bills, chores and medical appointments all reach the dashboard with a raw
backend status (pending, paid, completed, cancelled, overdue...) and a due
date. The badge shown to the user is recomputed here on every poll, so a
bill the backend still calls "pending" shows as overdue the day after its due
date, and one it already marked "overdue" is re-derived from the date.

⚠️ ENGINE PURITY: NO `homeassistant.*` imports allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Final

from ..utils.dt_utils import days_between, local_calendar_day

# =============================================================================
# DISPLAY STATUSES
# =============================================================================

STATUS_OVERDUE: Final = "overdue"
STATUS_URGENT: Final = "urgent"
STATUS_DUE_TODAY: Final = "dueToday"
STATUS_DUE_TOMORROW: Final = "dueTomorrow"
STATUS_UPCOMING: Final = "upcoming"
STATUS_COMPLETED: Final = "completed"
STATUS_CANCELLED: Final = "cancelled"

DISPLAY_STATUSES: Final = (
    STATUS_OVERDUE,
    STATUS_URGENT,
    STATUS_DUE_TODAY,
    STATUS_DUE_TOMORROW,
    STATUS_UPCOMING,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
)

# Raw backend statuses that mean "done" regardless of the due date
RAW_DONE_STATUSES: frozenset[str] = frozenset({"completed", "paid"})
RAW_CANCELLED: Final = "cancelled"

DEFAULT_URGENCY_DAYS: Final = 3
UPCOMING_HORIZON_DAYS: Final = 7


# =============================================================================
# RESULT DATA STRUCTURE
# =============================================================================


@dataclass(frozen=True, slots=True)
class StatusResult:
    """Outcome of classifying one item.

    Attributes:
        status: One of DISPLAY_STATUSES (never STATUS_URGENT, see display_status)
        days_until: Signed calendar days from today to the due date
        days_overdue: Positive magnitude when overdue, else 0
        urgent: Active item due within the urgency threshold
    """

    status: str
    days_until: int
    days_overdue: int = 0
    urgent: bool = False

    @property
    def is_active(self) -> bool:
        """Item still needs action (not completed or cancelled)."""
        return self.status not in (STATUS_COMPLETED, STATUS_CANCELLED)

    @property
    def display_status(self) -> str:
        """Single status string with urgency folded in.

        An urgent item that would otherwise read "upcoming" renders as
        "urgent". Overdue, today and tomorrow keep their own badge.
        """
        if self.urgent and self.status == STATUS_UPCOMING:
            return STATUS_URGENT
        return self.status

    def as_dict(self) -> dict[str, str | int | bool]:
        return {
            "status": self.display_status,
            "days_until": self.days_until,
            "days_overdue": self.days_overdue,
            "urgent": self.urgent,
        }


# =============================================================================
# CLASSIFICATION
# =============================================================================


def classify(
    raw: str | None,
    due: date | datetime,
    today: date,
    urgency_days: int = DEFAULT_URGENCY_DAYS,
) -> StatusResult:
    """Classify an item relative to today.

    Time of day is ignored on both sides: an item due at 00:00 or 23:59 today
    is "dueToday" at any moment of today.

    Args:
        raw: Backend status string (case-insensitive), may be None
        due: Due date or timestamp
        today: Local calendar day to classify against
        urgency_days: Active items with days_until <= this are urgent; never
            more than UPCOMING_HORIZON_DAYS

    Returns:
        StatusResult. Never raises.

    Examples:
        classify("pending", date(2024, 3, 10), today=date(2024, 3, 10))
            → StatusResult(status="dueToday", days_until=0, urgent=True)
        classify("pending", date(2024, 3, 5), today=date(2024, 3, 10))
            → StatusResult(status="overdue", days_until=-5, days_overdue=5)
        classify("paid", date(2024, 3, 5), today=date(2024, 3, 10))
            → StatusResult(status="completed", days_until=-5)
    """
    days_until = days_between(today, local_calendar_day(due))
    normalized = (raw or "").strip().lower()

    if normalized in RAW_DONE_STATUSES:
        return StatusResult(status=STATUS_COMPLETED, days_until=days_until)
    if normalized == RAW_CANCELLED:
        return StatusResult(status=STATUS_CANCELLED, days_until=days_until)

    if days_until < 0:
        return StatusResult(
            status=STATUS_OVERDUE,
            days_until=days_until,
            days_overdue=-days_until,
        )

    if days_until == 0:
        status = STATUS_DUE_TODAY
    elif days_until == 1:
        status = STATUS_DUE_TOMORROW
    else:
        status = STATUS_UPCOMING

    return StatusResult(
        status=status,
        days_until=days_until,
        urgent=days_until <= min(urgency_days, UPCOMING_HORIZON_DAYS),
    )


def countdown_label(result: StatusResult) -> str:
    """Human label for the time remaining on an item.

    Examples:
        dueToday → "(Today!)"
        dueTomorrow → "(Tomorrow)"
        upcoming, 5 days → "(5 days)"
        upcoming, 12 days → ""
        overdue, 2 days → "Overdue by 2 days"
        completed / cancelled → ""
    """
    if not result.is_active:
        return ""
    if result.status == STATUS_OVERDUE:
        unit = "day" if result.days_overdue == 1 else "days"
        return f"Overdue by {result.days_overdue} {unit}"
    if result.days_until == 0:
        return "(Today!)"
    if result.days_until == 1:
        return "(Tomorrow)"
    if result.days_until <= UPCOMING_HORIZON_DAYS:
        return f"({result.days_until} days)"
    return ""


def is_due_within(result: StatusResult, horizon_days: int = UPCOMING_HORIZON_DAYS) -> bool:
    """Active and due between today and `horizon_days` from now, inclusive."""
    return result.is_active and 0 <= result.days_until <= horizon_days
