"""Dashboard Engine - per-view models for the household dashboard.

Composes the period, bucket, status and aggregation engines into the models
each view renders: bill summary cards, the chore board, the calendar week,
the meal grid, the medical overview, the shopping list and the family cards.

Every method takes `today` (or a reference date) explicitly and returns
plain dicts; nothing here reads the clock or touches Home Assistant.

⚠️ ENGINE PURITY: NO `homeassistant.*` imports allowed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from typing import Any, Final

from ..utils.dt_utils import dt_format_time, dt_relative_day_label, local_calendar_day
from ..utils.math_utils import round_amount
from .aggregation_engine import aggregate, group_records, order_by_priority
from .bucket_engine import bucket_by_day, upcoming_records
from .period_engine import PERIOD_WEEK, compute_period, navigate
from .status_engine import (
    DEFAULT_URGENCY_DAYS,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_OVERDUE,
    UPCOMING_HORIZON_DAYS,
    StatusResult,
    classify,
    countdown_label,
    is_due_within,
)

# =============================================================================
# DISPLAY ORDER CONSTANTS (mirror const.py values)
# =============================================================================

MEAL_TYPE_ORDER: Final = ("breakfast", "lunch", "dinner", "snack")
CHORE_COLUMNS: Final = ("overdue", "pending", "completed")
LAB_RESULT_TYPE: Final = "lab_result"
FLAGGED_RECORD_STATUSES: frozenset[str] = frozenset({"abnormal", "critical"})
APPOINTMENT_ACTIVE_STATUS: Final = "upcoming"
DEFAULT_MEDICAL_URGENCY_DAYS: Final = 2
INACTIVE_STATUSES: Final = (STATUS_COMPLETED, STATUS_CANCELLED)


def _annotate(record: Mapping[str, Any], result: StatusResult) -> dict[str, Any]:
    """Copy a record and attach its derived status fields."""
    annotated = dict(record)
    annotated["display_status"] = result.display_status
    annotated["days_until"] = result.days_until
    annotated["days_overdue"] = result.days_overdue
    annotated["urgent"] = result.urgent
    annotated["label"] = countdown_label(result)
    return annotated


def _sort_by(records: Iterable[Mapping[str, Any]], key: str, reverse: bool = False):
    return sorted(records, key=lambda record: record[key], reverse=reverse)


class DashboardEngine:
    """Pure view-model builders.

    All methods are static - no instance state. Inputs are the normalized
    records from `data_builders`.
    """

    # ────────────────────────────────────────────────────────────────
    # Bills
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def bills_view(
        bills: Iterable[Mapping[str, Any]],
        today: date,
        urgency_days: int = DEFAULT_URGENCY_DAYS,
        category: str | None = None,
        show_paid: bool = True,
        category_order: Sequence[str] = (),
    ) -> dict[str, Any]:
        """Summary cards and lists for the bills view.

        Args:
            bills: Normalized bills
            today: Local calendar day
            urgency_days: Threshold for the urgent flag
            category: Optional category filter
            show_paid: Include the paid list
            category_order: Display order for the per-category summary

        Returns:
            Dict with total_due, total_paid, overdue_count,
            due_within_week_count, overdue / upcoming / paid lists, and
            by_category summaries.

        Example:
            >>> view = DashboardEngine.bills_view(bills, today=date(2024, 3, 10))
            >>> view["total_due"], view["overdue_count"]
            (245.5, 1)
        """
        annotated = []
        due_within_week = 0
        for bill in bills:
            if category is not None and bill["category"] != category:
                continue
            result = classify(bill["status"], bill["due_date"], today, urgency_days)
            due_within_week += is_due_within(result)
            annotated.append(_annotate(bill, result))

        active = [b for b in annotated if b["display_status"] not in INACTIVE_STATUSES]
        overdue = [b for b in active if b["display_status"] == STATUS_OVERDUE]
        paid = [b for b in annotated if b["display_status"] == STATUS_COMPLETED]
        upcoming = _sort_by(
            (b for b in active if b["display_status"] != STATUS_OVERDUE),
            "due_date",
        )

        by_category = aggregate(
            annotated,
            key_fn=lambda b: b["category"],
            amount_fn=lambda b: 0.0 if b["display_status"] in INACTIVE_STATUSES else b["amount"],
            completed_fn=lambda b: b["display_status"] == STATUS_COMPLETED,
        )

        return {
            "total_due": round_amount(sum(b["amount"] for b in active)),
            "total_paid": round_amount(sum(b["amount"] for b in paid)),
            "overdue_count": len(overdue),
            "due_within_week_count": due_within_week,
            "overdue": _sort_by(overdue, "due_date"),
            "upcoming": upcoming,
            "paid": _sort_by(paid, "due_date", reverse=True) if show_paid else [],
            "by_category": {
                key: summary.as_dict()
                for key, summary in order_by_priority(by_category, category_order).items()
            },
        }

    # ────────────────────────────────────────────────────────────────
    # Chores
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def chore_column(
        chore: Mapping[str, Any], today: date, urgency_days: int = DEFAULT_URGENCY_DAYS
    ) -> tuple[str | None, StatusResult | None]:
        """Board column for a chore, plus its status when it has a due date.

        Chores without a due date fall back to their raw backend status.
        Cancelled chores have no column.
        """
        raw = chore["status"]
        due = chore.get("due_date")
        if due is None:
            if raw == STATUS_COMPLETED:
                return "completed", None
            if raw == STATUS_OVERDUE:
                return "overdue", None
            if raw == STATUS_CANCELLED:
                return None, None
            return "pending", None

        result = classify(raw, due, today, urgency_days)
        if result.status == STATUS_COMPLETED:
            return "completed", result
        if result.status == STATUS_CANCELLED:
            return None, result
        if result.status == STATUS_OVERDUE:
            return "overdue", result
        return "pending", result

    @staticmethod
    def member_chore_stats(chores: Iterable[Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
        """Per-assignee completed / total / points (points of completed only).

        Example:
            >>> DashboardEngine.member_chore_stats(chores)["Zoe"]
            {"completed": 1, "total": 2, "points": 5.0}
        """
        summary = aggregate(
            chores,
            key_fn=lambda c: c["assigned_to"],
            amount_fn=lambda c: c["points"] if c["status"] == STATUS_COMPLETED else 0.0,
            completed_fn=lambda c: c["status"] == STATUS_COMPLETED,
        )
        return {
            member: {
                "completed": group.completed_count or 0,
                "total": group.count,
                "points": group.total_amount or 0.0,
            }
            for member, group in summary.items()
        }

    @staticmethod
    def chores_view(
        chores: Iterable[Mapping[str, Any]],
        today: date,
        urgency_days: int = DEFAULT_URGENCY_DAYS,
        member: str | None = None,
        show_completed: bool = True,
    ) -> dict[str, Any]:
        """Chore board columns and member stats."""
        chore_list = list(chores)
        columns: dict[str, list[dict[str, Any]]] = {column: [] for column in CHORE_COLUMNS}

        for chore in chore_list:
            if member is not None and chore["assigned_to"] != member:
                continue
            column, result = DashboardEngine.chore_column(chore, today, urgency_days)
            if column is None or (column == "completed" and not show_completed):
                continue
            entry = _annotate(chore, result) if result is not None else dict(chore)
            columns[column].append(entry)

        return {
            "columns": columns,
            "pending_count": len(columns["overdue"]) + len(columns["pending"]),
            "overdue_count": len(columns["overdue"]),
            "member_stats": DashboardEngine.member_chore_stats(chore_list),
        }

    # ────────────────────────────────────────────────────────────────
    # Calendar
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def schedule_view(
        records: Iterable[Mapping[str, Any]],
        reference_date: date | datetime,
        today: date,
        kind: str = PERIOD_WEEK,
        direction: int = 0,
        upcoming_limit: int = 5,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Period grid plus upcoming list for time-stamped records.

        Args:
            records: Events (or any records with start/due_date/date)
            reference_date: Day the user navigated to
            today: Local calendar day, for the is_today flag and labels
            kind: day / week / month
            direction: Periods to move from the reference date
            upcoming_limit: Size of the upcoming list
            now: When given, the upcoming list excludes records before it

        Returns:
            Dict with period, days (date, label, is_today, records) and
            upcoming.
        """
        record_list = list(records)
        period = navigate(compute_period(reference_date, kind), direction)
        buckets = bucket_by_day(record_list, period.days, sort_chronologically=True)

        return {
            "period": period.as_dict(),
            "days": [
                {
                    "date": day.isoformat(),
                    "label": dt_relative_day_label(day, today),
                    "is_today": day == today,
                    "records": items,
                }
                for day, items in buckets.items()
            ],
            "upcoming": upcoming_records(record_list, limit=upcoming_limit, after=now),
        }

    @staticmethod
    def upcoming_events_view(
        events: Iterable[Mapping[str, Any]],
        today: date,
        limit: int = 5,
        now: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Sidebar list: next events with "Today"/"Tomorrow" labels and times."""
        result = []
        for event in upcoming_records(events, limit=limit, after=now):
            entry = dict(event)
            entry["day_label"] = dt_relative_day_label(event["start"], today)
            entry["time_label"] = "All day" if event.get("all_day") else dt_format_time(
                event["start"]
            )
            result.append(entry)
        return result

    # ────────────────────────────────────────────────────────────────
    # Meals
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def meal_week_view(
        plans: Iterable[Mapping[str, Any]],
        reference_date: date | datetime,
        today: date,
        direction: int = 0,
    ) -> dict[str, Any]:
        """Week grid with one slot per meal type; empty slots are None."""
        period = navigate(compute_period(reference_date, PERIOD_WEEK), direction)
        plan_list = list(plans)
        buckets = bucket_by_day(plan_list, period.days)

        days = []
        planned = 0
        for day, items in buckets.items():
            slots: dict[str, Any] = {meal_type: None for meal_type in MEAL_TYPE_ORDER}
            for plan in items:
                if slots.get(plan["meal_type"]) is None:
                    slots[plan["meal_type"]] = plan
            planned += sum(1 for slot in slots.values() if slot is not None)
            days.append(
                {
                    "date": day.isoformat(),
                    "label": dt_relative_day_label(day, today),
                    "is_today": day == today,
                    "meals": slots,
                }
            )

        return {
            "period": period.as_dict(),
            "days": days,
            "planned_count": planned,
            "slot_count": len(days) * len(MEAL_TYPE_ORDER),
            "today": DashboardEngine.meals_for_day(plan_list, today),
        }

    @staticmethod
    def meals_for_day(plans: Iterable[Mapping[str, Any]], day: date) -> list[Mapping[str, Any]]:
        """Meals planned on a day, breakfast first."""

        def order(plan: Mapping[str, Any]) -> int:
            meal_type = plan["meal_type"]
            if meal_type in MEAL_TYPE_ORDER:
                return MEAL_TYPE_ORDER.index(meal_type)
            return len(MEAL_TYPE_ORDER)

        meals = [plan for plan in plans if local_calendar_day(plan["date"]) == day]
        return sorted(meals, key=order)

    # ────────────────────────────────────────────────────────────────
    # Medical
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def medical_view(
        appointments: Iterable[Mapping[str, Any]],
        medications: Iterable[Mapping[str, Any]],
        records: Iterable[Mapping[str, Any]],
        today: date,
        urgency_days: int = DEFAULT_MEDICAL_URGENCY_DAYS,
        member: str | None = None,
        refill_horizon_days: int = UPCOMING_HORIZON_DAYS,
    ) -> dict[str, Any]:
        """Upcoming appointments, refills due and recent records.

        Args:
            appointments: Normalized appointments
            medications: Normalized medications
            records: Normalized medical records
            today: Local calendar day
            urgency_days: Threshold for the urgent flag on appointments
            member: Optional patient filter (patient_name / taken_by)
            refill_horizon_days: Refill needed when due within this many days
        """

        def matches(name: str) -> bool:
            return member is None or name == member

        upcoming = _sort_by(
            (
                _annotate(
                    appt,
                    classify(appt["status"], appt["date"], today, urgency_days),
                )
                for appt in appointments
                if matches(appt["patient_name"])
                and appt["status"] == APPOINTMENT_ACTIVE_STATUS
            ),
            "date",
        )

        refills = []
        for med in medications:
            refill = med.get("next_refill_date")
            if refill is None or not matches(med["taken_by"]):
                continue
            result = classify(None, refill, today, urgency_days)
            if result.days_until <= refill_horizon_days:
                refills.append(_annotate(med, result))
        refills = _sort_by(refills, "next_refill_date")

        member_records = _sort_by(
            (rec for rec in records if matches(rec["patient_name"])), "date", reverse=True
        )

        return {
            "upcoming_appointments": upcoming,
            "urgent_appointment_count": sum(1 for appt in upcoming if appt["urgent"]),
            "refills_needed": refills,
            "records": member_records,
            "lab_result_count": sum(1 for rec in member_records if rec["type"] == LAB_RESULT_TYPE),
            "flagged_record_count": sum(
                1 for rec in member_records if rec.get("status") in FLAGGED_RECORD_STATUSES
            ),
        }

    # ────────────────────────────────────────────────────────────────
    # Shopping
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def shopping_view(
        items: Iterable[Mapping[str, Any]],
        category_order: Sequence[str] = (),
        show_checked: bool = True,
    ) -> dict[str, Any]:
        """Shopping list grouped by category in store-aisle order."""
        item_list = list(items)
        visible = [item for item in item_list if show_checked or not item["checked"]]
        groups = order_by_priority(
            group_records(visible, lambda item: item["category"]), category_order
        )
        summary = aggregate(
            item_list,
            key_fn=lambda item: item["category"],
            completed_fn=lambda item: item["checked"],
        )
        checked_count = sum(1 for item in item_list if item["checked"])

        return {
            "groups": groups,
            "categories": {
                key: {
                    "count": group.count,
                    "checked": group.completed_count or 0,
                }
                for key, group in order_by_priority(summary, category_order).items()
            },
            "unchecked_count": len(item_list) - checked_count,
            "checked_count": checked_count,
        }

    # ────────────────────────────────────────────────────────────────
    # Family
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def family_view(statuses: Iterable[Mapping[str, Any]], today: date) -> dict[str, Any]:
        """Family cards: presence, pending work and next appointment label."""
        members = []
        home = 0
        for status in statuses:
            presence = status.get("presence") or {}
            is_home = bool(presence.get("is_home", False))
            home += is_home
            member = status["member"]
            next_appt = status.get("next_appointment")
            next_label = None
            if next_appt and next_appt.get("date_time") is not None:
                when = next_appt["date_time"]
                next_label = (
                    f"{next_appt['purpose']} · {dt_relative_day_label(when, today)} "
                    f"{dt_format_time(when)}"
                )
            members.append(
                {
                    "id": member["id"],
                    "name": member.get("nickname") or member["name"],
                    "role": member["role"],
                    "is_home": is_home,
                    "current_zone": presence.get("current_zone"),
                    "last_seen": presence.get("last_seen"),
                    "pending_chores": status.get("pending_chores", 0),
                    "upcoming_events": status.get("upcoming_events", 0),
                    "next_appointment": next_label,
                }
            )
        return {"members": members, "home_count": home, "member_count": len(members)}

    # ────────────────────────────────────────────────────────────────
    # Household summary
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def household_summary(
        data: Mapping[str, Any],
        today: date,
        bill_urgency_days: int = DEFAULT_URGENCY_DAYS,
        chore_urgency_days: int = DEFAULT_URGENCY_DAYS,
        medical_urgency_days: int = DEFAULT_MEDICAL_URGENCY_DAYS,
    ) -> dict[str, Any]:
        """Headline counters across every view, for the overview card."""
        bills = DashboardEngine.bills_view(data.get("bills", []), today, bill_urgency_days)
        chores = DashboardEngine.chores_view(data.get("chores", []), today, chore_urgency_days)
        medical = DashboardEngine.medical_view(
            data.get("appointments", []),
            data.get("medications", []),
            data.get("medical_records", []),
            today,
            medical_urgency_days,
        )
        shopping = DashboardEngine.shopping_view(data.get("shopping_items", []))
        meals_today = DashboardEngine.meals_for_day(data.get("meal_plans", []), today)

        return {
            "bills_total_due": bills["total_due"],
            "bills_overdue": bills["overdue_count"],
            "bills_due_within_week": bills["due_within_week_count"],
            "chores_pending": chores["pending_count"],
            "chores_overdue": chores["overdue_count"],
            "appointments_upcoming": len(medical["upcoming_appointments"]),
            "refills_needed": len(medical["refills_needed"]),
            "shopping_unchecked": shopping["unchecked_count"],
            "meals_today": len(meals_today),
        }
