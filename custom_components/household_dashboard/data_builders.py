"""Record normalization helpers.

This module is the SINGLE SOURCE OF TRUTH for turning backend JSON into the
normalized records the engines consume:
- camelCase → snake_case field names
- timestamp strings → timezone-aware datetimes
- field defaults for optional values
- rejection of records whose required timestamp cannot be parsed

### Build Functions
Each record type has a `build_<record>()` function that takes one raw backend
dict and returns a complete TypedDict, or raises `RecordValidationError`.

### Collection Helpers
`extract_list()` accepts both response shapes the backend uses (a bare list,
or an object wrapping the list under a named key). `build_records()` applies a
build function to every element and skips the invalid ones, so one malformed
record never hides the rest of a list.

Consumers:
- coordinator.py (poll results)
- services.py (single-record responses)
- diagnostics.py (`to_json_safe`)

See Also:
- type_defs.py: TypedDict definitions for the normalized shapes
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, time
import logging
from typing import Any, TypeVar

from . import const
from .type_defs import (
    AppointmentData,
    BillData,
    CalendarEventData,
    ChoreData,
    FamilyMemberData,
    FamilyMemberStatusData,
    MealPlanData,
    MedicalRecordData,
    MedicationData,
    NextAppointmentData,
    PresenceData,
    QuickActionData,
    ShoppingItemData,
    SystemHealthData,
)
from .utils.dt_utils import dt_parse
from .utils.math_utils import to_number

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Accepted wall-clock formats for appointment times
_TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class RecordValidationError(Exception):
    """A backend record cannot be normalized.

    Attributes:
        field: Backend field that failed
        record_id: Record identifier, if the record had one
    """

    def __init__(self, field: str, record_id: Any = None) -> None:
        self.field = field
        self.record_id = record_id
        super().__init__(f"Invalid or missing '{field}' on record {record_id!r}")


# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _parse_optional_dt(value: Any) -> datetime | None:
    """Parse a timestamp field, returning None when absent or unparseable."""
    if value is None or value == "":
        return None
    result = dt_parse(value)
    return result if isinstance(result, datetime) else None


def _parse_required_dt(raw: Mapping[str, Any], key: str) -> datetime:
    """Parse a timestamp the record cannot exist without."""
    result = _parse_optional_dt(raw.get(key))
    if result is None:
        raise RecordValidationError(key, raw.get("id"))
    return result


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present and not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _normalize_list_field(value: Any) -> list[Any]:
    """Normalize a field that should be a list.

    A bare string becomes a one-element list instead of being split into
    characters.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value] if value else []
    return list(value)


def _record_id(raw: Mapping[str, Any]) -> str:
    value = raw.get("id")
    if value is None or value == "":
        raise RecordValidationError("id")
    return str(value)


def _combine_date_and_time(day: datetime, time_str: str | None) -> datetime:
    """Apply an "HH:MM" or "h:mm AM" wall-clock time to a parsed day."""
    if not time_str:
        return day
    for fmt in _TIME_FORMATS:
        try:
            parsed: time = datetime.strptime(time_str.strip(), fmt).time()
        except ValueError:
            continue
        return day.replace(hour=parsed.hour, minute=parsed.minute, second=0)
    _LOGGER.debug("Ignoring unparseable appointment time: %s", time_str)
    return day


# ==============================================================================
# COLLECTION HELPERS
# ==============================================================================


def extract_list(payload: Any, key: str) -> list[Any]:
    """Return the record list from a bare-list or wrapped-list response.

    Example:
        extract_list([{"id": 1}], "bills") → [{"id": 1}]
        extract_list({"bills": [{"id": 1}]}, "bills") → [{"id": 1}]
        extract_list({}, "bills") → []
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return []


def build_records(
    raw_records: list[Any], builder: Callable[[Mapping[str, Any]], T], label: str
) -> list[T]:
    """Apply `builder` to every raw record, skipping invalid ones.

    Args:
        raw_records: Raw dicts from the backend
        builder: One of the build_* functions
        label: Record kind for log messages

    Returns:
        Normalized records in backend order.
    """
    records: list[T] = []
    for raw in raw_records:
        if not isinstance(raw, Mapping):
            _LOGGER.debug("Skipping non-object %s record: %r", label, raw)
            continue
        try:
            records.append(builder(raw))
        except RecordValidationError as err:
            _LOGGER.debug("Skipping %s record: %s", label, err)
    return records


def to_json_safe(value: Any) -> Any:
    """Recursively convert datetimes to ISO strings for attributes/diagnostics."""
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_json_safe(item) for item in value]
    return value


# ==============================================================================
# BUILD FUNCTIONS
# ==============================================================================


def build_bill(raw: Mapping[str, Any]) -> BillData:
    """Normalize a bill. Requires `dueDate`."""
    return BillData(
        id=_record_id(raw),
        name=str(raw.get("name") or ""),
        amount=to_number(raw.get("amount")),
        due_date=_parse_required_dt(raw, "dueDate"),
        category=str(raw.get("category") or "other"),
        status=str(raw.get("status") or const.STATUS_PENDING).lower(),
        is_recurring=bool(raw.get("isRecurring", False)),
        autopay=bool(raw.get("autopay", False)),
        paid_at=_parse_optional_dt(raw.get("paidAt")),
    )


def build_chore(raw: Mapping[str, Any]) -> ChoreData:
    """Normalize a chore. The due date is optional for chores."""
    return ChoreData(
        id=_record_id(raw),
        name=str(_first_present(raw, "name", "title") or ""),
        assigned_to=str(raw.get("assignedTo") or ""),
        frequency=str(raw.get("frequency") or "daily"),
        status=str(raw.get("status") or const.STATUS_PENDING).lower(),
        due_date=_parse_optional_dt(raw.get("dueDate")),
        completed_at=_parse_optional_dt(raw.get("completedAt")),
        points=to_number(raw.get("points")),
    )


def build_family_member(raw: Mapping[str, Any]) -> FamilyMemberData:
    """Normalize a family member."""
    return FamilyMemberData(
        id=_record_id(raw),
        name=str(raw.get("name") or ""),
        nickname=_optional_str(raw.get("nickname")),
        role=str(raw.get("role") or ""),
        age=_optional_int(raw.get("age")),
        avatar=_optional_str(raw.get("avatar")),
        color=_optional_str(raw.get("color")),
    )


def build_family_status(raw: Mapping[str, Any]) -> FamilyMemberStatusData:
    """Normalize a family dashboard card (member, presence, counters)."""
    member_raw = raw.get("member")
    if not isinstance(member_raw, Mapping):
        raise RecordValidationError("member")

    presence: PresenceData | None = None
    presence_raw = raw.get("presence")
    if isinstance(presence_raw, Mapping):
        presence = PresenceData(
            is_home=bool(presence_raw.get("isHome", False)),
            last_seen=_parse_optional_dt(presence_raw.get("lastSeen")),
            current_zone=_optional_str(presence_raw.get("currentZone")),
        )

    next_appointment: NextAppointmentData | None = None
    appointment_raw = raw.get("nextAppointment")
    if isinstance(appointment_raw, Mapping):
        next_appointment = NextAppointmentData(
            purpose=str(appointment_raw.get("purpose") or ""),
            date_time=_parse_optional_dt(appointment_raw.get("dateTime")),
        )

    return FamilyMemberStatusData(
        member=build_family_member(member_raw),
        presence=presence,
        pending_chores=_optional_int(raw.get("pendingChores")) or 0,
        upcoming_events=_optional_int(raw.get("upcomingEvents")) or 0,
        next_appointment=next_appointment,
    )


def build_calendar_event(raw: Mapping[str, Any]) -> CalendarEventData:
    """Normalize a calendar event.

    The events endpoint uses `start`/`end`, the upcoming endpoint uses
    `startTime`/`endTime`; both are accepted. An end earlier than the start
    is dropped.
    """
    start = _parse_optional_dt(_first_present(raw, "start", "startTime"))
    if start is None:
        raise RecordValidationError("start", raw.get("id"))
    end = _parse_optional_dt(_first_present(raw, "end", "endTime"))
    if end is not None and end < start:
        _LOGGER.debug("Dropping end before start on event %s", raw.get("id"))
        end = None

    member_ids = _normalize_list_field(raw.get("familyMemberIds"))
    if not member_ids and raw.get("familyMember"):
        member_ids = [raw["familyMember"]]

    return CalendarEventData(
        id=_record_id(raw),
        title=str(raw.get("title") or ""),
        start=start,
        end=end,
        all_day=bool(raw.get("allDay", False)),
        location=_optional_str(raw.get("location")),
        description=_optional_str(raw.get("description")),
        type=str(raw.get("type") or "other"),
        family_member_ids=[str(member_id) for member_id in member_ids],
    )


def build_meal_plan(raw: Mapping[str, Any]) -> MealPlanData:
    """Normalize a planned meal. Requires `date`."""
    return MealPlanData(
        id=_record_id(raw),
        date=_parse_required_dt(raw, "date"),
        meal_type=str(raw.get("mealType") or "dinner").lower(),
        recipe=str(_first_present(raw, "recipe", "recipeName") or ""),
        servings=_optional_int(raw.get("servings")) or 0,
        prep_time=_optional_int(raw.get("prepTime")),
        cook_time=_optional_int(raw.get("cookTime")),
        ingredients=[str(item) for item in _normalize_list_field(raw.get("ingredients"))],
        notes=_optional_str(raw.get("notes")),
    )


def build_appointment(raw: Mapping[str, Any]) -> AppointmentData:
    """Normalize a medical appointment, folding `time` into `date`."""
    time_str = _optional_str(raw.get("time"))
    return AppointmentData(
        id=_record_id(raw),
        patient_name=str(raw.get("patientName") or ""),
        provider=str(raw.get("provider") or ""),
        specialty=_optional_str(raw.get("specialty")),
        date=_combine_date_and_time(_parse_required_dt(raw, "date"), time_str),
        time=time_str,
        location=_optional_str(raw.get("location")),
        type=str(raw.get("type") or "other"),
        status=str(raw.get("status") or const.STATUS_UPCOMING).lower(),
        notes=_optional_str(raw.get("notes")),
    )


def build_medication(raw: Mapping[str, Any]) -> MedicationData:
    """Normalize a medication."""
    return MedicationData(
        id=_record_id(raw),
        name=str(raw.get("name") or ""),
        dosage=str(raw.get("dosage") or ""),
        frequency=str(raw.get("frequency") or ""),
        taken_by=str(raw.get("takenBy") or ""),
        next_refill_date=_parse_optional_dt(raw.get("nextRefillDate")),
        prescriber=_optional_str(raw.get("prescriber")),
    )


def build_medical_record(raw: Mapping[str, Any]) -> MedicalRecordData:
    """Normalize a medical record. Requires `date`."""
    return MedicalRecordData(
        id=_record_id(raw),
        patient_name=str(raw.get("patientName") or ""),
        type=str(raw.get("type") or "note"),
        title=str(raw.get("title") or ""),
        date=_parse_required_dt(raw, "date"),
        provider=_optional_str(raw.get("provider")),
        status=_optional_str(raw.get("status")),
        summary=_optional_str(raw.get("summary")),
    )


def build_shopping_item(raw: Mapping[str, Any]) -> ShoppingItemData:
    """Normalize a shopping list item."""
    return ShoppingItemData(
        id=_record_id(raw),
        name=str(raw.get("name") or ""),
        quantity=to_number(raw.get("quantity"), default=1.0),
        unit=_optional_str(raw.get("unit")),
        category=str(raw.get("category") or const.DEFAULT_SHOPPING_CATEGORY).lower(),
        checked=bool(raw.get("checked", False)),
        added_by=_optional_str(raw.get("addedBy")),
        source=str(raw.get("source") or const.SHOPPING_SOURCE_MANUAL),
        priority=str(raw.get("priority") or "normal"),
    )


def build_quick_action(raw: Mapping[str, Any]) -> QuickActionData:
    """Normalize a quick action, mapping backend icon names to mdi icons."""
    icon = str(raw.get("icon") or "")
    if not icon.startswith("mdi:"):
        icon = const.QUICK_ACTION_ICON_MAP.get(icon, const.DEFAULT_QUICK_ACTION_ICON)
    return QuickActionData(
        id=_record_id(raw),
        name=str(raw.get("name") or raw.get("id")),
        icon=icon,
        category=str(raw.get("category") or ""),
    )


def build_system_health(raw: Any) -> SystemHealthData:
    """Normalize a health report; anything malformed reads as unhealthy."""
    if not isinstance(raw, Mapping):
        return SystemHealthData(status=const.HEALTH_UNHEALTHY, uptime=0, modules={})

    status = str(raw.get("status") or const.HEALTH_UNHEALTHY).lower()
    if status not in const.HEALTH_STATES:
        status = const.HEALTH_UNHEALTHY

    modules: dict[str, Any] = {}
    modules_raw = raw.get("modules")
    if isinstance(modules_raw, Mapping):
        for name, module in modules_raw.items():
            if isinstance(module, Mapping):
                modules[str(name)] = {
                    "status": str(module.get("status") or ""),
                    "message": str(module.get("message") or ""),
                }

    return SystemHealthData(
        status=status,
        uptime=to_number(raw.get("uptime")),
        modules=modules,
    )
