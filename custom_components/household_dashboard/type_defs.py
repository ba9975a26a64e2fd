"""Type definitions for Household Dashboard data structures.

HYBRID APPROACH (TypedDict + dict[str, Any])
============================================

1. **TypedDict for normalized records**: the shapes produced by
   `data_builders` from backend JSON. Keys are fixed and snake_case, and
   every timestamp is already a timezone-aware `datetime`.

2. **dict[str, Any] for view models**: the dictionaries assembled by
   `engines.dashboard_engine` for entity attributes vary by view and are
   serialized straight into Home Assistant state attributes.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports it. TypedDict is static analysis only; runtime checks live in
`data_builders`.
"""

from datetime import datetime
from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RecordId = str
MemberName = str
ViewModel = dict[str, Any]

BillCategory = Literal[
    "utilities", "housing", "insurance", "subscriptions", "medical", "other"
]
HealthState = Literal["healthy", "degraded", "unhealthy"]


# =============================================================================
# Household Records
# =============================================================================


class BillData(TypedDict):
    """A household bill."""

    id: RecordId
    name: str
    amount: float
    due_date: datetime
    category: str
    status: str
    is_recurring: bool
    autopay: bool
    paid_at: datetime | None


class ChoreData(TypedDict):
    """A chore assigned to one family member."""

    id: RecordId
    name: str
    assigned_to: str
    frequency: str
    status: str
    due_date: datetime | None
    completed_at: datetime | None
    points: float


class FamilyMemberData(TypedDict):
    """A household member."""

    id: RecordId
    name: str
    nickname: str | None
    role: str
    age: int | None
    avatar: str | None
    color: str | None


class PresenceData(TypedDict):
    """Presence snapshot for a family member."""

    is_home: bool
    last_seen: datetime | None
    current_zone: str | None


class NextAppointmentData(TypedDict):
    """Next appointment summary shown on a member card."""

    purpose: str
    date_time: datetime | None


class FamilyMemberStatusData(TypedDict):
    """Family dashboard card: member plus live counters."""

    member: FamilyMemberData
    presence: PresenceData | None
    pending_chores: int
    upcoming_events: int
    next_appointment: NextAppointmentData | None


class CalendarEventData(TypedDict):
    """A calendar event.

    `end` is never earlier than `start`; data_builders drops an inverted end.
    """

    id: RecordId
    title: str
    start: datetime
    end: datetime | None
    all_day: bool
    location: str | None
    description: str | None
    type: str
    family_member_ids: list[RecordId]


class MealPlanData(TypedDict):
    """One planned meal slot."""

    id: RecordId
    date: datetime
    meal_type: str
    recipe: str
    servings: int
    prep_time: int | None
    cook_time: int | None
    ingredients: list[str]
    notes: str | None


class AppointmentData(TypedDict):
    """A medical appointment. `date` includes the time of day when known."""

    id: RecordId
    patient_name: str
    provider: str
    specialty: str | None
    date: datetime
    time: str | None
    location: str | None
    type: str
    status: str
    notes: str | None


class MedicationData(TypedDict):
    """A medication with its next refill date."""

    id: RecordId
    name: str
    dosage: str
    frequency: str
    taken_by: str
    next_refill_date: datetime | None
    prescriber: str | None


class MedicalRecordData(TypedDict):
    """A medical record entry (lab result, imaging, note...)."""

    id: RecordId
    patient_name: str
    type: str
    title: str
    date: datetime
    provider: str | None
    status: str | None
    summary: str | None


class ShoppingItemData(TypedDict):
    """A shopping list item."""

    id: RecordId
    name: str
    quantity: float
    unit: str | None
    category: str
    checked: bool
    added_by: str | None
    source: str
    priority: str


class QuickActionData(TypedDict):
    """A quick action button."""

    id: RecordId
    name: str
    icon: str
    category: str


class HealthModuleData(TypedDict):
    status: str
    message: str


class SystemHealthData(TypedDict):
    """Backend health report."""

    status: str
    uptime: float
    modules: dict[str, HealthModuleData]


# =============================================================================
# Coordinator Snapshot
# =============================================================================


class HouseholdData(TypedDict):
    """Everything the main coordinator fetches in one poll."""

    bills: list[BillData]
    chores: list[ChoreData]
    family_members: list[FamilyMemberData]
    meal_plans: list[MealPlanData]
    appointments: list[AppointmentData]
    medications: list[MedicationData]
    medical_records: list[MedicalRecordData]
    shopping_items: list[ShoppingItemData]
    quick_actions: list[QuickActionData]
    meal_period: NotRequired[dict[str, str]]
    fetched_at: NotRequired[datetime]
