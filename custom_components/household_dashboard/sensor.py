# File: sensor.py
"""Sensors for the Household Dashboard integration.

Sensors Defined in This File (10):

# Household Snapshot Sensors (7)
01. BillsDueSensor
02. BillsOverdueSensor
03. ChoresPendingSensor
04. MemberChoresSensor (one per family member / chore assignee)
05. ShoppingListSensor
06. UpcomingAppointmentsSensor
07. MealsTodaySensor

# Fast-Polling Sensors (3)
08. UpcomingEventsSensor
09. SystemHealthSensor
10. MembersHomeSensor
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import (
    FamilyStatusCoordinator,
    HouseholdDataCoordinator,
    SystemHealthCoordinator,
    UpcomingEventsCoordinator,
)
from .data_builders import to_json_safe
from .entity import HouseholdCoordinatorEntity, household_device_info
from .utils.math_utils import seconds_to_hours

# Coordinator-based entities that don't poll
PARALLEL_UPDATES = 0


def _member_names(coordinator: HouseholdDataCoordinator) -> list[str]:
    """Family member names plus any chore assignee not in the member list."""
    names: list[str] = []
    data = coordinator.data or {}
    for member in data.get(const.DATA_FAMILY_MEMBERS, []):
        if member[const.FIELD_NAME] and member[const.FIELD_NAME] not in names:
            names.append(member[const.FIELD_NAME])
    for chore in data.get(const.DATA_CHORES, []):
        assignee = chore[const.FIELD_ASSIGNED_TO]
        if assignee and assignee not in names:
            names.append(assignee)
    return names


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for Household Dashboard integration."""
    entry_data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: HouseholdDataCoordinator = entry_data[const.COORDINATOR]

    entities: list[SensorEntity] = [
        BillsDueSensor(coordinator, entry),
        BillsOverdueSensor(coordinator, entry),
        ChoresPendingSensor(coordinator, entry),
        ShoppingListSensor(coordinator, entry),
        UpcomingAppointmentsSensor(coordinator, entry),
        MealsTodaySensor(coordinator, entry),
        UpcomingEventsSensor(entry_data[const.COORDINATOR_UPCOMING], entry),
        SystemHealthSensor(entry_data[const.COORDINATOR_HEALTH], entry),
        MembersHomeSensor(entry_data[const.COORDINATOR_FAMILY], entry),
    ]
    entities.extend(
        MemberChoresSensor(coordinator, entry, name) for name in _member_names(coordinator)
    )

    async_add_entities(entities)


# ------------------------------------------------------------------------------------------
class BillsDueSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Total amount of unpaid bills.

    Attributes carry the summary card counts, per-category totals and the
    overdue / upcoming lists with their derived status and countdown label.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_BILLS_DUE
    _attr_device_class = SensorDeviceClass.MONETARY
    _attr_icon = "mdi:cash-clock"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_BILLS_DUE}"

    @property
    def native_unit_of_measurement(self) -> str:
        return self.hass.config.currency if self.hass else "USD"

    @property
    def native_value(self) -> float:
        return self.coordinator.bills_view()["total_due"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.bills_view()
        return to_json_safe(
            {
                const.ATTR_TOTAL_PAID: view["total_paid"],
                const.ATTR_OVERDUE_COUNT: view["overdue_count"],
                const.ATTR_DUE_WITHIN_WEEK: view["due_within_week_count"],
                const.ATTR_BY_CATEGORY: view["by_category"],
                const.ATTR_UPCOMING: view["upcoming"],
            }
        )


# ------------------------------------------------------------------------------------------
class BillsOverdueSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Number of bills past their due date and not paid."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_BILLS_OVERDUE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:alert-circle-outline"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_BILLS_OVERDUE}"

    @property
    def native_value(self) -> int:
        return self.coordinator.bills_view()["overdue_count"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return to_json_safe({const.ATTR_BILLS: self.coordinator.bills_view()["overdue"]})


# ------------------------------------------------------------------------------------------
class ChoresPendingSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Chores still to do (overdue + pending), with the board columns."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_CHORES_PENDING
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:broom"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_CHORES_PENDING}"

    @property
    def native_value(self) -> int:
        return self.coordinator.chores_view()["pending_count"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.chores_view()
        return to_json_safe(
            {
                const.ATTR_OVERDUE_COUNT: view["overdue_count"],
                const.ATTR_COLUMNS: view["columns"],
            }
        )


# ------------------------------------------------------------------------------------------
class MemberChoresSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Completed chores for one family member, with total and points."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_MEMBER_CHORES
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:account-check"

    def __init__(
        self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry, member_name: str
    ) -> None:
        super().__init__(coordinator, entry)
        self._member_name = member_name
        slug = member_name.lower().replace(" ", "_")
        self._attr_unique_id = (
            f"{entry.entry_id}_{slug}_{const.TRANS_KEY_SENSOR_MEMBER_CHORES}"
        )
        self._attr_translation_placeholders = {"member_name": member_name}

    def _stats(self) -> dict[str, Any]:
        stats = self.coordinator.chores_view()["member_stats"]
        return stats.get(self._member_name, {"completed": 0, "total": 0, "points": 0.0})

    @property
    def native_value(self) -> int:
        return self._stats()["completed"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        stats = self._stats()
        return {
            "member_name": self._member_name,
            const.ATTR_COMPLETED: stats["completed"],
            const.ATTR_TOTAL: stats["total"],
            const.ATTR_POINTS: stats["points"],
        }


# ------------------------------------------------------------------------------------------
class ShoppingListSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Unchecked shopping list items, grouped by category in aisle order."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_SHOPPING_LIST
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:cart-outline"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_SHOPPING_LIST}"

    @property
    def native_value(self) -> int:
        return self.coordinator.shopping_view()["unchecked_count"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.shopping_view()
        return to_json_safe(
            {
                const.ATTR_CHECKED_COUNT: view["checked_count"],
                const.ATTR_CATEGORIES: view["categories"],
                "groups": {
                    category: [
                        {
                            const.FIELD_ID: item[const.FIELD_ID],
                            const.FIELD_NAME: item[const.FIELD_NAME],
                            const.FIELD_QUANTITY: item[const.FIELD_QUANTITY],
                            const.FIELD_CHECKED: item[const.FIELD_CHECKED],
                        }
                        for item in items
                    ]
                    for category, items in view["groups"].items()
                },
            }
        )


# ------------------------------------------------------------------------------------------
class UpcomingAppointmentsSensor(HouseholdCoordinatorEntity, SensorEntity):
    """Upcoming medical appointments, plus refills due and lab results."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_APPOINTMENTS
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:stethoscope"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_APPOINTMENTS}"

    @property
    def native_value(self) -> int:
        return len(self.coordinator.medical_view()["upcoming_appointments"])

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.medical_view()
        return to_json_safe(
            {
                const.ATTR_APPOINTMENTS: view["upcoming_appointments"],
                const.ATTR_REFILLS_NEEDED: view["refills_needed"],
                const.ATTR_LAB_RESULTS: view["lab_result_count"],
                "flagged_records": view["flagged_record_count"],
            }
        )


# ------------------------------------------------------------------------------------------
class MealsTodaySensor(HouseholdCoordinatorEntity, SensorEntity):
    """Meals planned for today; attributes list them breakfast first."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_MEALS_TODAY
    _attr_icon = "mdi:silverware-variant"

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_MEALS_TODAY}"

    @property
    def native_value(self) -> int:
        return len(self.coordinator.meal_week_view()["today"])

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.meal_week_view()
        return to_json_safe(
            {
                const.ATTR_MEALS: {
                    meal[const.FIELD_MEAL_TYPE]: meal[const.FIELD_RECIPE]
                    for meal in view["today"]
                },
                "planned_this_week": view["planned_count"],
                "slots_this_week": view["slot_count"],
            }
        )


# ------------------------------------------------------------------------------------------
class UpcomingEventsSensor(CoordinatorEntity[UpcomingEventsCoordinator], SensorEntity):
    """Title of the next calendar event; attributes list the next few."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_UPCOMING_EVENTS
    _attr_icon = "mdi:calendar-clock"

    def __init__(self, coordinator: UpcomingEventsCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_UPCOMING_EVENTS}"
        self._attr_device_info = household_device_info(entry)

    @property
    def native_value(self) -> str | None:
        events = self.coordinator.upcoming_view()
        return events[0][const.FIELD_TITLE] if events else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return to_json_safe({const.ATTR_EVENTS: self.coordinator.upcoming_view()})


# ------------------------------------------------------------------------------------------
class SystemHealthSensor(CoordinatorEntity[SystemHealthCoordinator], SensorEntity):
    """Backend health: healthy / degraded / unhealthy."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_SYSTEM_HEALTH
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = const.HEALTH_STATES
    _attr_icon = "mdi:heart-pulse"

    def __init__(self, coordinator: SystemHealthCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_SYSTEM_HEALTH}"
        self._attr_device_info = household_device_info(entry)

    @property
    def native_value(self) -> str:
        data = self.coordinator.data or const.HEALTH_FALLBACK
        return data[const.FIELD_STATUS]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        data = self.coordinator.data or const.HEALTH_FALLBACK
        return {
            const.ATTR_UPTIME_HOURS: seconds_to_hours(data[const.FIELD_UPTIME]),
            const.ATTR_MODULES: dict(data[const.FIELD_MODULES]),
        }


# ------------------------------------------------------------------------------------------
class MembersHomeSensor(CoordinatorEntity[FamilyStatusCoordinator], SensorEntity):
    """Family members currently home, with each member's card."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_MEMBERS_HOME
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:home-account"

    def __init__(self, coordinator: FamilyStatusCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_SENSOR_MEMBERS_HOME}"
        self._attr_device_info = household_device_info(entry)

    @property
    def native_value(self) -> int:
        return self.coordinator.family_view()["home_count"]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.family_view()
        return to_json_safe(
            {
                const.ATTR_MEMBERS: view["members"],
                const.ATTR_TOTAL: view["member_count"],
            }
        )
