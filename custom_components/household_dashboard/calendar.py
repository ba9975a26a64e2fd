# pyright: reportIncompatibleVariableOverride=false
"""Calendar platform for Household Dashboard integration.

Provides two read-only calendars:
- Household events: fetched from the backend for each requested window
- Meal plan: the current week's planned meals from the household snapshot
"""

from __future__ import annotations

import datetime

from homeassistant.components.calendar import CalendarEntity, CalendarEvent
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from . import data_builders as db
from .api import HouseholdApiClient
from .coordinator import HouseholdDataCoordinator, UpcomingEventsCoordinator
from .engines import upcoming_records
from .entity import HouseholdCoordinatorEntity, household_device_info
from .type_defs import CalendarEventData, MealPlanData
from .utils.dt_utils import as_local, dt_now_local, local_calendar_day

PARALLEL_UPDATES = 0

DEFAULT_EVENT_DURATION = datetime.timedelta(hours=1)
DEFAULT_MEAL_DURATION = datetime.timedelta(hours=1)

# Local start time per meal slot
MEAL_START_TIMES = {
    "breakfast": datetime.time(8, 0),
    "lunch": datetime.time(12, 0),
    "dinner": datetime.time(18, 0),
    "snack": datetime.time(15, 0),
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up the Household Dashboard calendar platform."""
    entry_data = hass.data[const.DOMAIN][entry.entry_id]
    async_add_entities(
        [
            HouseholdEventsCalendar(
                entry_data[const.COORDINATOR_UPCOMING], entry, entry_data[const.API_CLIENT]
            ),
            MealPlanCalendar(entry_data[const.COORDINATOR], entry),
        ]
    )


def event_to_calendar_event(event: CalendarEventData) -> CalendarEvent:
    """Convert a normalized event to a Home Assistant CalendarEvent.

    All-day events use date boundaries with an exclusive end day. Timed
    events without an end last one hour.
    """
    start = event[const.FIELD_START]
    end = event[const.FIELD_END]
    if event[const.FIELD_ALL_DAY]:
        first_day = local_calendar_day(start)
        last_day = local_calendar_day(end) if end is not None else first_day
        return CalendarEvent(
            summary=event[const.FIELD_TITLE],
            start=first_day,
            end=max(last_day, first_day) + datetime.timedelta(days=1),
            location=event[const.FIELD_LOCATION],
            description=event[const.FIELD_DESCRIPTION],
            uid=event[const.FIELD_ID],
        )
    return CalendarEvent(
        summary=event[const.FIELD_TITLE],
        start=as_local(start),
        end=as_local(end if end is not None else start + DEFAULT_EVENT_DURATION),
        location=event[const.FIELD_LOCATION],
        description=event[const.FIELD_DESCRIPTION],
        uid=event[const.FIELD_ID],
    )


def meal_to_calendar_event(meal: MealPlanData) -> CalendarEvent:
    """Convert a planned meal to a CalendarEvent at its slot's usual time."""
    day = local_calendar_day(meal[const.FIELD_DATE])
    slot_time = MEAL_START_TIMES.get(meal[const.FIELD_MEAL_TYPE], datetime.time(18, 0))
    start = as_local(datetime.datetime.combine(day, slot_time))
    details = [f"Servings: {meal[const.FIELD_SERVINGS]}"]
    if meal[const.FIELD_INGREDIENTS]:
        details.append("Ingredients: " + ", ".join(meal[const.FIELD_INGREDIENTS]))
    if meal[const.FIELD_NOTES]:
        details.append(meal[const.FIELD_NOTES])
    return CalendarEvent(
        summary=f"{meal[const.FIELD_MEAL_TYPE].title()}: {meal[const.FIELD_RECIPE]}",
        start=start,
        end=start + DEFAULT_MEAL_DURATION,
        description="\n".join(details),
        uid=meal[const.FIELD_ID],
    )


def _overlaps(event: CalendarEvent, start: datetime.datetime, end: datetime.datetime) -> bool:
    return event.start_datetime_local < end and event.end_datetime_local > start


# ------------------------------------------------------------------------------------------
class HouseholdEventsCalendar(CoordinatorEntity[UpcomingEventsCoordinator], CalendarEntity):
    """Household calendar events.

    The current/next event comes from the upcoming-events poll; ranges
    requested by the calendar panel are fetched from the backend directly.
    """

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_CALENDAR_EVENTS

    def __init__(
        self,
        coordinator: UpcomingEventsCoordinator,
        entry: ConfigEntry,
        api: HouseholdApiClient,
    ) -> None:
        super().__init__(coordinator)
        self._api = api
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_CALENDAR_EVENTS}"
        self._attr_device_info = household_device_info(entry)

    @property
    def event(self) -> CalendarEvent | None:
        """The event in progress, or the next one."""
        now = dt_now_local()
        converted = [event_to_calendar_event(e) for e in self.coordinator.data or []]
        current = [e for e in converted if e.end_datetime_local > now]
        if not current:
            return None
        return min(current, key=lambda e: e.start_datetime_local)

    async def async_get_events(
        self,
        hass: HomeAssistant,
        start_date: datetime.datetime,
        end_date: datetime.datetime,
    ) -> list[CalendarEvent]:
        """Return events overlapping [start_date, end_date]."""
        payload = await self._api.async_get_events(start_date, end_date)
        events = db.build_records(
            db.extract_list(payload, const.API_KEY_EVENTS),
            db.build_calendar_event,
            "calendar event",
        )
        converted = [
            event_to_calendar_event(event)
            for event in upcoming_records(events, limit=len(events))
        ]
        return [e for e in converted if _overlaps(e, start_date, end_date)]


# ------------------------------------------------------------------------------------------
class MealPlanCalendar(HouseholdCoordinatorEntity, CalendarEntity):
    """This week's meal plan as calendar entries."""

    _attr_translation_key = const.TRANS_KEY_CALENDAR_MEALS

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}_{const.TRANS_KEY_CALENDAR_MEALS}"

    def _meal_events(self) -> list[CalendarEvent]:
        meals = (self.coordinator.data or {}).get(const.DATA_MEAL_PLANS, [])
        return [meal_to_calendar_event(meal) for meal in meals]

    @property
    def event(self) -> CalendarEvent | None:
        """The meal in progress, or the next one."""
        now = dt_now_local()
        upcoming = [e for e in self._meal_events() if e.end_datetime_local > now]
        if not upcoming:
            return None
        return min(upcoming, key=lambda e: e.start_datetime_local)

    async def async_get_events(
        self,
        hass: HomeAssistant,
        start_date: datetime.datetime,
        end_date: datetime.datetime,
    ) -> list[CalendarEvent]:
        """Return planned meals overlapping [start_date, end_date]."""
        events = [e for e in self._meal_events() if _overlaps(e, start_date, end_date)]
        return sorted(events, key=lambda e: e.start_datetime_local)
