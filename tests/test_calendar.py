"""Tests for the calendar and quick action button platforms."""

# pylint: disable=redefined-outer-name,unused-argument

from datetime import UTC, date, datetime, timedelta

from homeassistant.components.calendar import CalendarEntityFeature
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from pytest_homeassistant_custom_component.common import MockConfigEntry
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.household_dashboard import const
from custom_components.household_dashboard import data_builders as db
from custom_components.household_dashboard.calendar import (
    event_to_calendar_event,
    meal_to_calendar_event,
)
from tests.conftest import BASE_URL


def _entity_id(hass: HomeAssistant, entry: MockConfigEntry, platform: str, key: str) -> str:
    registry = er.async_get(hass)
    entity_id = registry.async_get_entity_id(platform, const.DOMAIN, f"{entry.entry_id}_{key}")
    assert entity_id is not None
    return entity_id


class TestEventConversion:
    """Normalized records to Home Assistant calendar events (UTC)."""

    def test_all_day_event_uses_exclusive_end_day(self):
        event = db.build_calendar_event(
            {"id": "e2", "title": "Spring break", "startTime": "2024-03-11", "allDay": True}
        )
        converted = event_to_calendar_event(event)
        assert converted.start == date(2024, 3, 11)
        assert converted.end == date(2024, 3, 12)
        assert converted.uid == "e2"

    def test_timed_event_without_end_lasts_an_hour(self):
        event = db.build_calendar_event(
            {"id": "e1", "title": "Soccer", "start": "2024-03-10T16:00:00Z"}
        )
        converted = event_to_calendar_event(event)
        assert converted.start == datetime(2024, 3, 10, 16, 0, tzinfo=UTC)
        assert converted.end - converted.start == timedelta(hours=1)

    def test_meal_placed_at_slot_time(self):
        meal = db.build_meal_plan(
            {
                "id": "p1",
                "date": "2024-03-10",
                "mealType": "dinner",
                "recipe": "Tacos",
                "servings": 4,
                "ingredients": ["tortillas", "beef"],
            }
        )
        converted = meal_to_calendar_event(meal)
        assert converted.summary == "Dinner: Tacos"
        assert converted.start.hour == 18
        assert converted.start.date() == date(2024, 3, 10)
        assert "Servings: 4" in converted.description
        assert "tortillas, beef" in converted.description


async def test_meal_calendar_get_events(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Meals for the requested day come back in slot order."""
    entity_id = _entity_id(hass, init_integration, "calendar", const.TRANS_KEY_CALENDAR_MEALS)
    response = await hass.services.async_call(
        "calendar",
        "get_events",
        {
            "entity_id": entity_id,
            "start_date_time": "2024-03-10T00:00:00",
            "end_date_time": "2024-03-11T00:00:00",
        },
        blocking=True,
        return_response=True,
    )
    summaries = [event["summary"] for event in response[entity_id]["events"]]
    assert summaries == ["Breakfast: Pancakes", "Dinner: Tacos"]


async def test_calendars_advertise_no_editing(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    editing = (
        CalendarEntityFeature.CREATE_EVENT
        | CalendarEntityFeature.UPDATE_EVENT
        | CalendarEntityFeature.DELETE_EVENT
    )
    for key in (const.TRANS_KEY_CALENDAR_EVENTS, const.TRANS_KEY_CALENDAR_MEALS):
        state = hass.states.get(_entity_id(hass, init_integration, "calendar", key))
        assert not state.attributes.get("supported_features", 0) & editing


async def test_quick_action_button_press(
    hass: HomeAssistant, init_integration: MockConfigEntry, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(
        f"{BASE_URL}/api/quickactions/dinner-time/execute",
        json={"success": True, "message": "Announced"},
    )
    entity_id = _entity_id(hass, init_integration, "button", "quick_action_dinner-time")
    await hass.services.async_call("button", "press", {"entity_id": entity_id}, blocking=True)

    posts = [call for call in aioclient_mock.mock_calls if call[0].upper() == "POST"]
    assert len(posts) == 1
    assert str(posts[0][1]).endswith("/api/quickactions/dinner-time/execute")


async def test_quick_action_button_failure_is_logged(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,
    aioclient_mock: AiohttpClientMocker,
    caplog,
) -> None:
    aioclient_mock.post(f"{BASE_URL}/api/quickactions/family-meeting/execute", status=500)
    entity_id = _entity_id(hass, init_integration, "button", "quick_action_family-meeting")
    await hass.services.async_call("button", "press", {"entity_id": entity_id}, blocking=True)
    assert "Quick action 'Family Meeting' failed" in caplog.text
