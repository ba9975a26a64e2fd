"""Shared fixtures for Household Dashboard tests."""

from typing import Any
from zoneinfo import ZoneInfo

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.household_dashboard import const
from custom_components.household_dashboard.utils import dt_utils

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

BASE_URL = "http://household.local:3000"

# All sample records are dated around Sunday 2024-03-10
FROZEN_NOW = "2024-03-10 12:00:00"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture(autouse=True)
def reset_default_timezone():
    """Run every test against UTC unless it sets its own zone."""
    previous = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone(ZoneInfo("UTC"))
    yield
    dt_utils.set_default_timezone(previous)


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Config entry pointing at the mocked backend."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=const.HOUSEHOLD_TITLE,
        data={const.CONF_BASE_URL: BASE_URL},
        options={},
        entry_id="household_test_entry",
    )


def sample_payloads() -> dict[str, Any]:
    """Backend responses keyed by API path, in the backend's camelCase shape."""
    return {
        const.API_PATH_HEALTH: {
            "status": "healthy",
            "uptime": 7260,
            "modules": {
                "calendar": {"status": "ok", "message": "Synced"},
                "meals": {"status": "ok", "message": ""},
            },
        },
        const.API_PATH_FAMILY: {
            "members": [
                {"id": "m1", "name": "Sarah", "role": "parent", "age": 41},
                {"id": "m2", "name": "Zoe", "role": "child", "age": 12},
                {"id": "m3", "name": "Kyle", "nickname": "Ky", "role": "child"},
            ]
        },
        const.API_PATH_FAMILY_DASHBOARD: {
            "members": [
                {
                    "member": {"id": "m1", "name": "Sarah", "role": "parent"},
                    "presence": {
                        "isHome": True,
                        "currentZone": "home",
                        "lastSeen": "2024-03-10T11:55:00Z",
                    },
                    "pendingChores": 0,
                    "upcomingEvents": 2,
                    "nextAppointment": {
                        "purpose": "Dentist",
                        "dateTime": "2024-03-11T14:30:00Z",
                    },
                },
                {
                    "member": {"id": "m3", "name": "Kyle", "nickname": "Ky", "role": "child"},
                    "presence": {"isHome": False, "currentZone": "school"},
                    "pendingChores": 1,
                    "upcomingEvents": 0,
                },
            ]
        },
        const.API_PATH_CALENDAR_UPCOMING: {
            "events": [
                {
                    "id": "e1",
                    "title": "Soccer practice",
                    "startTime": "2024-03-10T16:00:00Z",
                    "endTime": "2024-03-10T17:30:00Z",
                    "type": "sports",
                    "familyMember": "m2",
                },
                {
                    "id": "e2",
                    "title": "Spring break",
                    "startTime": "2024-03-11",
                    "allDay": True,
                    "type": "school",
                },
            ]
        },
        const.API_PATH_QUICK_ACTIONS: [],
        const.API_PATH_BILLS: {
            "bills": [
                {"id": "b1", "name": "Electric", "amount": 120.5, "dueDate": "2024-03-08", "category": "utilities", "status": "pending"},
                {"id": "b2", "name": "Internet", "amount": "80", "dueDate": "2024-03-12", "category": "utilities", "status": "pending"},
                {"id": "b3", "name": "Water", "amount": 45.25, "dueDate": "2024-03-20", "category": "utilities", "status": "pending"},
                {"id": "b4", "name": "Rent", "amount": 1500, "dueDate": "2024-03-01", "category": "housing", "status": "paid"},
                {"id": "b5", "name": "Broken", "amount": 10},
            ]
        },
        const.API_PATH_CHORES: {
            "chores": [
                {"id": "c1", "title": "Dishes", "assignedTo": "Zoe", "status": "completed", "points": 5, "dueDate": "2024-03-10"},
                {"id": "c2", "title": "Laundry", "assignedTo": "Zoe", "status": "pending", "points": 3, "dueDate": "2024-03-13"},
                {"id": "c3", "title": "Trash", "assignedTo": "Kyle", "status": "completed", "points": 2},
                {"id": "c4", "title": "Vacuum", "assignedTo": "Kyle", "status": "pending", "points": 4, "dueDate": "2024-03-09"},
            ]
        },
        const.API_PATH_MEAL_PLANS: {
            "plans": [
                {"id": "p1", "date": "2024-03-10", "mealType": "dinner", "recipe": "Tacos", "servings": 4, "ingredients": ["tortillas", "beef"]},
                {"id": "p2", "date": "2024-03-10", "mealType": "breakfast", "recipe": "Pancakes", "servings": 4},
                {"id": "p3", "date": "2024-03-12", "mealType": "lunch", "recipe": "Soup", "servings": 2},
            ]
        },
        const.API_PATH_MEDICAL_APPOINTMENTS: {
            "appointments": [
                {"id": "a1", "patientName": "Zoe", "provider": "Dr. Lee", "date": "2024-03-11", "time": "14:30", "type": "dental", "status": "upcoming"},
                {"id": "a2", "patientName": "Sarah", "provider": "Dr. Park", "date": "2024-03-20", "time": "9:00 AM", "type": "checkup", "status": "upcoming"},
                {"id": "a3", "patientName": "Kyle", "provider": "Dr. Lee", "date": "2024-02-01", "type": "checkup", "status": "completed"},
            ]
        },
        const.API_PATH_MEDICATIONS: {
            "medications": [
                {"id": "rx1", "name": "Inhaler", "dosage": "2 puffs", "frequency": "as needed", "takenBy": "Kyle", "nextRefillDate": "2024-03-14"},
                {"id": "rx2", "name": "Vitamin D", "dosage": "1000 IU", "frequency": "daily", "takenBy": "Sarah", "nextRefillDate": "2024-04-30"},
            ]
        },
        const.API_PATH_MEDICAL_RECORDS: {
            "records": [
                {"id": "r1", "patientName": "Sarah", "type": "lab_result", "title": "Blood panel", "date": "2024-03-01", "status": "abnormal"},
                {"id": "r2", "patientName": "Zoe", "type": "vaccination", "title": "Flu shot", "date": "2024-01-15"},
            ]
        },
        const.API_PATH_SHOPPING_LIST: {
            "items": [
                {"id": "s1", "name": "Milk", "category": "dairy", "quantity": 2, "checked": False},
                {"id": "s2", "name": "Apples", "category": "produce", "quantity": 6, "checked": True},
                {"id": "s3", "name": "Bread", "category": "bakery", "checked": False},
            ]
        },
    }


def register_backend(
    aioclient_mock: AiohttpClientMocker, overrides: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Register every GET endpoint on the mocked session."""
    payloads = sample_payloads()
    payloads.update(overrides or {})
    for path, payload in payloads.items():
        aioclient_mock.get(f"{BASE_URL}{path}", json=payload)
    return payloads


@pytest.fixture
def mock_backend(aioclient_mock: AiohttpClientMocker) -> dict[str, Any]:
    """Mocked backend serving the sample household."""
    return register_backend(aioclient_mock)


async def setup_integration(hass: HomeAssistant, entry: MockConfigEntry) -> MockConfigEntry:
    """Add the entry to hass and set it up."""
    entry.add_to_hass(hass)
    await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    return entry


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, mock_backend: dict[str, Any]
) -> MockConfigEntry:
    """Household Dashboard set up against the sample backend."""
    # pylint: disable=unused-argument
    return await setup_integration(hass, mock_config_entry)
