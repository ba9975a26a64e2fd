"""Tests for the household backend HTTP client."""

# pylint: disable=redefined-outer-name

from datetime import UTC, datetime

import aiohttp
import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.test_util.aiohttp import AiohttpClientMocker

from custom_components.household_dashboard import const
from custom_components.household_dashboard.api import (
    HouseholdApiClient,
    HouseholdApiConnectionError,
    HouseholdApiError,
)
from tests.conftest import BASE_URL


@pytest.fixture
def api(hass: HomeAssistant, aioclient_mock: AiohttpClientMocker) -> HouseholdApiClient:
    """Client bound to the mocked session."""
    return HouseholdApiClient.from_hass(hass, f"{BASE_URL}/")


async def test_base_url_trailing_slash_stripped(api: HouseholdApiClient) -> None:
    assert api.base_url == BASE_URL


async def test_get_returns_decoded_json(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_BILLS}", json={"bills": [{"id": "b1"}]})
    assert await api.async_get_bills() == {"bills": [{"id": "b1"}]}
    assert aioclient_mock.call_count == 1


async def test_empty_body_returns_empty_dict(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(f"{BASE_URL}/api/bills/b1/pay", text="")
    assert await api.async_pay_bill("b1") == {}


async def test_error_status_raises(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_CHORES}", status=500)
    with pytest.raises(HouseholdApiError) as err:
        await api.async_get_chores()
    assert err.value.status == 500
    assert not isinstance(err.value, HouseholdApiConnectionError)


async def test_invalid_json_raises(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_HEALTH}", text="<html>oops</html>")
    with pytest.raises(HouseholdApiError):
        await api.async_get_health()


@pytest.mark.parametrize("exc", [aiohttp.ClientError(), TimeoutError()])
async def test_transport_errors_raise_connection_error(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker, exc: Exception
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_FAMILY}", exc=exc)
    with pytest.raises(HouseholdApiConnectionError):
        await api.async_get_family_members()


async def test_events_window_sent_as_iso_params(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_CALENDAR_EVENTS}", json={"events": []})
    start = datetime(2024, 3, 10, tzinfo=UTC)
    end = datetime(2024, 3, 17, tzinfo=UTC)
    await api.async_get_events(start, end)
    _, url, _, _ = aioclient_mock.mock_calls[0]
    assert url.query["start"] == start.isoformat()
    assert url.query["end"] == end.isoformat()


async def test_upcoming_events_limit_param(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.get(f"{BASE_URL}{const.API_PATH_CALENDAR_UPCOMING}", json=[])
    await api.async_get_upcoming_events(3)
    _, url, _, _ = aioclient_mock.mock_calls[0]
    assert url.query["limit"] == "3"


async def test_add_shopping_item_body(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(f"{BASE_URL}{const.API_PATH_SHOPPING_ITEMS}", json={"item": {"id": "s9"}})
    await api.async_add_shopping_item("Eggs", "dairy", 12)
    _, _, body, _ = aioclient_mock.mock_calls[0]
    assert body == {"name": "Eggs", "category": "dairy", "quantity": 12, "source": "manual"}


async def test_toggle_and_remove_use_item_path(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.patch(f"{BASE_URL}/api/shopping/items/s1", json={})
    aioclient_mock.delete(f"{BASE_URL}/api/shopping/items/s1", json={})
    await api.async_set_shopping_item_checked("s1", True)
    await api.async_remove_shopping_item("s1")
    assert aioclient_mock.mock_calls[0][2] == {"checked": True}
    assert aioclient_mock.call_count == 2


async def test_generate_meal_plan_body(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(f"{BASE_URL}{const.API_PATH_MEAL_GENERATE}", json={"meals": []})
    week_start = datetime(2024, 3, 10, tzinfo=UTC)
    await api.async_generate_meal_plan(week_start, ["vegetarian"], None)
    _, _, body, _ = aioclient_mock.mock_calls[0]
    assert body == {
        "weekStart": week_start.isoformat(),
        "preferences": {"dietary": ["vegetarian"], "allergies": []},
    }


async def test_apply_meal_plan_body(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(f"{BASE_URL}{const.API_PATH_MEAL_APPLY}", json={"success": True})
    await api.async_apply_meal_plan({"meals": []})
    _, _, body, _ = aioclient_mock.mock_calls[0]
    assert body == {"plan": {"meals": []}, "autoGenerateGroceryList": True}


async def test_trigger_announcement_body(
    api: HouseholdApiClient, aioclient_mock: AiohttpClientMocker
) -> None:
    aioclient_mock.post(f"{BASE_URL}{const.API_PATH_ANNOUNCEMENT_TRIGGER}", json={})
    await api.async_trigger_announcement("dinner-time")
    assert aioclient_mock.mock_calls[0][2] == {"type": "dinner-time"}
