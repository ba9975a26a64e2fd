# File: api.py
"""HTTP client for the household automation backend.

Thin async wrapper around Home Assistant's shared aiohttp session. Every
call returns decoded JSON (or an empty dict for an empty body); turning that
JSON into records is the job of `data_builders`.

Raises:
    HouseholdApiConnectionError: Backend unreachable or request timed out.
    HouseholdApiError: Backend answered with a non-OK status or bad JSON.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Any

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.util.json import json_loads

from . import const

# ==============================================================================
# Custom Exceptions
# ==============================================================================


class HouseholdApiError(HomeAssistantError):
    """Backend returned an error status or an unreadable body."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class HouseholdApiConnectionError(HouseholdApiError):
    """Backend could not be reached."""


# ==============================================================================
# Client
# ==============================================================================


class HouseholdApiClient:
    """Async client for the household backend REST API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        timeout: float = const.DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_hass(cls, hass: HomeAssistant, base_url: str) -> HouseholdApiClient:
        """Build a client on Home Assistant's shared client session."""
        return cls(async_get_clientsession(hass), base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Perform one request and decode its JSON body."""
        url = f"{self._base_url}{path}"
        try:
            async with asyncio.timeout(self._timeout):
                async with self._session.request(
                    method, url, params=params, json=json
                ) as response:
                    if response.status >= 400:
                        raise HouseholdApiError(
                            f"HTTP {response.status} from {method} {path}",
                            status=response.status,
                        )
                    body = await response.text()
            payload = json_loads(body) if body.strip() else None
        except TimeoutError as err:
            raise HouseholdApiConnectionError(
                f"Timeout talking to household backend: {method} {path}"
            ) from err
        except aiohttp.ClientError as err:
            raise HouseholdApiConnectionError(
                f"Error talking to household backend: {err}"
            ) from err
        except ValueError as err:
            raise HouseholdApiError(f"Invalid JSON from {method} {path}") from err

        return {} if payload is None else payload

    @staticmethod
    def _iso(value: date | datetime) -> str:
        return value.isoformat()

    # ────────────────────────────────────────────────────────────────
    # Health / Family
    # ────────────────────────────────────────────────────────────────

    async def async_get_health(self) -> Any:
        return await self._request("GET", const.API_PATH_HEALTH)

    async def async_get_family_members(self) -> Any:
        return await self._request("GET", const.API_PATH_FAMILY)

    async def async_get_family_dashboard(self) -> Any:
        return await self._request("GET", const.API_PATH_FAMILY_DASHBOARD)

    # ────────────────────────────────────────────────────────────────
    # Calendar
    # ────────────────────────────────────────────────────────────────

    async def async_get_upcoming_events(
        self, limit: int = const.DEFAULT_UPCOMING_EVENTS_LIMIT
    ) -> Any:
        return await self._request(
            "GET", const.API_PATH_CALENDAR_UPCOMING, params={"limit": str(limit)}
        )

    async def async_get_events(self, start: datetime, end: datetime) -> Any:
        """Events overlapping the [start, end) window."""
        return await self._request(
            "GET",
            const.API_PATH_CALENDAR_EVENTS,
            params={"start": self._iso(start), "end": self._iso(end)},
        )

    # ────────────────────────────────────────────────────────────────
    # Quick actions / Announcements
    # ────────────────────────────────────────────────────────────────

    async def async_get_quick_actions(self) -> Any:
        return await self._request("GET", const.API_PATH_QUICK_ACTIONS)

    async def async_execute_quick_action(self, action_id: str) -> Any:
        return await self._request(
            "POST", const.API_PATH_QUICK_ACTION_EXECUTE.format(action_id=action_id)
        )

    async def async_trigger_announcement(self, announcement_type: str) -> Any:
        return await self._request(
            "POST",
            const.API_PATH_ANNOUNCEMENT_TRIGGER,
            json={"type": announcement_type},
        )

    # ────────────────────────────────────────────────────────────────
    # Bills / Chores
    # ────────────────────────────────────────────────────────────────

    async def async_get_bills(self) -> Any:
        return await self._request("GET", const.API_PATH_BILLS)

    async def async_pay_bill(self, bill_id: str) -> Any:
        return await self._request("POST", const.API_PATH_BILL_PAY.format(bill_id=bill_id))

    async def async_get_chores(self) -> Any:
        return await self._request("GET", const.API_PATH_CHORES)

    async def async_complete_chore(self, chore_id: str) -> Any:
        return await self._request(
            "POST", const.API_PATH_CHORE_COMPLETE.format(chore_id=chore_id)
        )

    # ────────────────────────────────────────────────────────────────
    # Meals
    # ────────────────────────────────────────────────────────────────

    async def async_get_meal_plans(self, start: datetime, end: datetime) -> Any:
        return await self._request(
            "GET",
            const.API_PATH_MEAL_PLANS,
            params={"start": self._iso(start), "end": self._iso(end)},
        )

    async def async_generate_meal_plan(
        self,
        week_start: date,
        dietary: list[str] | None = None,
        allergies: list[str] | None = None,
    ) -> Any:
        """Ask the backend to generate a plan for the week starting `week_start`."""
        return await self._request(
            "POST",
            const.API_PATH_MEAL_GENERATE,
            json={
                "weekStart": self._iso(week_start),
                "preferences": {
                    "dietary": list(dietary or []),
                    "allergies": list(allergies or []),
                },
            },
        )

    async def async_apply_meal_plan(
        self, plan: Any, auto_generate_grocery_list: bool = True
    ) -> Any:
        return await self._request(
            "POST",
            const.API_PATH_MEAL_APPLY,
            json={"plan": plan, "autoGenerateGroceryList": auto_generate_grocery_list},
        )

    # ────────────────────────────────────────────────────────────────
    # Medical
    # ────────────────────────────────────────────────────────────────

    async def async_get_appointments(self) -> Any:
        return await self._request("GET", const.API_PATH_MEDICAL_APPOINTMENTS)

    async def async_get_medications(self) -> Any:
        return await self._request("GET", const.API_PATH_MEDICATIONS)

    async def async_get_medical_records(self) -> Any:
        return await self._request("GET", const.API_PATH_MEDICAL_RECORDS)

    # ────────────────────────────────────────────────────────────────
    # Shopping
    # ────────────────────────────────────────────────────────────────

    async def async_get_shopping_list(self) -> Any:
        return await self._request("GET", const.API_PATH_SHOPPING_LIST)

    async def async_add_shopping_item(
        self,
        name: str,
        category: str = const.DEFAULT_SHOPPING_CATEGORY,
        quantity: float = const.DEFAULT_SHOPPING_QUANTITY,
    ) -> Any:
        return await self._request(
            "POST",
            const.API_PATH_SHOPPING_ITEMS,
            json={
                "name": name,
                "category": category,
                "quantity": quantity,
                "source": const.SHOPPING_SOURCE_MANUAL,
            },
        )

    async def async_set_shopping_item_checked(self, item_id: str, checked: bool) -> Any:
        return await self._request(
            "PATCH",
            const.API_PATH_SHOPPING_ITEM.format(item_id=item_id),
            json={"checked": checked},
        )

    async def async_remove_shopping_item(self, item_id: str) -> Any:
        return await self._request(
            "DELETE", const.API_PATH_SHOPPING_ITEM.format(item_id=item_id)
        )

    async def async_clear_checked_shopping_items(self) -> Any:
        return await self._request("POST", const.API_PATH_SHOPPING_CLEAR_CHECKED)
