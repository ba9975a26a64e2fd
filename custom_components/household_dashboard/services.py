# File: services.py
"""Defines custom services for the Household Dashboard integration.

These services allow household actions (paying bills, completing chores,
editing the shopping list, planning meals, announcements) from scripts and
automations, plus a response-only `get_period_view` query that returns the
day-bucketed schedule for any day, week or month.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from . import data_builders as db
from .api import HouseholdApiClient, HouseholdApiError
from .coordinator import HouseholdDataCoordinator
from .engines import DashboardEngine, compute_period, navigate
from .engines.period_engine import PERIOD_KINDS, PERIOD_WEEK
from .utils.dt_utils import dt_today_local

# --- Service Schemas ---
PAY_BILL_SCHEMA = vol.Schema({vol.Required(const.SERVICE_FIELD_BILL_ID): cv.string})

COMPLETE_CHORE_SCHEMA = vol.Schema({vol.Required(const.SERVICE_FIELD_CHORE_ID): cv.string})

ADD_SHOPPING_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.SERVICE_FIELD_NAME): cv.string,
        vol.Optional(
            const.SERVICE_FIELD_CATEGORY, default=const.DEFAULT_SHOPPING_CATEGORY
        ): vol.In(const.SHOPPING_CATEGORY_ORDER),
        vol.Optional(
            const.SERVICE_FIELD_QUANTITY, default=const.DEFAULT_SHOPPING_QUANTITY
        ): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
    }
)

SHOPPING_ITEM_SCHEMA = vol.Schema({vol.Required(const.SERVICE_FIELD_ITEM_ID): cv.string})

EMPTY_SCHEMA = vol.Schema({})

GENERATE_MEAL_PLAN_SCHEMA = vol.Schema(
    {
        vol.Optional(const.SERVICE_FIELD_REFERENCE_DATE): cv.date,
        vol.Optional(const.SERVICE_FIELD_DIETARY, default=list): vol.All(
            cv.ensure_list, [cv.string]
        ),
        vol.Optional(const.SERVICE_FIELD_ALLERGIES, default=list): vol.All(
            cv.ensure_list, [cv.string]
        ),
    }
)

TRIGGER_ANNOUNCEMENT_SCHEMA = vol.Schema(
    {vol.Required(const.SERVICE_FIELD_ANNOUNCEMENT_TYPE): cv.string}
)

EXECUTE_QUICK_ACTION_SCHEMA = vol.Schema(
    {vol.Required(const.SERVICE_FIELD_ACTION_ID): cv.string}
)

GET_PERIOD_VIEW_SCHEMA = vol.Schema(
    {
        vol.Optional(const.SERVICE_FIELD_KIND, default=PERIOD_WEEK): vol.In(PERIOD_KINDS),
        vol.Optional(const.SERVICE_FIELD_REFERENCE_DATE): cv.date,
        vol.Optional(const.SERVICE_FIELD_DIRECTION, default=0): vol.Coerce(int),
        vol.Optional(
            const.SERVICE_FIELD_SOURCE, default=const.PERIOD_VIEW_SOURCE_EVENTS
        ): vol.In(const.PERIOD_VIEW_SOURCES),
    }
)


def _get_entry_data(hass: HomeAssistant) -> dict[str, Any]:
    """Return hass.data for the first loaded household entry."""
    entries = hass.data.get(const.DOMAIN, {})
    for entry_data in entries.values():
        return entry_data
    raise HomeAssistantError("No Household Dashboard entry is loaded")


def _get_clients(hass: HomeAssistant) -> tuple[HouseholdApiClient, HouseholdDataCoordinator]:
    entry_data = _get_entry_data(hass)
    return entry_data[const.API_CLIENT], entry_data[const.COORDINATOR]


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Household Dashboard services."""

    async def _run(label: str, coro: Any) -> Any:
        """Await a backend call, logging and re-raising failures."""
        try:
            return await coro
        except HouseholdApiError as err:
            const.LOGGER.error("ERROR: %s failed: %s", label, err)
            raise HomeAssistantError(f"{label} failed: {err}") from err

    async def handle_pay_bill(call: ServiceCall) -> None:
        """Mark a bill as paid."""
        api, coordinator = _get_clients(hass)
        bill_id = call.data[const.SERVICE_FIELD_BILL_ID]
        await _run("Pay bill", api.async_pay_bill(bill_id))
        const.LOGGER.info("INFO: Bill '%s' marked as paid", bill_id)
        await coordinator.async_request_refresh()

    async def handle_complete_chore(call: ServiceCall) -> None:
        """Mark a chore as completed."""
        api, coordinator = _get_clients(hass)
        chore_id = call.data[const.SERVICE_FIELD_CHORE_ID]
        await _run("Complete chore", api.async_complete_chore(chore_id))
        const.LOGGER.info("INFO: Chore '%s' completed", chore_id)
        await coordinator.async_request_refresh()

    async def handle_add_shopping_item(call: ServiceCall) -> None:
        """Add a manual item to the shopping list."""
        api, coordinator = _get_clients(hass)
        await _run(
            "Add shopping item",
            api.async_add_shopping_item(
                call.data[const.SERVICE_FIELD_NAME],
                call.data[const.SERVICE_FIELD_CATEGORY],
                call.data[const.SERVICE_FIELD_QUANTITY],
            ),
        )
        await coordinator.async_request_refresh()

    async def handle_toggle_shopping_item(call: ServiceCall) -> None:
        """Flip the checked state of a shopping list item."""
        api, coordinator = _get_clients(hass)
        item_id = call.data[const.SERVICE_FIELD_ITEM_ID]
        items = (coordinator.data or {}).get(const.DATA_SHOPPING_ITEMS, [])
        item = next((i for i in items if i[const.FIELD_ID] == item_id), None)
        if item is None:
            const.LOGGER.warning("WARNING: Toggle shopping item: '%s' not found", item_id)
            raise HomeAssistantError(f"Shopping item '{item_id}' not found")
        await _run(
            "Toggle shopping item",
            api.async_set_shopping_item_checked(item_id, not item[const.FIELD_CHECKED]),
        )
        await coordinator.async_request_refresh()

    async def handle_remove_shopping_item(call: ServiceCall) -> None:
        """Delete a shopping list item."""
        api, coordinator = _get_clients(hass)
        await _run(
            "Remove shopping item",
            api.async_remove_shopping_item(call.data[const.SERVICE_FIELD_ITEM_ID]),
        )
        await coordinator.async_request_refresh()

    async def handle_clear_checked(call: ServiceCall) -> None:
        """Remove every checked item from the shopping list."""
        api, coordinator = _get_clients(hass)
        await _run("Clear checked items", api.async_clear_checked_shopping_items())
        await coordinator.async_request_refresh()

    async def handle_generate_meal_plan(call: ServiceCall) -> None:
        """Generate and apply a meal plan for the week containing the date.

        The backend generates the plan; applying it also fills the grocery
        list from the plan's ingredients.
        """
        api, coordinator = _get_clients(hass)
        reference = call.data.get(const.SERVICE_FIELD_REFERENCE_DATE) or dt_today_local()
        week_start, _ = compute_period(reference, PERIOD_WEEK).window()

        plan = await _run(
            "Generate meal plan",
            api.async_generate_meal_plan(
                week_start,
                call.data[const.SERVICE_FIELD_DIETARY],
                call.data[const.SERVICE_FIELD_ALLERGIES],
            ),
        )
        await _run("Apply meal plan", api.async_apply_meal_plan(plan))
        const.LOGGER.info("INFO: Meal plan applied for week of %s", week_start.date())
        await coordinator.async_request_refresh()

    async def handle_trigger_announcement(call: ServiceCall) -> None:
        """Trigger a house-wide announcement."""
        api, _ = _get_clients(hass)
        await _run(
            "Trigger announcement",
            api.async_trigger_announcement(
                call.data[const.SERVICE_FIELD_ANNOUNCEMENT_TYPE]
            ),
        )

    async def handle_execute_quick_action(call: ServiceCall) -> None:
        """Run a backend quick action."""
        api, _ = _get_clients(hass)
        await _run(
            "Quick action",
            api.async_execute_quick_action(call.data[const.SERVICE_FIELD_ACTION_ID]),
        )

    async def handle_refresh(call: ServiceCall) -> None:
        """Refresh every coordinator now."""
        entry_data = _get_entry_data(hass)
        for key in (
            const.COORDINATOR,
            const.COORDINATOR_FAMILY,
            const.COORDINATOR_UPCOMING,
            const.COORDINATOR_HEALTH,
        ):
            await entry_data[key].async_request_refresh()

    async def handle_get_period_view(call: ServiceCall) -> ServiceResponse:
        """Return the day-bucketed schedule for a period.

        Fetches events or meal plans for the navigated period's window and
        buckets them by local calendar day.
        """
        api, _ = _get_clients(hass)
        today = dt_today_local()
        reference = call.data.get(const.SERVICE_FIELD_REFERENCE_DATE) or today
        period = navigate(
            compute_period(reference, call.data[const.SERVICE_FIELD_KIND]),
            call.data[const.SERVICE_FIELD_DIRECTION],
        )
        start, end = period.window()

        if call.data[const.SERVICE_FIELD_SOURCE] == const.PERIOD_VIEW_SOURCE_MEALS:
            payload = await _run("Fetch meal plans", api.async_get_meal_plans(start, end))
            records = db.build_records(
                db.extract_list(payload, const.API_KEY_PLANS), db.build_meal_plan, "meal plan"
            )
        else:
            payload = await _run("Fetch events", api.async_get_events(start, end))
            records = db.build_records(
                db.extract_list(payload, const.API_KEY_EVENTS),
                db.build_calendar_event,
                "calendar event",
            )

        view = DashboardEngine.schedule_view(
            records,
            period.reference_date,
            today,
            kind=period.kind,
            upcoming_limit=const.DEFAULT_UPCOMING_EVENTS_LIMIT,
        )
        return db.to_json_safe(view)

    hass.services.async_register(
        const.DOMAIN, const.SERVICE_PAY_BILL, handle_pay_bill, schema=PAY_BILL_SCHEMA
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_CHORE,
        handle_complete_chore,
        schema=COMPLETE_CHORE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_SHOPPING_ITEM,
        handle_add_shopping_item,
        schema=ADD_SHOPPING_ITEM_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_SHOPPING_ITEM,
        handle_toggle_shopping_item,
        schema=SHOPPING_ITEM_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_REMOVE_SHOPPING_ITEM,
        handle_remove_shopping_item,
        schema=SHOPPING_ITEM_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CLEAR_CHECKED_SHOPPING_ITEMS,
        handle_clear_checked,
        schema=EMPTY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GENERATE_MEAL_PLAN,
        handle_generate_meal_plan,
        schema=GENERATE_MEAL_PLAN_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TRIGGER_ANNOUNCEMENT,
        handle_trigger_announcement,
        schema=TRIGGER_ANNOUNCEMENT_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_EXECUTE_QUICK_ACTION,
        handle_execute_quick_action,
        schema=EXECUTE_QUICK_ACTION_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN, const.SERVICE_REFRESH, handle_refresh, schema=EMPTY_SCHEMA
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_PERIOD_VIEW,
        handle_get_period_view,
        schema=GET_PERIOD_VIEW_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    const.LOGGER.info("INFO: Household Dashboard services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Household Dashboard services when unloading the integration."""
    services = [
        const.SERVICE_PAY_BILL,
        const.SERVICE_COMPLETE_CHORE,
        const.SERVICE_ADD_SHOPPING_ITEM,
        const.SERVICE_TOGGLE_SHOPPING_ITEM,
        const.SERVICE_REMOVE_SHOPPING_ITEM,
        const.SERVICE_CLEAR_CHECKED_SHOPPING_ITEMS,
        const.SERVICE_GENERATE_MEAL_PLAN,
        const.SERVICE_TRIGGER_ANNOUNCEMENT,
        const.SERVICE_EXECUTE_QUICK_ACTION,
        const.SERVICE_REFRESH,
        const.SERVICE_GET_PERIOD_VIEW,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Household Dashboard services have been unregistered")
