# File: coordinator.py
"""Coordinators for the Household Dashboard integration.

Four polling loops share one API client:
- HouseholdDataCoordinator: bills, chores, members, meals, medical, shopping
  and quick actions, on the configured interval (minutes)
- FamilyStatusCoordinator: family presence cards, every 30 seconds
- UpcomingEventsCoordinator: next calendar events, every 60 seconds
- SystemHealthCoordinator: backend health, every 60 seconds, never fails

On a failed poll Home Assistant keeps the previous `data`; entities read the
last good snapshot and go unavailable through `last_update_success`.
"""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const
from . import data_builders as db
from .api import HouseholdApiClient, HouseholdApiError
from .engines import DashboardEngine, compute_period
from .engines.period_engine import PERIOD_WEEK
from .type_defs import (
    CalendarEventData,
    FamilyMemberStatusData,
    HouseholdData,
    QuickActionData,
    SystemHealthData,
)
from .utils.dt_utils import dt_now_utc, dt_today_local


def _option(config_entry: ConfigEntry, key: str, default: int) -> int:
    return int(config_entry.options.get(key, default))


class HouseholdDataCoordinator(DataUpdateCoordinator[HouseholdData]):
    """Coordinator for the household snapshot.

    Fetches every collection in parallel and exposes view-model helpers that
    run the dashboard engine against the current snapshot and today's date.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        api: HouseholdApiClient,
    ) -> None:
        """Initialize the HouseholdDataCoordinator."""
        update_interval_minutes = _option(
            config_entry, const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.api = api

    # -------------------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------------------

    @property
    def bill_urgency_days(self) -> int:
        return _option(
            self.config_entry, const.CONF_BILL_URGENCY_DAYS, const.DEFAULT_BILL_URGENCY_DAYS
        )

    @property
    def chore_urgency_days(self) -> int:
        return _option(
            self.config_entry,
            const.CONF_CHORE_URGENCY_DAYS,
            const.DEFAULT_CHORE_URGENCY_DAYS,
        )

    @property
    def medical_urgency_days(self) -> int:
        return _option(
            self.config_entry,
            const.CONF_MEDICAL_URGENCY_DAYS,
            const.DEFAULT_MEDICAL_URGENCY_DAYS,
        )

    # -------------------------------------------------------------------------------------
    # Periodic Refresh
    # -------------------------------------------------------------------------------------

    async def _async_fetch_quick_actions(self) -> list[QuickActionData]:
        """Backend quick actions, or the default announcement set."""
        try:
            payload = await self.api.async_get_quick_actions()
        except HouseholdApiError as err:
            const.LOGGER.debug("DEBUG: Quick actions unavailable, using defaults: %s", err)
            payload = []

        actions = db.build_records(
            db.extract_list(payload, const.API_KEY_ACTIONS), db.build_quick_action, "quick action"
        )
        if not actions:
            actions = [db.build_quick_action(raw) for raw in const.DEFAULT_QUICK_ACTIONS]
        return actions

    async def _async_update_data(self) -> HouseholdData:
        """Fetch every household collection in one round."""
        period = compute_period(dt_today_local(), PERIOD_WEEK)
        week_start, week_end = period.window()

        try:
            (
                bills,
                chores,
                members,
                plans,
                appointments,
                medications,
                records,
                shopping,
            ) = await asyncio.gather(
                self.api.async_get_bills(),
                self.api.async_get_chores(),
                self.api.async_get_family_members(),
                self.api.async_get_meal_plans(week_start, week_end),
                self.api.async_get_appointments(),
                self.api.async_get_medications(),
                self.api.async_get_medical_records(),
                self.api.async_get_shopping_list(),
            )
        except HouseholdApiError as err:
            const.LOGGER.warning("WARNING: Household data refresh failed: %s", err)
            raise UpdateFailed(f"Error updating household data: {err}") from err

        return HouseholdData(
            bills=db.build_records(
                db.extract_list(bills, const.API_KEY_BILLS), db.build_bill, "bill"
            ),
            chores=db.build_records(
                db.extract_list(chores, const.API_KEY_CHORES), db.build_chore, "chore"
            ),
            family_members=db.build_records(
                db.extract_list(members, const.API_KEY_MEMBERS),
                db.build_family_member,
                "family member",
            ),
            meal_plans=db.build_records(
                db.extract_list(plans, const.API_KEY_PLANS), db.build_meal_plan, "meal plan"
            ),
            appointments=db.build_records(
                db.extract_list(appointments, const.API_KEY_APPOINTMENTS),
                db.build_appointment,
                "appointment",
            ),
            medications=db.build_records(
                db.extract_list(medications, const.API_KEY_MEDICATIONS),
                db.build_medication,
                "medication",
            ),
            medical_records=db.build_records(
                db.extract_list(records, const.API_KEY_RECORDS),
                db.build_medical_record,
                "medical record",
            ),
            shopping_items=db.build_records(
                db.extract_list(shopping, const.API_KEY_ITEMS),
                db.build_shopping_item,
                "shopping item",
            ),
            quick_actions=await self._async_fetch_quick_actions(),
            meal_period=period.as_dict(),
            fetched_at=dt_now_utc(),
        )

    # -------------------------------------------------------------------------------------
    # View Models
    # -------------------------------------------------------------------------------------

    def _collection(self, key: str) -> list[Any]:
        if not self.data:
            return []
        return list(self.data.get(key, []))

    def bills_view(self, today: date | None = None) -> dict[str, Any]:
        return DashboardEngine.bills_view(
            self._collection(const.DATA_BILLS),
            today or dt_today_local(),
            self.bill_urgency_days,
            category_order=const.BILL_CATEGORIES,
        )

    def chores_view(self, today: date | None = None) -> dict[str, Any]:
        return DashboardEngine.chores_view(
            self._collection(const.DATA_CHORES),
            today or dt_today_local(),
            self.chore_urgency_days,
        )

    def medical_view(self, today: date | None = None) -> dict[str, Any]:
        return DashboardEngine.medical_view(
            self._collection(const.DATA_APPOINTMENTS),
            self._collection(const.DATA_MEDICATIONS),
            self._collection(const.DATA_MEDICAL_RECORDS),
            today or dt_today_local(),
            self.medical_urgency_days,
            refill_horizon_days=const.DEFAULT_REFILL_HORIZON_DAYS,
        )

    def shopping_view(self) -> dict[str, Any]:
        return DashboardEngine.shopping_view(
            self._collection(const.DATA_SHOPPING_ITEMS),
            category_order=const.SHOPPING_CATEGORY_ORDER,
        )

    def meal_week_view(self, today: date | None = None) -> dict[str, Any]:
        day = today or dt_today_local()
        return DashboardEngine.meal_week_view(
            self._collection(const.DATA_MEAL_PLANS), day, day
        )

    def household_summary(self, today: date | None = None) -> dict[str, Any]:
        return DashboardEngine.household_summary(
            self.data or {},
            today or dt_today_local(),
            bill_urgency_days=self.bill_urgency_days,
            chore_urgency_days=self.chore_urgency_days,
            medical_urgency_days=self.medical_urgency_days,
        )


# ------------------------------------------------------------------------------------------------


class FamilyStatusCoordinator(DataUpdateCoordinator[list[FamilyMemberStatusData]]):
    """Polls the family dashboard cards."""

    def __init__(
        self, hass: HomeAssistant, config_entry: ConfigEntry, api: HouseholdApiClient
    ) -> None:
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}_family{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(seconds=const.DEFAULT_FAMILY_POLL_SECONDS),
        )
        self.api = api

    async def _async_update_data(self) -> list[FamilyMemberStatusData]:
        try:
            payload = await self.api.async_get_family_dashboard()
        except HouseholdApiError as err:
            raise UpdateFailed(f"Error updating family status: {err}") from err
        return db.build_records(
            db.extract_list(payload, const.API_KEY_MEMBERS),
            db.build_family_status,
            "family status",
        )

    def family_view(self, today: date | None = None) -> dict[str, Any]:
        return DashboardEngine.family_view(self.data or [], today or dt_today_local())


# ------------------------------------------------------------------------------------------------


class UpcomingEventsCoordinator(DataUpdateCoordinator[list[CalendarEventData]]):
    """Polls the next few calendar events for the sidebar."""

    def __init__(
        self, hass: HomeAssistant, config_entry: ConfigEntry, api: HouseholdApiClient
    ) -> None:
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}_upcoming{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(seconds=const.DEFAULT_UPCOMING_POLL_SECONDS),
        )
        self.api = api

    @property
    def limit(self) -> int:
        return _option(
            self.config_entry,
            const.CONF_UPCOMING_EVENTS_LIMIT,
            const.DEFAULT_UPCOMING_EVENTS_LIMIT,
        )

    async def _async_update_data(self) -> list[CalendarEventData]:
        try:
            payload = await self.api.async_get_upcoming_events(self.limit)
        except HouseholdApiError as err:
            raise UpdateFailed(f"Error updating upcoming events: {err}") from err
        return db.build_records(
            db.extract_list(payload, const.API_KEY_EVENTS),
            db.build_calendar_event,
            "calendar event",
        )

    def upcoming_view(self, today: date | None = None) -> list[dict[str, Any]]:
        return DashboardEngine.upcoming_events_view(
            self.data or [], today or dt_today_local(), limit=self.limit
        )


# ------------------------------------------------------------------------------------------------


class SystemHealthCoordinator(DataUpdateCoordinator[SystemHealthData]):
    """Polls backend health; an unreachable backend reads as unhealthy."""

    def __init__(
        self, hass: HomeAssistant, config_entry: ConfigEntry, api: HouseholdApiClient
    ) -> None:
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}_health{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(seconds=const.DEFAULT_HEALTH_POLL_SECONDS),
        )
        self.api = api

    async def _async_update_data(self) -> SystemHealthData:
        try:
            payload = await self.api.async_get_health()
        except HouseholdApiError as err:
            const.LOGGER.debug("DEBUG: Health check failed: %s", err)
            return db.build_system_health(None)
        return db.build_system_health(payload)
