"""Diagnostics support for Household Dashboard integration.

Exports the entry configuration (backend URL redacted), the last snapshot
of every coordinator and the derived dashboard views for troubleshooting.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from . import data_builders as db
from .coordinator import (
    FamilyStatusCoordinator,
    HouseholdDataCoordinator,
    SystemHealthCoordinator,
    UpcomingEventsCoordinator,
)

TO_REDACT = {const.CONF_BASE_URL}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    entry_data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: HouseholdDataCoordinator = entry_data[const.COORDINATOR]
    family: FamilyStatusCoordinator = entry_data[const.COORDINATOR_FAMILY]
    upcoming: UpcomingEventsCoordinator = entry_data[const.COORDINATOR_UPCOMING]
    health: SystemHealthCoordinator = entry_data[const.COORDINATOR_HEALTH]

    return {
        "entry": {
            "title": entry.title,
            "data": async_redact_data(dict(entry.data), TO_REDACT),
            "options": dict(entry.options),
        },
        "last_update_success": {
            const.COORDINATOR: coordinator.last_update_success,
            const.COORDINATOR_FAMILY: family.last_update_success,
            const.COORDINATOR_UPCOMING: upcoming.last_update_success,
            const.COORDINATOR_HEALTH: health.last_update_success,
        },
        "snapshot": db.to_json_safe(coordinator.data or {}),
        "family": db.to_json_safe(family.data or []),
        "upcoming_events": db.to_json_safe(upcoming.data or []),
        "health": db.to_json_safe(health.data or {}),
        "summary": db.to_json_safe(coordinator.household_summary())
        if coordinator.data
        else {},
    }
