# File: __init__.py
"""Initialization file for the Household Dashboard integration.

Handles setting up the integration: creating the backend API client, the
four polling coordinators and the household services, then forwarding the
entry to the sensor, calendar and button platforms.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .api import HouseholdApiClient
from .coordinator import (
    FamilyStatusCoordinator,
    HouseholdDataCoordinator,
    SystemHealthCoordinator,
    UpcomingEventsCoordinator,
)
from .services import async_setup_services, async_unload_services


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Household Dashboard entry: %s", entry.entry_id)

    # Must be done before any component that uses the datetime helpers
    const.set_default_timezone(hass)

    api = HouseholdApiClient.from_hass(hass, entry.data[const.CONF_BASE_URL])

    coordinator = HouseholdDataCoordinator(hass, entry, api)
    family_coordinator = FamilyStatusCoordinator(hass, entry, api)
    upcoming_coordinator = UpcomingEventsCoordinator(hass, entry, api)
    health_coordinator = SystemHealthCoordinator(hass, entry, api)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    # Secondary polls start from whatever they get; failures only mark them unavailable.
    await family_coordinator.async_refresh()
    await upcoming_coordinator.async_refresh()
    await health_coordinator.async_refresh()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.COORDINATOR_FAMILY: family_coordinator,
        const.COORDINATOR_UPCOMING: upcoming_coordinator,
        const.COORDINATOR_HEALTH: health_coordinator,
        const.API_CLIENT: api,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    const.LOGGER.info("INFO: Household Dashboard setup complete for entry: %s", entry.entry_id)
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    const.LOGGER.debug("DEBUG: Options changed, reloading entry %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Household Dashboard entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok
