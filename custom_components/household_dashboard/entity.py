"""Base entity classes for Household Dashboard integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import HouseholdDataCoordinator


def household_device_info(entry: ConfigEntry) -> DeviceInfo:
    """Single service device that groups every household entity."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, entry.entry_id)},
        name=entry.title or const.HOUSEHOLD_TITLE,
        manufacturer=const.HOUSEHOLD_TITLE,
        entry_type=DeviceEntryType.SERVICE,
        configuration_url=entry.data.get(const.CONF_BASE_URL),
    )


class HouseholdCoordinatorEntity(CoordinatorEntity[HouseholdDataCoordinator]):
    """Base entity class for household entities with typed coordinator access."""

    _attr_has_entity_name = True

    def __init__(self, coordinator: HouseholdDataCoordinator, entry: ConfigEntry) -> None:
        super().__init__(coordinator)
        self._entry = entry
        self._attr_device_info = household_device_info(entry)

    @property
    def coordinator(self) -> HouseholdDataCoordinator:
        """Return typed coordinator.

        Uses object.__getattribute__ to access the private _coordinator attribute
        set by the parent CoordinatorEntity class.
        """
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: HouseholdDataCoordinator) -> None:
        object.__setattr__(self, "_coordinator", value)
