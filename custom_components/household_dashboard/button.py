# File: button.py
"""Buttons for the Household Dashboard integration.

One button per quick action. The action list comes from the backend; when
the backend has none configured, or could not be reached, the default
announcement actions are used instead.
"""

from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .api import HouseholdApiError
from .coordinator import HouseholdDataCoordinator
from .entity import HouseholdCoordinatorEntity
from .type_defs import QuickActionData

PARALLEL_UPDATES = 0


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up quick action buttons."""
    coordinator: HouseholdDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    actions = (coordinator.data or {}).get(const.DATA_QUICK_ACTIONS, [])
    async_add_entities(QuickActionButton(coordinator, entry, action) for action in actions)


# ------------------------------------------------------------------------------------------
class QuickActionButton(HouseholdCoordinatorEntity, ButtonEntity):
    """Run a backend quick action (announcement, scene, routine)."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_QUICK_ACTION

    def __init__(
        self,
        coordinator: HouseholdDataCoordinator,
        entry: ConfigEntry,
        action: QuickActionData,
    ) -> None:
        super().__init__(coordinator, entry)
        self._action_id = action[const.FIELD_ID]
        self._action_name = action[const.FIELD_NAME]
        self._attr_unique_id = f"{entry.entry_id}_quick_action_{self._action_id}"
        self._attr_icon = action[const.FIELD_ICON]
        self._attr_translation_placeholders = {"action_name": self._action_name}
        self._attr_extra_state_attributes = {
            "action_id": self._action_id,
            const.FIELD_CATEGORY: action[const.FIELD_CATEGORY],
        }

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            result = await self.coordinator.api.async_execute_quick_action(self._action_id)
        except HouseholdApiError as err:
            const.LOGGER.error(
                "ERROR: Quick action '%s' failed: %s", self._action_name, err
            )
            return

        const.LOGGER.info(
            "INFO: Quick action '%s' executed: %s",
            self._action_name,
            result.get(const.FIELD_MESSAGE, "") if isinstance(result, dict) else "",
        )
