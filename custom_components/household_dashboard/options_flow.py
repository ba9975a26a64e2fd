# File: options_flow.py
"""Options flow for the Household Dashboard integration.

Polling interval, urgency thresholds and the upcoming-events limit. Saving
options reloads the entry so the coordinators pick up the new values.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries

from . import const


def build_options_schema(options: dict[str, Any]) -> vol.Schema:
    """Options schema prefilled from the current entry options."""

    def _urgency(key: str, default: int) -> dict[vol.Marker, Any]:
        return {
            vol.Required(key, default=options.get(key, default)): vol.All(
                vol.Coerce(int), vol.Range(min=0, max=const.MAX_URGENCY_DAYS)
            )
        }

    return vol.Schema(
        {
            vol.Required(
                const.CONF_UPDATE_INTERVAL,
                default=options.get(
                    const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                ),
            ): vol.All(
                vol.Coerce(int),
                vol.Range(min=const.MIN_UPDATE_INTERVAL, max=const.MAX_UPDATE_INTERVAL),
            ),
            **_urgency(const.CONF_BILL_URGENCY_DAYS, const.DEFAULT_BILL_URGENCY_DAYS),
            **_urgency(const.CONF_CHORE_URGENCY_DAYS, const.DEFAULT_CHORE_URGENCY_DAYS),
            **_urgency(
                const.CONF_MEDICAL_URGENCY_DAYS, const.DEFAULT_MEDICAL_URGENCY_DAYS
            ),
            vol.Required(
                const.CONF_UPCOMING_EVENTS_LIMIT,
                default=options.get(
                    const.CONF_UPCOMING_EVENTS_LIMIT, const.DEFAULT_UPCOMING_EVENTS_LIMIT
                ),
            ): vol.All(
                vol.Coerce(int), vol.Range(min=1, max=const.MAX_UPCOMING_EVENTS_LIMIT)
            ),
        }
    )


class HouseholdOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for household polling and urgency settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options: dict[str, Any] = {}

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and save the general options."""
        self._entry_options = dict(self.config_entry.options)

        if user_input is not None:
            self._entry_options.update(user_input)
            const.LOGGER.debug("DEBUG: Saving household options: %s", self._entry_options)
            return self.async_create_entry(title="", data=self._entry_options)

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=build_options_schema(self._entry_options),
        )
