# File: config_flow.py
"""Config flow for the Household Dashboard integration.

A single user step asks for the dashboard backend URL and probes its health
endpoint before creating the entry. Only one household entry is allowed.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.helpers import config_validation as cv

from . import const
from .api import HouseholdApiClient, HouseholdApiError
from .options_flow import HouseholdOptionsFlowHandler


def build_user_schema(default_url: str = const.DEFAULT_BASE_URL) -> vol.Schema:
    """Schema for the backend URL step."""
    return vol.Schema({vol.Required(const.CONF_BASE_URL, default=default_url): str})


class HouseholdConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Household Dashboard."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Ask for the backend URL and verify it responds."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ABORT_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        default_url = const.DEFAULT_BASE_URL

        if user_input is not None:
            base_url = str(user_input[const.CONF_BASE_URL]).strip().rstrip("/")
            default_url = base_url
            try:
                cv.url(base_url)
            except vol.Invalid:
                errors[const.CONF_BASE_URL] = const.TRANS_KEY_ERROR_INVALID_URL
            else:
                api = HouseholdApiClient.from_hass(self.hass, base_url)
                try:
                    await api.async_get_health()
                except HouseholdApiError as err:
                    const.LOGGER.warning(
                        "WARNING: Cannot reach household backend at %s: %s", base_url, err
                    )
                    errors["base"] = const.TRANS_KEY_ERROR_CANNOT_CONNECT

            if not errors:
                const.LOGGER.info("INFO: Household backend reachable at %s", base_url)
                return self.async_create_entry(
                    title=const.HOUSEHOLD_TITLE,
                    data={const.CONF_BASE_URL: base_url},
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=build_user_schema(default_url),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return HouseholdOptionsFlowHandler(config_entry)
