"""Tests for Household Dashboard diagnostics."""

# pylint: disable=unused-argument

from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.household_dashboard import const
from custom_components.household_dashboard.diagnostics import (
    async_get_config_entry_diagnostics,
)


async def test_config_entry_diagnostics(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Backend URL is redacted and every coordinator snapshot is exported."""
    result = await async_get_config_entry_diagnostics(hass, init_integration)

    assert result["entry"]["data"][const.CONF_BASE_URL] == "**REDACTED**"
    assert all(result["last_update_success"].values())

    snapshot = result["snapshot"]
    assert [bill["id"] for bill in snapshot[const.DATA_BILLS]] == ["b1", "b2", "b3", "b4"]
    assert snapshot[const.DATA_BILLS][0]["due_date"].startswith("2024-03-08")
    assert len(result["family"]) == 2
    assert [event["id"] for event in result["upcoming_events"]] == ["e1", "e2"]
    assert result["health"]["status"] == const.HEALTH_HEALTHY
    assert "bills_overdue" in result["summary"]


async def test_diagnostics_options_included(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, mock_backend: dict
) -> None:
    entry = MockConfigEntry(
        domain=const.DOMAIN,
        title=const.HOUSEHOLD_TITLE,
        data=dict(mock_config_entry.data),
        options={const.CONF_BILL_URGENCY_DAYS: 4},
    )
    entry.add_to_hass(hass)
    await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()

    result = await async_get_config_entry_diagnostics(hass, entry)
    assert result["entry"]["options"] == {const.CONF_BILL_URGENCY_DAYS: 4}
    assert result["entry"]["title"] == const.HOUSEHOLD_TITLE
