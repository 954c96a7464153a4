"""Tests for config flow."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest

from homeassistant.core import HomeAssistant

from custom_components.shelly_ht.config_flow import ShellyHTConfigFlow, ShellyHTOptionsFlow
from custom_components.shelly_ht.const import CONF_DEVICE_ID, CONF_POLLING_INTERVAL, CONF_SERVER_URL
from custom_components.shelly_ht.core.exceptions import AuthError, NetworkError

API_CLIENT = "custom_components.shelly_ht.config_flow.ShellyHTApiClient"
CLIENT_SESSION = "custom_components.shelly_ht.config_flow.async_get_clientsession"


def _flow(mock_hass: HomeAssistant) -> ShellyHTConfigFlow:
    flow = ShellyHTConfigFlow()
    flow.hass = mock_hass
    return flow


@pytest.mark.asyncio
async def test_config_flow_show_form(mock_hass: HomeAssistant):
    """Test the form is shown without input."""
    result = await _flow(mock_hass).async_step_user()

    assert result["type"] == "form"
    assert result["step_id"] == "user"
    assert result["errors"] == {}


@pytest.mark.asyncio
async def test_config_flow_user_step(mock_hass: HomeAssistant, entry_data, gen3_status):
    """Test a valid device creates an entry."""
    flow = _flow(mock_hass)

    with patch(CLIENT_SESSION), patch(API_CLIENT) as mock_client_class, \
         patch.object(flow, "async_set_unique_id", new_callable=AsyncMock) as mock_unique_id, \
         patch.object(flow, "_abort_if_unique_id_configured") as mock_abort:
        mock_client_class.return_value.async_get_device_status = AsyncMock(return_value=gen3_status)

        result = await flow.async_step_user(dict(entry_data))

    assert result["type"] == "create_entry"
    assert result["title"] == "Living Room H&T"
    assert result["data"][CONF_DEVICE_ID] == "d1"
    assert result["data"][CONF_SERVER_URL] == "http://h"
    mock_unique_id.assert_awaited_once_with("d1")
    mock_abort.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("side_effect", "status", "error"),
    [
        (AuthError("Auth failed (status=401)"), None, "invalid_auth"),
        (NetworkError("Connection refused"), None, "cannot_connect"),
        (RuntimeError("boom"), None, "unknown"),
        (None, {"sys": {"uptime": 3}}, "unsupported_device"),
    ],
)
async def test_config_flow_errors(mock_hass: HomeAssistant, entry_data, side_effect, status, error):
    """Test validation errors map to form errors."""
    flow = _flow(mock_hass)

    with patch(CLIENT_SESSION), patch(API_CLIENT) as mock_client_class:
        mock_client_class.return_value.async_get_device_status = AsyncMock(
            side_effect=side_effect, return_value=status
        )

        result = await flow.async_step_user(dict(entry_data))

    assert result["type"] == "form"
    assert result["errors"] == {"base": error}


@pytest.mark.asyncio
async def test_config_flow_invalid_input(mock_hass: HomeAssistant):
    """Test config flow with missing required fields."""
    result = await _flow(mock_hass).async_step_user({
        CONF_SERVER_URL: "http://h",
        CONF_DEVICE_ID: "",
    })

    assert result["type"] == "form"
    assert result["errors"] == {"base": "invalid_config"}


def _options_flow(mock_hass: HomeAssistant, entry) -> ShellyHTOptionsFlow:
    flow = ShellyHTConfigFlow.async_get_options_flow(entry)
    flow.hass = mock_hass
    return flow


@pytest.mark.asyncio
async def test_options_flow_shows_current_interval(mock_hass: HomeAssistant, mock_config_entry):
    """Test the options form defaults to the configured interval."""
    mock_config_entry.data = {**mock_config_entry.data, CONF_POLLING_INTERVAL: 45}
    mock_config_entry.options = {CONF_POLLING_INTERVAL: 90}
    flow = _options_flow(mock_hass, mock_config_entry)

    with patch.object(
        ShellyHTOptionsFlow, "config_entry", new_callable=PropertyMock, return_value=mock_config_entry
    ):
        result = await flow.async_step_init()

    assert result["type"] == "form"
    assert result["step_id"] == "init"
    defaults = {str(key): key.default() for key in result["data_schema"].schema}
    assert defaults == {CONF_POLLING_INTERVAL: 90}


@pytest.mark.asyncio
async def test_options_flow_falls_back_to_entry_data(mock_hass: HomeAssistant, mock_config_entry):
    mock_config_entry.data = {**mock_config_entry.data, CONF_POLLING_INTERVAL: 45}
    flow = _options_flow(mock_hass, mock_config_entry)

    with patch.object(
        ShellyHTOptionsFlow, "config_entry", new_callable=PropertyMock, return_value=mock_config_entry
    ):
        result = await flow.async_step_init()

    key = next(iter(result["data_schema"].schema))
    assert key.default() == 45


@pytest.mark.asyncio
async def test_options_flow_creates_entry(mock_hass: HomeAssistant, mock_config_entry):
    """Test submitted options are stored."""
    flow = _options_flow(mock_hass, mock_config_entry)

    with patch.object(
        ShellyHTOptionsFlow, "config_entry", new_callable=PropertyMock, return_value=mock_config_entry
    ):
        result = await flow.async_step_init({CONF_POLLING_INTERVAL: 120})

    assert result["type"] == "create_entry"
    assert result["data"] == {CONF_POLLING_INTERVAL: 120}
