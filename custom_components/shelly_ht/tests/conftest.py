"""Pytest configuration and fixtures for Shelly H&T integration tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from custom_components.shelly_ht.const import (
    DOMAIN,
    CONF_AUTH_KEY,
    CONF_DEVICE_ID,
    CONF_NAME,
    CONF_SERVER_URL,
)
from custom_components.shelly_ht.core.poller import ShellyHTPoller
from custom_components.shelly_ht.models.device_config import ShellyHTConfig


@pytest.fixture
def mock_hass() -> HomeAssistant:
    """Mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {DOMAIN: {}}
    hass.bus = MagicMock()
    hass.config_entries = MagicMock()
    hass.config_entries.async_forward_entry_setups = AsyncMock(return_value=True)
    hass.config_entries.async_unload_platforms = AsyncMock(return_value=True)
    return hass


@pytest.fixture
def entry_data() -> dict[str, Any]:
    return {
        CONF_SERVER_URL: "http://h",
        CONF_DEVICE_ID: "d1",
        CONF_AUTH_KEY: "k",
        CONF_NAME: "Living Room H&T",
    }


@pytest.fixture
def mock_config_entry(entry_data) -> ConfigEntry:
    """Mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.title = "Living Room H&T"
    entry.data = entry_data
    entry.options = {}
    return entry


@pytest.fixture
def device_config() -> ShellyHTConfig:
    return ShellyHTConfig(server_url="http://h", device_id="d1", auth_key="k")


@pytest.fixture
def gen1_status() -> dict[str, Any]:
    """Device status as reported by first generation firmware."""
    return {"tmp": {"tC": 21.5}, "hum": {"value": 55}, "bat": {"value": 12}}


@pytest.fixture
def gen3_status() -> dict[str, Any]:
    """Device status as reported by third generation firmware."""
    return {
        "temperature:0": {"tC": 19.0},
        "humidity:0": {"rh": 48},
        "devicepower:0": {"battery": {"percent": 5}},
    }


@pytest.fixture
def mock_api_client():
    """Mock HTTP API client."""
    client = MagicMock()
    client.server_url = "http://h"
    client.async_get_device_status = AsyncMock(return_value={})
    return client


@pytest.fixture
def poller(device_config, mock_api_client) -> ShellyHTPoller:
    return ShellyHTPoller(device_config, mock_api_client)
