"""Tests for device configuration validation."""

from __future__ import annotations

import pytest

from custom_components.shelly_ht.const import (
    CONF_AUTH_KEY,
    CONF_DEVICE_ID,
    CONF_POLLING_INTERVAL,
    CONF_SERVER_URL,
    DEFAULT_NAME,
    DEFAULT_POLLING_INTERVAL,
    MIN_POLLING_INTERVAL,
    REQUEST_TIMEOUT,
)
from custom_components.shelly_ht.core.exceptions import ConfigurationError
from custom_components.shelly_ht.models.device_config import ShellyHTConfig


def test_from_mapping_defaults():
    config = ShellyHTConfig.from_mapping(
        {CONF_SERVER_URL: "http://h/", CONF_DEVICE_ID: "d1", CONF_AUTH_KEY: "k"}
    )

    assert config.server_url == "http://h"
    assert config.status_url == "http://h/device/status"
    assert config.polling_interval == DEFAULT_POLLING_INTERVAL
    assert config.name == DEFAULT_NAME


def test_missing_device_id():
    """Test construction fails without a device id."""
    with pytest.raises(ConfigurationError) as exc_info:
        ShellyHTConfig.from_mapping({CONF_SERVER_URL: "http://h", CONF_AUTH_KEY: "k"})
    assert CONF_DEVICE_ID in str(exc_info.value)


@pytest.mark.parametrize("missing", [CONF_SERVER_URL, CONF_DEVICE_ID, CONF_AUTH_KEY])
def test_blank_required_field(missing):
    data = {CONF_SERVER_URL: "http://h", CONF_DEVICE_ID: "d1", CONF_AUTH_KEY: "k"}
    data[missing] = "  "

    with pytest.raises(ConfigurationError):
        ShellyHTConfig.from_mapping(data)


@pytest.mark.parametrize("interval", [0, -5, "30", True, 5, 10])
def test_invalid_polling_interval(interval):
    data = {
        CONF_SERVER_URL: "http://h",
        CONF_DEVICE_ID: "d1",
        CONF_AUTH_KEY: "k",
        CONF_POLLING_INTERVAL: interval,
    }

    with pytest.raises(ConfigurationError):
        ShellyHTConfig.from_mapping(data)


def test_options_override_polling_interval():
    data = {
        CONF_SERVER_URL: "http://h",
        CONF_DEVICE_ID: "d1",
        CONF_AUTH_KEY: "k",
        CONF_POLLING_INTERVAL: 30,
    }

    config = ShellyHTConfig.from_mapping(data, {CONF_POLLING_INTERVAL: 120})

    assert config.polling_interval == 120


def test_polling_interval_must_exceed_request_timeout():
    """Test the minimum interval leaves room for a request to time out."""
    assert MIN_POLLING_INTERVAL > REQUEST_TIMEOUT

    data = {
        CONF_SERVER_URL: "http://h",
        CONF_DEVICE_ID: "d1",
        CONF_AUTH_KEY: "k",
        CONF_POLLING_INTERVAL: REQUEST_TIMEOUT,
    }
    with pytest.raises(ConfigurationError):
        ShellyHTConfig.from_mapping(data)

    data[CONF_POLLING_INTERVAL] = MIN_POLLING_INTERVAL
    assert ShellyHTConfig.from_mapping(data).polling_interval == MIN_POLLING_INTERVAL
