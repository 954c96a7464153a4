"""Configuration flow for Shelly H&T integration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlowResult
from homeassistant.core import callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .const import (
    DOMAIN,
    CONF_AUTH_KEY,
    CONF_DEVICE_ID,
    CONF_NAME,
    CONF_POLLING_INTERVAL,
    CONF_SERVER_URL,
    DEFAULT_NAME,
    DEFAULT_POLLING_INTERVAL,
    MIN_POLLING_INTERVAL,
)
from .core.api_client import ShellyHTApiClient
from .core.exceptions import AuthError, ConfigurationError, NetworkError, UnsupportedDevice
from .core.status_parser import parse_device_status
from .models.device_config import ShellyHTConfig

_LOGGER = logging.getLogger(__name__)

POLLING_INTERVAL_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=MIN_POLLING_INTERVAL))


def _user_schema(defaults: Dict[str, Any]) -> vol.Schema:
    return vol.Schema(
        {
            vol.Required(CONF_SERVER_URL, default=defaults.get(CONF_SERVER_URL, "")): str,
            vol.Required(CONF_DEVICE_ID, default=defaults.get(CONF_DEVICE_ID, "")): str,
            vol.Required(CONF_AUTH_KEY, default=defaults.get(CONF_AUTH_KEY, "")): str,
            vol.Optional(CONF_NAME, default=defaults.get(CONF_NAME, DEFAULT_NAME)): str,
            vol.Optional(
                CONF_POLLING_INTERVAL,
                default=defaults.get(CONF_POLLING_INTERVAL, DEFAULT_POLLING_INTERVAL),
            ): POLLING_INTERVAL_VALIDATOR,
        }
    )


class ShellyHTConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Config flow for Shelly H&T (status server based)."""

    VERSION = 1

    async def _async_validate_input(self, user_input: Dict[str, Any]) -> ShellyHTConfig:
        """Validate the input by fetching the device status once.

        Raises:
            ConfigurationError: If a required field is missing
            NetworkError: If the status server cannot be queried
            UnsupportedDevice: If neither temperature nor humidity can be parsed
        """
        config = ShellyHTConfig.from_mapping(user_input)
        api = ShellyHTApiClient(async_get_clientsession(self.hass), config.server_url)

        _LOGGER.info("Validating device %s against %s", config.device_id, config.status_url)
        raw = await api.async_get_device_status(config.device_id, config.auth_key)

        parsed = parse_device_status(raw)
        if parsed.temperature is None and parsed.humidity is None:
            raise UnsupportedDevice(f"Unrecognized status shape: {parsed.errors}")

        _LOGGER.info(
            "Device %s detected as %s", config.device_id, parsed.generation.value
        )
        return config

    async def async_step_user(self, user_input: Optional[Dict[str, Any]] = None) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: Dict[str, str] = {}

        if user_input is not None:
            try:
                config = await self._async_validate_input(user_input)
            except ConfigurationError as exc:
                _LOGGER.warning(f"Invalid configuration: {exc}")
                errors["base"] = "invalid_config"
            except AuthError as exc:
                _LOGGER.warning(f"Auth failed {user_input.get(CONF_DEVICE_ID)}: {exc}")
                errors["base"] = "invalid_auth"
            except NetworkError as exc:
                _LOGGER.error(f"Cannot reach status server for {user_input.get(CONF_DEVICE_ID)}: {exc}")
                errors["base"] = "cannot_connect"
            except UnsupportedDevice as exc:
                _LOGGER.error(f"Unsupported device {user_input.get(CONF_DEVICE_ID)}: {exc}")
                errors["base"] = "unsupported_device"
            except Exception:
                _LOGGER.exception(f"Unexpected error validating {user_input.get(CONF_DEVICE_ID)}")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(config.device_id)
                self._abort_if_unique_id_configured()

                _LOGGER.info(f"Creating new entry for device ID: {config.device_id}")
                return self.async_create_entry(
                    title=config.name,
                    data={
                        CONF_SERVER_URL: config.server_url,
                        CONF_DEVICE_ID: config.device_id,
                        CONF_AUTH_KEY: config.auth_key,
                        CONF_NAME: config.name,
                        CONF_POLLING_INTERVAL: config.polling_interval,
                    },
                )

        return self.async_show_form(
            step_id="user", data_schema=_user_schema(user_input or {}), errors=errors
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> ShellyHTOptionsFlow:
        """Get the options flow for this handler."""
        return ShellyHTOptionsFlow()


class ShellyHTOptionsFlow(config_entries.OptionsFlow):
    """Options flow for the polling interval."""

    async def async_step_init(self, user_input: Optional[Dict[str, Any]] = None) -> ConfigFlowResult:
        """Manage the options."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current = self.config_entry.options.get(
            CONF_POLLING_INTERVAL,
            self.config_entry.data.get(CONF_POLLING_INTERVAL, DEFAULT_POLLING_INTERVAL),
        )
        schema = vol.Schema(
            {vol.Required(CONF_POLLING_INTERVAL, default=current): POLLING_INTERVAL_VALIDATOR}
        )
        return self.async_show_form(step_id="init", data_schema=schema)
