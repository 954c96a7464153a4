"""Shelly H&T integration for Home Assistant."""

from __future__ import annotations

import logging
from typing import Optional, Callable

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform, EVENT_HOMEASSISTANT_STOP
from homeassistant.core import HomeAssistant, Event, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.dispatcher import async_dispatcher_send

from .const import DOMAIN, _LOGGER, CONF_DEVICE_ID, SIGNAL_UPDATE_FORMAT
from .core.api_client import ShellyHTApiClient
from .core.exceptions import ConfigurationError
from .core.poller import ShellyHTPoller
from .models.device_config import ShellyHTConfig
from .models.reading import ShellyHTReading

PLATFORMS: list[Platform] = [Platform.SENSOR, Platform.BINARY_SENSOR]


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up the Shelly H&T integration."""
    # Config flow is handled automatically by Home Assistant
    # when config_flow: true is set in manifest.json
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Shelly H&T from a config entry."""
    _LOGGER.info(f"Setting up Shelly H&T: {entry.title} ({entry.entry_id})")
    hass.data.setdefault(DOMAIN, {})

    try:
        config = ShellyHTConfig.from_mapping(entry.data, entry.options)
    except ConfigurationError as err:
        _LOGGER.error(f"Setup failed {entry.title}: {err}")
        return False

    poller: Optional[ShellyHTPoller] = None
    remove_listener: Optional[Callable] = None

    try:
        session = async_get_clientsession(hass)
        api_client = ShellyHTApiClient(session, config.server_url)
        poller = ShellyHTPoller(config, api_client)

        signal = SIGNAL_UPDATE_FORMAT.format(device_id=config.device_id)

        @callback
        def _forward_reading(reading: ShellyHTReading) -> None:
            """Push a new reading to the entities."""
            async_dispatcher_send(hass, signal, reading)

        remove_listener = poller.async_add_listener(_forward_reading)

        hass.data[DOMAIN][entry.entry_id] = {
            "config": config,
            "api_client": api_client,
            "poller": poller,
            "remove_listener": remove_listener,
        }

        poller.start()

        async def _async_stop_poller(event: Event) -> None:
            """Stop polling on Home Assistant stop."""
            _LOGGER.info("Home Assistant stop event received.")
            poller_to_stop = hass.data.get(DOMAIN, {}).get(entry.entry_id, {}).get("poller")
            if isinstance(poller_to_stop, ShellyHTPoller):
                await poller_to_stop.async_stop()

        entry.async_on_unload(hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_stop_poller))
        entry.async_on_unload(entry.add_update_listener(_async_update_listener))

        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
        _LOGGER.info(f"Setup complete for {entry.title} (ID: {config.device_id})")
        return True

    except Exception:
        _LOGGER.exception(f"Unexpected setup error {entry.title}")
        if callable(remove_listener):
            remove_listener()
        if isinstance(poller, ShellyHTPoller):
            await poller.async_stop()
        hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)
        return False


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry when options change."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    device_id = entry.data.get(CONF_DEVICE_ID, "unknown")
    _LOGGER.info(f"Unloading Shelly H&T: {entry.title} (ID: {device_id})")

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)

    if entry_data:
        remove_listener = entry_data.get("remove_listener")
        if callable(remove_listener):
            remove_listener()

        poller = entry_data.get("poller")
        if isinstance(poller, ShellyHTPoller):
            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Stopping poller %s.", device_id)
            try:
                await poller.async_stop()
            except Exception as stop_err:
                _LOGGER.warning(f"Error stopping poller during unload: {stop_err}")

        hass.data.get(DOMAIN, {}).pop(entry.entry_id, None)

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Removed entry data %s.", entry.entry_id)
    else:
        _LOGGER.warning(f"No entry data {entry.entry_id} to clean.")

    _LOGGER.info(f"Unload {entry.title}: {'OK' if unload_ok else 'Failed'}.")
    return unload_ok
