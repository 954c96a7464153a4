"""Diagnostics support for Shelly H&T integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN, CONF_AUTH_KEY, CONF_DEVICE_ID
from .core.poller import ShellyHTPoller

TO_REDACT = {CONF_AUTH_KEY, "auth_key", "token", "password"}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id, {})

    diagnostics_data: dict[str, Any] = {
        "entry": {
            "entry_id": entry.entry_id,
            "title": entry.title,
            "data": async_redact_data(entry.data, TO_REDACT),
            "options": dict(entry.options),
        },
        "device": {
            "device_id": entry.data.get(CONF_DEVICE_ID, "unknown"),
        },
    }

    poller = entry_data.get("poller")
    if isinstance(poller, ShellyHTPoller):
        reading = poller.reading
        diagnostics_data["poller"] = {
            "state": poller.state.value,
            "running": poller.is_running,
            "status_url": poller.config.status_url,
            "polling_interval": poller.config.polling_interval,
            "generation": reading.generation.value if reading else None,
            "reading": reading.as_dict() if reading else None,
        }
    else:
        diagnostics_data["poller"] = {"status": "not_initialized"}

    return diagnostics_data
