"""Binary sensor entities for Shelly H&T integration."""

import logging

from homeassistant.components.binary_sensor import (
    BinarySensorEntity,
    BinarySensorEntityDescription,
    BinarySensorDeviceClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN, QUANTITY_BATTERY
from ..core.poller import ShellyHTPoller
from ..models.reading import BatteryStatus
from .base_entity import ShellyHTBaseEntity, build_device_info

_LOGGER = logging.getLogger(__name__)

BATTERY_DESCRIPTION = BinarySensorEntityDescription(
    key=QUANTITY_BATTERY,
    name="Battery",
    device_class=BinarySensorDeviceClass.BATTERY,
    entity_category=EntityCategory.DIAGNOSTIC,
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up binary sensor platform."""
    _LOGGER.debug(f"Setting up binary sensor platform for {entry.title}")

    try:
        poller: ShellyHTPoller = hass.data[DOMAIN][entry.entry_id]["poller"]
    except KeyError as exc:
        _LOGGER.error(f"Missing key {exc} for binary sensors")
        return

    async_add_entities([ShellyHTBatterySensor(poller, build_device_info(poller), BATTERY_DESCRIPTION)])
    _LOGGER.info(f"Added battery sensor for {poller.config.device_id}")


class ShellyHTBatterySensor(ShellyHTBaseEntity, BinarySensorEntity):
    """On when the battery is low."""

    def _refresh_from_poller(self) -> None:
        self._attr_is_on = self._poller.get_battery_status() is BatteryStatus.LOW
