"""Sensor entities for Shelly H&T integration."""

from dataclasses import dataclass
from typing import Callable
import logging

from homeassistant.components.sensor import (
    SensorEntity,
    SensorEntityDescription,
    SensorDeviceClass,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN, QUANTITY_HUMIDITY, QUANTITY_TEMPERATURE
from ..core.poller import ShellyHTPoller
from .base_entity import ShellyHTBaseEntity, build_device_info

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ShellyHTSensorEntityDescription(SensorEntityDescription):
    """Sensor description with the poller getter to read from."""

    value_fn: Callable[[ShellyHTPoller], float]


SENSOR_DESCRIPTIONS: tuple[ShellyHTSensorEntityDescription, ...] = (
    ShellyHTSensorEntityDescription(
        key=QUANTITY_TEMPERATURE,
        name="Temperature",
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        suggested_display_precision=1,
        value_fn=lambda poller: poller.get_temperature(),
    ),
    ShellyHTSensorEntityDescription(
        key=QUANTITY_HUMIDITY,
        name="Humidity",
        native_unit_of_measurement=PERCENTAGE,
        device_class=SensorDeviceClass.HUMIDITY,
        state_class=SensorStateClass.MEASUREMENT,
        suggested_display_precision=0,
        value_fn=lambda poller: poller.get_humidity(),
    ),
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensor platform."""
    _LOGGER.debug(f"Setting up sensor platform for {entry.title}")

    try:
        poller: ShellyHTPoller = hass.data[DOMAIN][entry.entry_id]["poller"]
    except KeyError as exc:
        _LOGGER.error(f"Missing key {exc} for sensors")
        return

    device_info = build_device_info(poller)
    entities = [
        ShellyHTSensor(poller, device_info, description)
        for description in SENSOR_DESCRIPTIONS
    ]

    async_add_entities(entities)
    _LOGGER.info(f"Added {len(entities)} sensors for {poller.config.device_id}")


class ShellyHTSensor(ShellyHTBaseEntity, SensorEntity):
    """Temperature or humidity reading."""

    entity_description: ShellyHTSensorEntityDescription

    def _refresh_from_poller(self) -> None:
        self._attr_native_value = self.entity_description.value_fn(self._poller)
