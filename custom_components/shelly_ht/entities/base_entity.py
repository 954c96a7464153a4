"""Base entity class for Shelly H&T integration."""

from typing import Callable, Optional
import logging

from homeassistant.core import callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.entity import DeviceInfo, Entity, EntityDescription

from ..const import DOMAIN, MANUFACTURER, SIGNAL_UPDATE_FORMAT
from ..core.exceptions import DataUnavailable, UnrecognizedShape
from ..core.poller import ShellyHTPoller
from ..models.reading import ShellyHTReading

_LOGGER = logging.getLogger(__name__)


def build_device_info(poller: ShellyHTPoller) -> DeviceInfo:
    """Describe the physical sensor behind a poller."""
    config = poller.config
    return DeviceInfo(
        identifiers={(DOMAIN, config.device_id)},
        name=config.name,
        manufacturer=MANUFACTURER,
        model="H&T",
    )


class ShellyHTBaseEntity(Entity):
    """Base class for Shelly H&T entities.

    Subclasses implement `_refresh_from_poller`, which reads through the
    poller getters and may raise DataUnavailable or UnrecognizedShape.
    """

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        poller: ShellyHTPoller,
        device_info: DeviceInfo,
        description: EntityDescription,
    ) -> None:
        """Initialize base entity.

        Args:
            poller: Poller holding the device reading
            device_info: Device information
            description: Entity description
        """
        self._poller = poller
        self.entity_description = description
        self._attr_device_info = device_info
        self._attr_unique_id = f"{poller.config.device_id}_{description.key}"
        self._attr_available = False
        self._remove_dispatcher: Optional[Callable] = None

    @property
    def device_id(self) -> str:
        """Return device identifier."""
        return self._poller.config.device_id

    def _refresh_from_poller(self) -> None:
        raise NotImplementedError

    def _refresh(self) -> None:
        try:
            self._refresh_from_poller()
            self._attr_available = True
        except (DataUnavailable, UnrecognizedShape) as err:
            if self._attr_available and _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("%s unavailable: %s", self.unique_id, err)
            self._attr_available = False

    @callback
    def _handle_update(self, reading: ShellyHTReading) -> None:
        """Handle updates from the dispatcher."""
        self._refresh()
        self.async_write_ha_state()

    async def async_added_to_hass(self) -> None:
        """Register dispatcher connection."""
        signal = SIGNAL_UPDATE_FORMAT.format(device_id=self.device_id)
        self._remove_dispatcher = async_dispatcher_connect(self.hass, signal, self._handle_update)
        self._refresh()
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Entity %s registered", self.unique_id)

    async def async_will_remove_from_hass(self) -> None:
        """Unregister dispatcher connection."""
        if self._remove_dispatcher:
            self._remove_dispatcher()
            self._remove_dispatcher = None
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Entity %s unregistered", self.unique_id)
