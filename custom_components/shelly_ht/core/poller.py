"""Device state poller for Shelly H&T integration."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional

from ..const import QUANTITY_BATTERY, QUANTITY_HUMIDITY, QUANTITY_TEMPERATURE
from ..models.device_config import ShellyHTConfig
from ..models.reading import BatteryStatus, PollerState, ShellyHTReading
from .api_client import ShellyHTApiClient
from .exceptions import DataUnavailable, NetworkError, UnrecognizedShape
from .status_parser import is_cloud_disabled, parse_device_status

_LOGGER = logging.getLogger(__name__)

ReadingListener = Callable[[ShellyHTReading], None]


class ShellyHTPoller:
    """Keeps the latest reading of one device and serves it from memory.

    The poll is the only writer. It replaces the cached reading with a new
    frozen object, so getters always see one complete snapshot.
    """

    __slots__ = (
        "config",
        "api_client",
        "_reading",
        "_listeners",
        "_fetch_lock",
        "_task",
        "_cloud_warned",
    )

    def __init__(self, config: ShellyHTConfig, api_client: ShellyHTApiClient) -> None:
        """Initialize the poller.

        Args:
            config: Validated device configuration
            api_client: Client for the device status server
        """
        self.config = config
        self.api_client = api_client
        self._reading: Optional[ShellyHTReading] = None
        self._listeners: List[ReadingListener] = []
        self._fetch_lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self._cloud_warned = False

    @property
    def reading(self) -> Optional[ShellyHTReading]:
        return self._reading

    @property
    def state(self) -> PollerState:
        if self._reading is None:
            return PollerState.UNINITIALIZED
        return PollerState.READY

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ---------------------------
    # Listeners
    # ---------------------------

    def async_add_listener(self, update_callback: ReadingListener) -> Callable[[], None]:
        """Register a consumer called with every new reading.

        Returns:
            Callable removing the listener
        """
        self._listeners.append(update_callback)

        def _remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return _remove_listener

    def _notify_listeners(self, reading: ShellyHTReading) -> None:
        for listener in list(self._listeners):
            try:
                listener(reading)
            except Exception:
                _LOGGER.exception(f"Error in reading listener for {self.config.device_id}")

    # ---------------------------
    # Polling
    # ---------------------------

    async def async_fetch_and_update(self) -> bool:
        """Fetch the device status and replace the cached reading.

        Errors are logged and swallowed, the previous reading stays in place.
        A call made while another fetch is in flight is skipped.

        Returns:
            True if the cached reading was replaced
        """
        if self._fetch_lock.locked():
            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Fetch already in flight for %s, skipping", self.config.device_id)
            return False

        async with self._fetch_lock:
            try:
                raw = await self.api_client.async_get_device_status(
                    self.config.device_id, self.config.auth_key
                )
            except NetworkError as err:
                _LOGGER.error(f"Error fetching data from HTTP server for {self.config.device_id}: {err}")
                return False
            except Exception:
                _LOGGER.exception(f"Unexpected error fetching data for {self.config.device_id}")
                return False

            reading = self._build_reading(raw)
            self._reading = reading

        self._check_cloud(raw)

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("New reading for %s: %s", self.config.device_id, reading.as_dict())

        self._notify_listeners(reading)
        return True

    def _build_reading(self, raw: dict) -> ShellyHTReading:
        """Merge a parsed payload with the last known good values."""
        parsed = parse_device_status(raw)
        previous = self._reading
        errors = dict(parsed.errors)

        temperature = parsed.temperature
        if temperature is None and previous is not None and previous.temperature is not None:
            _LOGGER.warning(
                f"Temperature missing in status of {self.config.device_id}, keeping last value"
            )
            temperature = previous.temperature
            errors.pop(QUANTITY_TEMPERATURE, None)

        humidity = parsed.humidity
        if humidity is None and previous is not None and previous.humidity is not None:
            _LOGGER.warning(
                f"Humidity missing in status of {self.config.device_id}, keeping last value"
            )
            humidity = previous.humidity
            errors.pop(QUANTITY_HUMIDITY, None)

        return ShellyHTReading(
            temperature=temperature,
            humidity=humidity,
            battery_low=parsed.battery_low,
            battery_percent=parsed.battery_percent,
            generation=parsed.generation,
            fetched_at=time.time(),
            errors=errors,
        )

    def _check_cloud(self, raw: dict) -> None:
        disabled = is_cloud_disabled(raw)
        if disabled and not self._cloud_warned:
            _LOGGER.warning(f"Shelly Cloud is not enabled for device {self.config.device_id}")
        self._cloud_warned = disabled

    async def _async_poll_loop(self) -> None:
        interval = self.config.polling_interval
        while True:
            await self.async_fetch_and_update()
            await asyncio.sleep(interval)

    def start(self) -> None:
        """Start polling: fetch now, then every polling_interval seconds."""
        if self.is_running:
            _LOGGER.warning(f"Poller for {self.config.device_id} already running")
            return
        self._task = asyncio.get_running_loop().create_task(
            self._async_poll_loop(), name=f"shelly_ht_poll_{self.config.device_id}"
        )
        _LOGGER.info(
            f"Started polling {self.config.status_url} every "
            f"{self.config.polling_interval}s for {self.config.device_id}"
        )

    async def async_stop(self) -> None:
        """Cancel the polling loop and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        _LOGGER.info(f"Stopped polling for {self.config.device_id}")

    # ---------------------------
    # Queries
    # ---------------------------

    def _require_reading(self, quantity: str) -> ShellyHTReading:
        reading = self._reading
        if reading is None:
            raise DataUnavailable(quantity)
        return reading

    def get_temperature(self) -> float:
        """Return the cached temperature in Celsius.

        Raises:
            DataUnavailable: If no reading has been cached yet
            UnrecognizedShape: If the temperature was never resolved
        """
        reading = self._require_reading(QUANTITY_TEMPERATURE)
        if reading.temperature is None:
            raise UnrecognizedShape(
                QUANTITY_TEMPERATURE, reading.errors.get(QUANTITY_TEMPERATURE, "")
            )
        return reading.temperature

    def get_humidity(self) -> float:
        """Return the cached relative humidity.

        Raises:
            DataUnavailable: If no reading has been cached yet
            UnrecognizedShape: If the humidity was never resolved
        """
        reading = self._require_reading(QUANTITY_HUMIDITY)
        if reading.humidity is None:
            raise UnrecognizedShape(
                QUANTITY_HUMIDITY, reading.errors.get(QUANTITY_HUMIDITY, "")
            )
        return reading.humidity

    def get_battery_status(self) -> BatteryStatus:
        """Return LOW or NORMAL.

        Raises:
            DataUnavailable: If no reading has been cached yet
        """
        return self._require_reading(QUANTITY_BATTERY).battery_status
