"""Device configuration model for Shelly H&T integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..const import (
    CONF_AUTH_KEY,
    CONF_DEVICE_ID,
    CONF_NAME,
    CONF_POLLING_INTERVAL,
    CONF_SERVER_URL,
    DEFAULT_NAME,
    DEFAULT_POLLING_INTERVAL,
    MIN_POLLING_INTERVAL,
    URL_DEVICE_STATUS,
)
from ..core.exceptions import ConfigurationError

REQUIRED_KEYS = (CONF_SERVER_URL, CONF_DEVICE_ID, CONF_AUTH_KEY)


@dataclass(frozen=True)
class ShellyHTConfig:
    """Immutable settings for one polled device."""

    server_url: str
    device_id: str
    auth_key: str
    polling_interval: float = DEFAULT_POLLING_INTERVAL
    name: str = DEFAULT_NAME

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> "ShellyHTConfig":
        """Build a config from config entry data.

        Args:
            data: Config entry data
            options: Config entry options, overriding the polling interval

        Raises:
            ConfigurationError: If a required key is missing or a value is invalid
        """
        missing = [
            key for key in REQUIRED_KEYS
            if not isinstance(data.get(key), str) or not data[key].strip()
        ]
        if missing:
            raise ConfigurationError(
                "Invalid configuration for Shelly H&T! Make sure "
                f"{', '.join(REQUIRED_KEYS)} are provided (missing: {', '.join(missing)})"
            )

        interval = data.get(CONF_POLLING_INTERVAL)
        if options and options.get(CONF_POLLING_INTERVAL) is not None:
            interval = options[CONF_POLLING_INTERVAL]
        if interval is None:
            interval = DEFAULT_POLLING_INTERVAL
        if isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0:
            raise ConfigurationError(f"Invalid polling interval: {interval!r}")
        if interval < MIN_POLLING_INTERVAL:
            raise ConfigurationError(
                f"Polling interval {interval}s is below the minimum of {MIN_POLLING_INTERVAL}s"
            )

        return cls(
            server_url=data[CONF_SERVER_URL].strip().rstrip("/"),
            device_id=data[CONF_DEVICE_ID].strip(),
            auth_key=data[CONF_AUTH_KEY].strip(),
            polling_interval=interval,
            name=str(data.get(CONF_NAME) or DEFAULT_NAME).strip() or DEFAULT_NAME,
        )

    @property
    def status_url(self) -> str:
        """Return the device status endpoint."""
        return f"{self.server_url}{URL_DEVICE_STATUS}"
