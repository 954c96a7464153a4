"""Reading models for Shelly H&T integration."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional


class DeviceGeneration(str, Enum):
    """Firmware generation inferred from the status payload."""

    GEN1 = "gen1"
    GEN3 = "gen3"
    UNKNOWN = "unknown"


class BatteryStatus(IntEnum):
    """Battery status, numbered like HomeKit's StatusLowBattery."""

    NORMAL = 0
    LOW = 1


class PollerState(str, Enum):
    """Whether the poller has cached a reading yet."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


@dataclass(frozen=True)
class ShellyHTReading:
    """Canonical reading, replaced wholesale on every successful fetch."""

    temperature: Optional[float]
    humidity: Optional[float]
    battery_low: bool
    generation: DeviceGeneration
    fetched_at: float
    battery_percent: Optional[float] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def battery_status(self) -> BatteryStatus:
        return BatteryStatus.LOW if self.battery_low else BatteryStatus.NORMAL

    def as_dict(self) -> Dict[str, object]:
        """Return a JSON friendly view of the reading."""
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "battery_low": self.battery_low,
            "battery_percent": self.battery_percent,
            "generation": self.generation.value,
            "fetched_at": self.fetched_at,
            "errors": dict(self.errors),
        }
