"""Device status parser for Shelly H&T integration.

This module classifies the raw `device_status` payload returned by the
status server. First generation and third generation firmware report the
same sensor with different layouts:

    Gen-1: {"tmp": {"tC": ..}, "hum": {"value": ..}, "bat": {"value": ..}}
    Gen-3: {"temperature:0": {"tC": ..}, "humidity:0": {"rh": ..},
            "devicepower:0": {"battery": {"percent": ..}}}

Every quantity is looked up on its own, gen-1 first, so a payload that mixes
both layouts still resolves whatever it can.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import logging

from ..const import (
    BATTERY_LOW_THRESHOLD,
    KEY_CLOUD,
    KEY_GEN1_BATTERY,
    KEY_GEN1_HUMIDITY,
    KEY_GEN1_TEMPERATURE,
    KEY_GEN3_DEVICE_POWER,
    KEY_GEN3_HUMIDITY,
    KEY_GEN3_TEMPERATURE,
    QUANTITY_HUMIDITY,
    QUANTITY_TEMPERATURE,
)
from ..models.reading import DeviceGeneration
from .exceptions import UnrecognizedShape

_LOGGER = logging.getLogger(__name__)

KeyPath = Tuple[DeviceGeneration, Tuple[str, ...]]

# Ordered, first match wins
TEMPERATURE_PATHS: Tuple[KeyPath, ...] = (
    (DeviceGeneration.GEN1, (KEY_GEN1_TEMPERATURE, "tC")),
    (DeviceGeneration.GEN3, (KEY_GEN3_TEMPERATURE, "tC")),
)
HUMIDITY_PATHS: Tuple[KeyPath, ...] = (
    (DeviceGeneration.GEN1, (KEY_GEN1_HUMIDITY, "value")),
    (DeviceGeneration.GEN3, (KEY_GEN3_HUMIDITY, "rh")),
)
BATTERY_PATHS: Tuple[KeyPath, ...] = (
    (DeviceGeneration.GEN1, (KEY_GEN1_BATTERY, "value")),
    (DeviceGeneration.GEN3, (KEY_GEN3_DEVICE_POWER, "battery", "percent")),
)

GEN1_KEYS = (KEY_GEN1_TEMPERATURE, KEY_GEN1_HUMIDITY, KEY_GEN1_BATTERY)
GEN3_KEYS = (KEY_GEN3_TEMPERATURE, KEY_GEN3_HUMIDITY, KEY_GEN3_DEVICE_POWER)


@dataclass(frozen=True)
class ParsedStatus:
    """Result of parsing one payload, with per quantity failures."""

    generation: DeviceGeneration
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    battery_percent: Optional[float] = None
    battery_low: bool = False
    errors: Dict[str, str] = field(default_factory=dict)


def _lookup(raw: Dict[str, Any], path: Tuple[str, ...]) -> Optional[float]:
    """Walk a key path and return the number at its end, if any."""
    node: Any = raw
    for key in path:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    # bool is an int subclass but never a valid reading
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        return None
    return float(node)


def _first_match(
    raw: Dict[str, Any], paths: Tuple[KeyPath, ...]
) -> Optional[Tuple[DeviceGeneration, float]]:
    for generation, path in paths:
        value = _lookup(raw, path)
        if value is not None:
            return generation, value
    return None


def detect_generation(raw: Dict[str, Any]) -> DeviceGeneration:
    """Classify the payload as a whole.

    Returns:
        GEN1 if any gen-1 key is present, else GEN3 if any gen-3 key is
        present, else UNKNOWN
    """
    if not isinstance(raw, dict):
        return DeviceGeneration.UNKNOWN
    if any(key in raw for key in GEN1_KEYS):
        return DeviceGeneration.GEN1
    if any(key in raw for key in GEN3_KEYS):
        return DeviceGeneration.GEN3
    return DeviceGeneration.UNKNOWN


def parse_temperature(raw: Dict[str, Any]) -> float:
    """Return the temperature in Celsius.

    Raises:
        UnrecognizedShape: If neither `tmp.tC` nor `temperature:0.tC` is present
    """
    match = _first_match(raw, TEMPERATURE_PATHS)
    if match is None:
        raise UnrecognizedShape(QUANTITY_TEMPERATURE)
    return match[1]


def parse_humidity(raw: Dict[str, Any]) -> float:
    """Return the relative humidity in percent.

    Raises:
        UnrecognizedShape: If neither `hum.value` nor `humidity:0.rh` is present
    """
    match = _first_match(raw, HUMIDITY_PATHS)
    if match is None:
        raise UnrecognizedShape(QUANTITY_HUMIDITY)
    return match[1]


def parse_battery(raw: Dict[str, Any]) -> Tuple[bool, Optional[float]]:
    """Return (battery_low, battery_level).

    A payload without battery data is reported as not low.
    """
    match = _first_match(raw, BATTERY_PATHS)
    if match is None:
        return False, None
    level = match[1]
    return level < BATTERY_LOW_THRESHOLD, level


def is_cloud_disabled(raw: Dict[str, Any]) -> bool:
    """Check whether the device reports Shelly Cloud as off.

    Payloads without a `cloud` object are not considered disabled.
    """
    cloud = raw.get(KEY_CLOUD) if isinstance(raw, dict) else None
    if not isinstance(cloud, dict):
        return False
    return not (cloud.get("enabled") or cloud.get("connected"))


def parse_device_status(raw: Dict[str, Any]) -> ParsedStatus:
    """Parse a raw `device_status` object.

    Failures are recorded per quantity in `errors` instead of raised, so a
    broken temperature never hides a valid humidity.
    """
    if not isinstance(raw, dict):
        message = f"Device status is not an object: {type(raw).__name__}"
        return ParsedStatus(
            generation=DeviceGeneration.UNKNOWN,
            errors={QUANTITY_TEMPERATURE: message, QUANTITY_HUMIDITY: message},
        )

    errors: Dict[str, str] = {}
    temperature: Optional[float] = None
    humidity: Optional[float] = None

    try:
        temperature = parse_temperature(raw)
    except UnrecognizedShape as err:
        errors[QUANTITY_TEMPERATURE] = str(err)

    try:
        humidity = parse_humidity(raw)
    except UnrecognizedShape as err:
        errors[QUANTITY_HUMIDITY] = str(err)

    battery_low, battery_percent = parse_battery(raw)

    generation = detect_generation(raw)
    if errors and _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug(
            "Partial status parse (generation=%s, keys=%s): %s",
            generation.value,
            sorted(raw.keys()),
            errors,
        )

    return ParsedStatus(
        generation=generation,
        temperature=temperature,
        humidity=humidity,
        battery_percent=battery_percent,
        battery_low=battery_low,
        errors=errors,
    )


__all__ = [
    "ParsedStatus",
    "detect_generation",
    "parse_temperature",
    "parse_humidity",
    "parse_battery",
    "parse_device_status",
    "is_cloud_disabled",
]
