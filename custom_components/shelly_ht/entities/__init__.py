"""Entity implementations for Shelly H&T integration.

This package contains all entity types:
- Sensors
- Binary sensors
- Base entity classes
"""

__all__ = [
    "ShellyHTBaseEntity",
    "ShellyHTSensor",
    "ShellyHTBatterySensor",
]
