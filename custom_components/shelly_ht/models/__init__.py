"""Data models for Shelly H&T integration.

This package contains data models and validation.
"""

__all__ = [
    "ShellyHTConfig",
    "ShellyHTReading",
    "BatteryStatus",
    "DeviceGeneration",
]
