"""Core logic for Shelly H&T integration.

This package contains the core functionality:
- API client for the device status server
- Status parser for gen-1 and gen-3 payloads
- Poller holding the latest reading
- Custom exceptions
"""

__all__ = [
    "ShellyHTApiClient",
    "ShellyHTPoller",
    "parse_device_status",
    "ShellyHTException",
    "ConfigurationError",
    "NetworkError",
    "AuthError",
    "ResponseError",
    "ParseException",
    "UnrecognizedShape",
    "UnsupportedDevice",
    "DataUnavailable",
]
