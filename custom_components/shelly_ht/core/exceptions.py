"""Custom exceptions for Shelly H&T integration."""


class ShellyHTException(Exception):
    """Base exception for Shelly H&T integration."""

    pass


class ConfigurationError(ShellyHTException):
    """Exception for missing or invalid configuration."""

    pass


class NetworkError(ShellyHTException):
    """Exception for transport and HTTP status errors."""

    pass


class AuthError(NetworkError):
    """Exception for rejected authorization keys."""

    pass


class ResponseError(NetworkError):
    """Exception for response bodies that cannot be used."""

    pass


class ParseException(ShellyHTException):
    """Exception for device status parsing errors."""

    pass


class UnrecognizedShape(ParseException):
    """Raised when a quantity matches neither known device generation."""

    def __init__(self, quantity: str, message: str = "") -> None:
        self.quantity = quantity
        super().__init__(message or f"Unrecognized status shape for {quantity}")


class DataUnavailable(ShellyHTException):
    """Raised when a reading is requested before the first successful fetch."""

    def __init__(self, quantity: str) -> None:
        self.quantity = quantity
        super().__init__(f"{quantity.capitalize()} data unavailable")


class UnsupportedDevice(ParseException):
    """Raised when the status server answers without any known H&T layout."""

    pass
