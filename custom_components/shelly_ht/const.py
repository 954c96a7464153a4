# /config/custom_components/shelly_ht/const.py

import logging
from typing import Final

DOMAIN: Final = "shelly_ht"
_LOGGER = logging.getLogger(__package__)

# --- HTTP API Constants ---
URL_DEVICE_STATUS: Final = "/device/status"
REQUEST_TIMEOUT: Final = 10  # seconds, below MIN_POLLING_INTERVAL

DEFAULT_HEADERS: Final = {
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
}

# --- Configuration Keys ---
CONF_SERVER_URL: Final = "server_url"
CONF_DEVICE_ID: Final = "device_id"
CONF_AUTH_KEY: Final = "auth_key"
CONF_POLLING_INTERVAL: Final = "polling_interval"
CONF_NAME: Final = "name"

# --- Defaults ---
DEFAULT_NAME: Final = "Shelly H&T"
DEFAULT_POLLING_INTERVAL: Final = 30  # seconds
MIN_POLLING_INTERVAL: Final = REQUEST_TIMEOUT + 5  # a request must finish before the next tick

# --- Battery ---
BATTERY_LOW_THRESHOLD: Final = 10  # gen-1 raw value or gen-3 percent

# --- Raw status keys ---
# Gen-1 firmware
KEY_GEN1_TEMPERATURE: Final = "tmp"
KEY_GEN1_HUMIDITY: Final = "hum"
KEY_GEN1_BATTERY: Final = "bat"
# Gen-3 firmware
KEY_GEN3_TEMPERATURE: Final = "temperature:0"
KEY_GEN3_HUMIDITY: Final = "humidity:0"
KEY_GEN3_DEVICE_POWER: Final = "devicepower:0"

KEY_CLOUD: Final = "cloud"

# --- Reading quantities ---
QUANTITY_TEMPERATURE: Final = "temperature"
QUANTITY_HUMIDITY: Final = "humidity"
QUANTITY_BATTERY: Final = "battery"

# --- Dispatcher Signal ---
SIGNAL_UPDATE_FORMAT: Final = f"{DOMAIN}_update_{{device_id}}"

MANUFACTURER: Final = "Shelly"
