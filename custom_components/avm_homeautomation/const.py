"""Constants for the AVM Home Automation integration."""

DOMAIN = "avm_homeautomation"

# Configuration Keys
CONF_HOST = "host"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"

# Options Flow Keys
CONF_SCAN_INTERVAL = "scan_interval"

# Defaults
DEFAULT_HOST = "http://fritz.box"
DEFAULT_SCAN_INTERVAL = 30  # seconds
MIN_SCAN_INTERVAL = 10
