"""Constants for the Griddy Price integration."""

from datetime import timedelta

DOMAIN = "griddy_price"

# Config entry data keys (immutable after creation)
CONF_METER_ID = "meter_id"
CONF_MEMBER_ID = "member_id"
CONF_SETTLEMENT_POINT = "settlement_point"

# Misspelling used by older add-on manifests; rejected explicitly
LEGACY_CONF_SETTLEMENT_POINT = "settilement_point"

# Options keys (changeable via options flow)
CONF_SCAN_INTERVAL = "scan_interval"

# Upstream endpoint
API_URL = "https://app.gogriddy.com/api/v1/insights/getnow"
API_REQUEST_TIMEOUT = 30  # seconds, whole request
API_CONNECT_TIMEOUT = 10  # seconds

# Polling
MIN_POLL_INTERVAL = timedelta(minutes=1)
DEFAULT_POLL_INTERVAL = MIN_POLL_INTERVAL

# Reading format
PRICE_UNIT_SUFFIX = "/kWh"
NEGATIVE_SIGN = "-"

# Sensor
SENSOR_KEY = "cost"
SENSOR_NAME = "Energy Cost"
SENSOR_UNIT = "¢"
DEVICE_NAME = "Griddy Price"
DEVICE_MANUFACTURER = "Griddy"
DEVICE_MODEL = "MultiLevelSensor"
