"""Constants for pyhabdroid."""

# REST endpoints (relative to the server base URL)
ITEMS_ENDPOINT = "rest/items/"
ROOT_ENDPOINT = "rest/"


def item_path(item_name: str) -> str:
    """Return the REST path of a single item."""
    return f"{ITEMS_ENDPOINT}{item_name}"


# Sentinel command asking the updater to invert the current state
TOGGLE_COMMAND = "TOGGLE"

# Content type used when posting a new item state
ITEM_UPDATE_CONTENT_TYPE = "text/plain;charset=UTF-8"

# Synthetic status reported when the server response could not be interpreted
ITEM_LOAD_FAILED_STATUS = 500
# Synthetic statuses for transport failures
REQUEST_TIMEOUT_STATUS = 408
REQUEST_FAILED_STATUS = 500

# Retry policy defaults (mirror the Android work manager)
MAX_RETRIES = 10
DEFAULT_INITIAL_BACKOFF = 10.0
DEFAULT_MAX_BACKOFF = 5 * 60 * 60.0
BACKOFF_EXPONENTIAL = "exponential"
BACKOFF_LINEAR = "linear"

DEFAULT_TIMEOUT = 15

# Unit-of-work input record keys
INPUT_DATA_ITEM_NAME = "item"
INPUT_DATA_LABEL = "label"
INPUT_DATA_VALUE = "value"
INPUT_DATA_MAPPED_VALUE = "mappedValue"
INPUT_DATA_SHOW_TOAST = "showToast"

# Unit-of-work output record keys
OUTPUT_DATA_HAS_CONNECTION = "hasConnection"
OUTPUT_DATA_HTTP_STATUS = "httpStatus"
OUTPUT_DATA_ITEM_NAME = "item"
OUTPUT_DATA_LABEL = "label"
OUTPUT_DATA_VALUE = "value"
OUTPUT_DATA_MAPPED_VALUE = "mappedValue"
OUTPUT_DATA_SHOW_TOAST = "showToast"
OUTPUT_DATA_TIMESTAMP = "timestamp"

# Environment variables read by ServerConfig.from_env
ENV_URL = "OPENHAB_URL"
ENV_USERNAME = "OPENHAB_USERNAME"
ENV_PASSWORD = "OPENHAB_PASSWORD"
ENV_TIMEOUT = "OPENHAB_TIMEOUT"
ENV_VERIFY_SSL = "OPENHAB_VERIFY_SSL"

# Screen lock
AUTHENTICATION_VALIDITY_PERIOD = 2 * 60.0  # seconds

DEFAULT_APP_VERSION = "2.9.0"


def build_user_agent(app_version: str = DEFAULT_APP_VERSION) -> str:
    """Build the User-Agent string sent to the server."""
    return f"openHAB client for Python/{app_version}"
