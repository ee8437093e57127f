"""Python library for pushing item updates to an openHAB server."""

# Import main classes for easier access
from .config import RetryPolicy, ServerConfig
from .connection import Connection, ConnectionFactory, HttpClient, HttpResult
from .models import (
    Item,
    ItemType,
    ParsedState,
    RetrySignal,
    UpdateOutcome,
    UpdateRequest,
)
from .notifications import LoggingNotificationSink, NotificationSink
from .scheduler import ItemUpdateScheduler
from .screenlock import ScreenLockGate, ScreenLockMode
from .updater import ItemUpdater, determine_opposite_state

# Import exceptions for easier handling
from .exceptions import (
    AuthError,
    ConfigError,
    ConnectionLostError,
    ConnectionUnavailable,
    HttpError,
    ItemLoadParseError,
    PyHabdroidException,
)

__version__ = "0.1.0"

# Define what gets imported with 'from pyhabdroid import *'
__all__ = [
    "AuthError",
    "ConfigError",
    "Connection",
    "ConnectionFactory",
    "ConnectionLostError",
    "ConnectionUnavailable",
    "HttpClient",
    "HttpError",
    "HttpResult",
    "Item",
    "ItemLoadParseError",
    "ItemType",
    "ItemUpdateScheduler",
    "ItemUpdater",
    "LoggingNotificationSink",
    "NotificationSink",
    "ParsedState",
    "PyHabdroidException",
    "RetryPolicy",
    "RetrySignal",
    "ScreenLockGate",
    "ScreenLockMode",
    "ServerConfig",
    "UpdateOutcome",
    "UpdateRequest",
    "__version__",
    "determine_opposite_state",
]
