"""Custom exceptions for pyhabdroid."""


class PyHabdroidException(Exception):
    """Base class for pyhabdroid exceptions."""


class ConfigError(PyHabdroidException):
    """Raised when the configuration is incomplete or invalid."""


class AuthError(PyHabdroidException):
    """Raised when the server rejects the configured credentials."""


class ConnectionUnavailable(PyHabdroidException):
    """Raised when no usable server connection could be obtained."""


class ItemLoadParseError(PyHabdroidException):
    """Raised when an item representation returned by the server is malformed."""

    def __init__(self, item_name: str, reason: str) -> None:
        """Initialize the parse error."""
        self.item_name = item_name
        self.reason = reason
        super().__init__(f"Failed parsing item '{item_name}': {reason}")


class HttpError(PyHabdroidException):
    """Raised when an HTTP call fails."""

    def __init__(self, status_code: int, error_message: str) -> None:
        """Initialize the HTTP error."""
        self.status_code = status_code
        self.error_message = error_message
        super().__init__(f"HTTP Error {status_code}: {error_message}")


class ConnectionLostError(HttpError):
    """Raised when the server could not be reached over an existing connection."""
