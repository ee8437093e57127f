"""Configuration for pyhabdroid."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from .const import (
    BACKOFF_EXPONENTIAL,
    BACKOFF_LINEAR,
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_BACKOFF,
    DEFAULT_TIMEOUT,
    ENV_PASSWORD,
    ENV_TIMEOUT,
    ENV_URL,
    ENV_USERNAME,
    ENV_VERIFY_SSL,
)
from .exceptions import ConfigError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
    """Where and how to reach the openHAB server."""

    base_url: str
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Normalize the base URL so relative REST paths can be appended."""
        if not self.base_url:
            err_msg = "A server base URL is required"
            raise ConfigError(err_msg)
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    @property
    def has_credentials(self) -> bool:
        """Return True if basic auth credentials are configured."""
        return bool(self.username)

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Read the configuration from environment variables."""
        base_url = os.getenv(ENV_URL)
        if not base_url:
            err_msg = f"Please set the {ENV_URL} environment variable."
            raise ConfigError(err_msg)

        raw_timeout = os.getenv(ENV_TIMEOUT)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as err:
            err_msg = f"{ENV_TIMEOUT} must be a number, got '{raw_timeout}'"
            raise ConfigError(err_msg) from err

        verify_ssl = os.getenv(ENV_VERIFY_SSL, "true").lower() not in (
            "0",
            "false",
            "no",
        )
        if not verify_ssl:
            _LOGGER.warning("SSL certificate verification is disabled.")

        return cls(
            base_url=base_url,
            username=os.getenv(ENV_USERNAME) or None,
            password=os.getenv(ENV_PASSWORD) or None,
            timeout=timeout,
            verify_ssl=verify_ssl,
        )


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff of the connection-absent retry loop."""

    initial_delay: float = DEFAULT_INITIAL_BACKOFF
    max_delay: float = DEFAULT_MAX_BACKOFF
    backoff: str = BACKOFF_EXPONENTIAL

    def __post_init__(self) -> None:
        """Validate the policy."""
        if self.backoff not in (BACKOFF_EXPONENTIAL, BACKOFF_LINEAR):
            err_msg = f"Unknown backoff strategy '{self.backoff}'"
            raise ConfigError(err_msg)
        if self.initial_delay < 0 or self.max_delay < 0:
            err_msg = "Retry policy values must not be negative"
            raise ConfigError(err_msg)

    def delay_for(self, attempt_number: int) -> float:
        """Return the delay before the attempt following ``attempt_number``."""
        if self.backoff == BACKOFF_LINEAR:
            delay = self.initial_delay * (attempt_number + 1)
        else:
            delay = self.initial_delay * (2**attempt_number)
        return min(delay, self.max_delay)
