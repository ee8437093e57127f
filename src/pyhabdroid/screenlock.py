"""Re-authentication gating for screens protected by the device lock."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
import time

from .const import AUTHENTICATION_VALIDITY_PERIOD

_LOGGER = logging.getLogger(__name__)

UNLOCK_SCREEN_DESCRIPTION = "Unlock to access openHAB"
UNLOCK_PREFERENCES_DESCRIPTION = "Unlock to change the openHAB settings"


class ScreenLockMode(Enum):
    """When the device credential has to be entered."""

    DISABLED = "disabled"
    ENABLED = "enabled"
    KIOSK_MODE = "kiosk"

    @classmethod
    def from_preference(cls, raw: str | None) -> ScreenLockMode:
        """Parse a preference value, defaulting to DISABLED."""
        try:
            return cls(raw)
        except ValueError:
            _LOGGER.warning("Unknown screen lock mode '%s', assuming disabled", raw)
            return cls.DISABLED


class AuthenticationState:
    """Process-wide time of the last successful authentication.

    A timestamp of 0 means "not authenticated".
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the state as not authenticated."""
        self.clock = clock
        self.last_authentication_timestamp = 0.0

    def mark_authenticated(self) -> None:
        """Record a successful authentication now."""
        self.last_authentication_timestamp = self.clock()

    def reset(self) -> None:
        """Forget the last authentication."""
        self.last_authentication_timestamp = 0.0


AUTHENTICATION_STATE = AuthenticationState()


def does_lock_mode_require_prompt(mode: ScreenLockMode) -> bool:
    """Return True if the mode protects regular screens."""
    return mode != ScreenLockMode.DISABLED


def timestamp_needs_reauth(
    timestamp: float,
    now: float,
    validity: float = AUTHENTICATION_VALIDITY_PERIOD,
) -> bool:
    """Return True if an authentication at ``timestamp`` is no longer valid."""
    return timestamp == 0 or now - timestamp > validity


def prompt_description(mode: ScreenLockMode) -> str:
    """Return the text shown in the credential prompt."""
    if mode == ScreenLockMode.KIOSK_MODE:
        return UNLOCK_PREFERENCES_DESCRIPTION
    return UNLOCK_SCREEN_DESCRIPTION


class ScreenLockGate:
    """Decides when a screen must ask for the device credential.

    One gate belongs to one screen; the authentication timestamp is shared
    by all screens through :data:`AUTHENTICATION_STATE`.
    """

    def __init__(
        self,
        requires_prompt: Callable[[ScreenLockMode], bool] = does_lock_mode_require_prompt,
        state: AuthenticationState | None = None,
    ) -> None:
        """Initialize the gate."""
        self._requires_prompt = requires_prompt
        self._state = state or AUTHENTICATION_STATE
        self.prompt_pending = False

    def on_start(self, mode: ScreenLockMode, device_secure: bool) -> bool:
        """Return True if the screen has to show the credential prompt now."""
        if self.prompt_pending:
            return False
        if not self._requires_prompt(mode):
            # Going to a screen without lock resets the timestamp, so that the
            # prompt re-appears when returning to a locked screen
            self._state.reset()
            return False
        if not timestamp_needs_reauth(
            self._state.last_authentication_timestamp, self._state.clock()
        ):
            return False
        if not device_secure:
            _LOGGER.debug("Device has no secure lock screen, not prompting")
            return False
        self.prompt_pending = True
        return True

    def on_authentication_succeeded(self) -> None:
        """Record the authentication and clear the pending prompt."""
        self._state.mark_authenticated()
        self.prompt_pending = False

    def on_authentication_error(self) -> bool:
        """Clear the pending prompt; return True as the screen must close."""
        _LOGGER.info("Authentication failed or was cancelled")
        self.prompt_pending = False
        return True
