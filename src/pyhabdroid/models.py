"""Data models for pyhabdroid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import time
from typing import Any

from .const import (
    INPUT_DATA_ITEM_NAME,
    INPUT_DATA_LABEL,
    INPUT_DATA_MAPPED_VALUE,
    INPUT_DATA_SHOW_TOAST,
    INPUT_DATA_VALUE,
    OUTPUT_DATA_HAS_CONNECTION,
    OUTPUT_DATA_HTTP_STATUS,
    OUTPUT_DATA_ITEM_NAME,
    OUTPUT_DATA_LABEL,
    OUTPUT_DATA_MAPPED_VALUE,
    OUTPUT_DATA_SHOW_TOAST,
    OUTPUT_DATA_TIMESTAMP,
    OUTPUT_DATA_VALUE,
)
from .exceptions import ConnectionUnavailable, HttpError

# Raw server states meaning "no state"
UNDEFINED_STATES = ("NULL", "UNDEF", "undefined")


class ItemType(Enum):
    """Types of openHAB items."""

    NONE = "None"
    CALL = "Call"
    COLOR = "Color"
    CONTACT = "Contact"
    DATE_TIME = "DateTime"
    DIMMER = "Dimmer"
    GROUP = "Group"
    IMAGE = "Image"
    LOCATION = "Location"
    NUMBER = "Number"
    NUMBER_WITH_DIMENSION = "NumberWithDimension"
    PLAYER = "Player"
    ROLLERSHUTTER = "Rollershutter"
    STRING_ITEM = "StringItem"
    SWITCH = "Switch"

    @classmethod
    def from_server(cls, raw: str | None) -> ItemType:
        """Map a server type string to an ItemType.

        Handles the openHAB 1 style suffix (``SwitchItem``) and
        dimension-qualified numbers (``Number:Temperature``).
        """
        if not raw:
            return cls.NONE
        if raw.endswith("Item"):
            raw = raw[: -len("Item")]
        if raw.startswith("Number:"):
            return cls.NUMBER_WITH_DIMENSION
        if raw == "String":
            return cls.STRING_ITEM
        try:
            return cls(raw)
        except ValueError:
            return cls.NONE


@dataclass(frozen=True)
class NumberState:
    """A numeric state with an optional unit."""

    value: float
    unit: str | None = None


@dataclass(frozen=True)
class ParsedState:
    """Typed views of a raw item state string."""

    as_string: str

    @property
    def as_brightness(self) -> int | None:
        """Return the brightness of an HSB state ("h,s,b")."""
        parts = self.as_string.split(",")
        if len(parts) != 3:  # noqa: PLR2004
            return None
        try:
            return int(float(parts[2]))
        except ValueError:
            return None

    @property
    def as_number(self) -> NumberState | None:
        """Return the state as number, stripping a unit if present."""
        brightness = self.as_brightness
        if brightness is not None:
            return NumberState(float(brightness))
        raw, _, unit = self.as_string.strip().partition(" ")
        try:
            value = float(raw)
        except ValueError:
            return None
        return NumberState(value, unit or None)

    @property
    def as_boolean(self) -> bool:
        """Return the state interpreted as on/off."""
        if self.as_string in ("ON", "OPEN"):
            return True
        if self.as_string in ("OFF", "CLOSED"):
            return False
        brightness = self.as_brightness
        if brightness is not None:
            return brightness != 0
        try:
            return int(self.as_string) > 0
        except ValueError:
            return False

    @classmethod
    def from_raw(cls, raw: str | None) -> ParsedState | None:
        """Return a ParsedState, or None for undefined states."""
        if raw is None or raw in UNDEFINED_STATES:
            return None
        return cls(raw)


@dataclass
class Item:
    """Represents an openHAB item."""

    name: str
    type: ItemType
    group_type: ItemType = ItemType.NONE
    state: ParsedState | None = None
    label: str | None = None
    link: str | None = None
    raw_data: dict[str, Any] = field(default_factory=dict, repr=False)

    def is_of_type_or_group_type(self, item_type: ItemType) -> bool:
        """Return True if the item or its group base has the given type."""
        return self.type == item_type or self.group_type == item_type


@dataclass(frozen=True)
class UpdateRequest:
    """Input of one item update unit of work."""

    item: str
    value: str
    label: str | None = None
    mapped_value: str | None = None
    show_toast: bool = False

    def to_data(self) -> dict[str, Any]:
        """Return the input record."""
        return {
            INPUT_DATA_ITEM_NAME: self.item,
            INPUT_DATA_LABEL: self.label,
            INPUT_DATA_VALUE: self.value,
            INPUT_DATA_MAPPED_VALUE: self.mapped_value,
            INPUT_DATA_SHOW_TOAST: self.show_toast,
        }

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> UpdateRequest:
        """Build a request from an input record."""
        item = data.get(INPUT_DATA_ITEM_NAME)
        value = data.get(INPUT_DATA_VALUE)
        if not item:
            err_msg = f"Input record is missing '{INPUT_DATA_ITEM_NAME}'"
            raise ValueError(err_msg)
        if value is None:
            err_msg = f"Input record is missing '{INPUT_DATA_VALUE}'"
            raise ValueError(err_msg)
        return cls(
            item=item,
            value=value,
            label=data.get(INPUT_DATA_LABEL),
            mapped_value=data.get(INPUT_DATA_MAPPED_VALUE),
            show_toast=bool(data.get(INPUT_DATA_SHOW_TOAST, False)),
        )


@dataclass(frozen=True)
class UpdateOutcome:
    """Result of one item update attempt.

    The request fields are echoed as the caller passed them, so ``value``
    stays ``TOGGLE`` even when the update sent ``ON``.
    """

    has_connection: bool
    http_status: int
    item: str
    value: str
    label: str | None = None
    mapped_value: str | None = None
    show_toast: bool = False
    success: bool = False
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    def __post_init__(self) -> None:
        """Enforce the connection/status invariant."""
        if not self.has_connection and self.http_status != 0:
            err_msg = "An outcome without connection cannot carry an HTTP status"
            raise ValueError(err_msg)

    @classmethod
    def for_request(
        cls,
        request: UpdateRequest,
        has_connection: bool,
        http_status: int,
        success: bool = False,
    ) -> UpdateOutcome:
        """Build an outcome echoing the request fields."""
        return cls(
            has_connection=has_connection,
            http_status=http_status,
            item=request.item,
            value=request.value,
            label=request.label,
            mapped_value=request.mapped_value,
            show_toast=request.show_toast,
            success=success,
        )

    def raise_for_status(self) -> None:
        """Raise if the update did not succeed.

        Raises:
            ConnectionUnavailable: If no connection was available.
            HttpError: If the server answered with an error status.

        """
        if not self.has_connection:
            err_msg = f"No connection available to update item '{self.item}'"
            raise ConnectionUnavailable(err_msg)
        if not self.success:
            raise HttpError(self.http_status, f"Updating item '{self.item}' failed")

    def to_data(self) -> dict[str, Any]:
        """Return the output record."""
        return {
            OUTPUT_DATA_HAS_CONNECTION: self.has_connection,
            OUTPUT_DATA_HTTP_STATUS: self.http_status,
            OUTPUT_DATA_ITEM_NAME: self.item,
            OUTPUT_DATA_LABEL: self.label,
            OUTPUT_DATA_VALUE: self.value,
            OUTPUT_DATA_MAPPED_VALUE: self.mapped_value,
            OUTPUT_DATA_SHOW_TOAST: self.show_toast,
            OUTPUT_DATA_TIMESTAMP: self.timestamp,
        }


@dataclass(frozen=True)
class RetrySignal:
    """Returned by an attempt that should be retried later."""

    attempt_number: int
    reason: str = "no connection"
