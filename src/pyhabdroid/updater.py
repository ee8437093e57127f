"""Pushes a single item state update to the openHAB server."""

from __future__ import annotations

from collections.abc import Mapping
import logging

from .connection import Connection, ConnectionFactory
from .const import (
    ITEM_LOAD_FAILED_STATUS,
    ITEM_UPDATE_CONTENT_TYPE,
    MAX_RETRIES,
    TOGGLE_COMMAND,
    item_path,
)
from .exceptions import ConnectionLostError, HttpError, ItemLoadParseError
from .messages import NO_CONNECTION_MESSAGE, get_item_update_success_message
from .models import Item, ItemType, RetrySignal, UpdateOutcome, UpdateRequest
from .notifications import LoggingNotificationSink, NotificationSink
from .parsing import parse_item

_LOGGER = logging.getLogger(__name__)


def determine_opposite_state(item: Item) -> str:
    """Return the value that inverts the item's current state."""
    if item.is_of_type_or_group_type(
        ItemType.ROLLERSHUTTER
    ) or item.is_of_type_or_group_type(ItemType.DIMMER):
        # If shutter is (partially) closed, open it, else close it
        number = item.state.as_number if item.state is not None else None
        return "100" if number is not None and number.value == 0 else "0"
    if item.state is not None and item.state.as_boolean:
        return "OFF"
    return "ON"


class ItemUpdater:
    """Runs one attempt of an item update.

    An attempt returns a :class:`RetrySignal` only when no connection is
    available and the retry bound is not yet exceeded. Every other result
    is a terminal :class:`UpdateOutcome`.
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory,
        notifications: NotificationSink | None = None,
        max_retries: int = MAX_RETRIES,
        message_templates: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the updater."""
        self._connection_factory = connection_factory
        self._notifications = notifications or LoggingNotificationSink()
        self._max_retries = max_retries
        self._message_templates = message_templates

    async def execute(
        self, request: UpdateRequest, attempt_number: int
    ) -> UpdateOutcome | RetrySignal:
        """Run one update attempt."""
        await self._connection_factory.wait_for_initialization()

        _LOGGER.debug("Trying to get connection")
        connection = self._connection_factory.usable_connection_or_none

        if connection is not None:
            try:
                return await self._update(connection, request)
            except ConnectionLostError:
                # The server went away since the connection was resolved
                self._connection_factory.invalidate()

        _LOGGER.error("Got no connection")
        if attempt_number <= self._max_retries:
            if request.show_toast:
                self._notify(error=True, message=NO_CONNECTION_MESSAGE)
            return RetrySignal(attempt_number)
        return UpdateOutcome.for_request(request, False, 0)

    async def _update(
        self, connection: Connection, request: UpdateRequest
    ) -> UpdateOutcome:
        item_name = request.item
        value = request.value
        label = request.label or item_name
        mapped_value = request.mapped_value or value

        try:
            try:
                item = await self.load_item(connection, item_name)
            except ItemLoadParseError:
                return UpdateOutcome.for_request(
                    request, True, ITEM_LOAD_FAILED_STATUS
                )

            if value == TOGGLE_COMMAND:
                value = determine_opposite_state(item)
                mapped_value = value

            result = await connection.http_client.post(
                item_path(item_name), value, ITEM_UPDATE_CONTENT_TYPE
            )
        except ConnectionLostError:
            raise
        except HttpError as err:
            _LOGGER.exception(
                "Error updating item '%s' to value %s. Got HTTP error %s",
                item_name,
                value,
                err.status_code,
            )
            return UpdateOutcome.for_request(request, True, err.status_code)

        _LOGGER.debug("Item '%s' successfully updated to value %s", item_name, value)
        if request.show_toast:
            self._notify(
                error=False,
                message=get_item_update_success_message(
                    label, value, mapped_value, self._message_templates
                ),
            )
        return UpdateOutcome.for_request(
            request, True, result.status_code, success=True
        )

    async def load_item(self, connection: Connection, item_name: str) -> Item:
        """Fetch and parse the current representation of an item.

        Raises:
            HttpError: If the server answered with an error status.
            ItemLoadParseError: If the representation could not be parsed.

        """
        response = await connection.http_client.get(item_path(item_name))
        return parse_item(item_name, response.text, response.representation)

    def _notify(self, error: bool, message: str) -> None:
        """Show feedback without letting a failing sink affect the outcome."""
        try:
            if error:
                self._notifications.show_error_toast(message)
            else:
                self._notifications.show_toast(message)
        except Exception:
            _LOGGER.exception("Failed to show notification '%s'", message)
