"""Feedback message templates for item updates."""

from __future__ import annotations

from collections.abc import Mapping

NO_CONNECTION_MESSAGE = "Could not update item: no connection to the openHAB server"

GENERIC_TEMPLATE_KEY = "generic"

# Keyed by the value that was sent; every template receives {label},
# the generic one also {mapped_value}.
SUCCESS_TEMPLATES: dict[str, str] = {
    "ON": "{label} has been switched on",
    "OFF": "{label} has been switched off",
    "UP": "{label} has been moved up",
    "DOWN": "{label} has been moved down",
    "MOVE": "{label} has been moved",
    "STOP": "{label} has been stopped",
    "INCREASE": "{label} has been increased",
    "DECREASE": "{label} has been decreased",
    "UNDEF": "{label} has been set to undefined",
    "": "{label} has been set to an empty string",
    "PLAY": "Playback on {label} has been started",
    "PAUSE": "Playback on {label} has been paused",
    "NEXT": "{label} skipped to the next track",
    "PREVIOUS": "{label} skipped to the previous track",
    "REWIND": "{label} is rewinding",
    "FASTFORWARD": "{label} is fast forwarding",
    GENERIC_TEMPLATE_KEY: "{label} has been set to {mapped_value}",
}


def get_item_update_success_message(
    label: str,
    value: str,
    mapped_value: str,
    templates: Mapping[str, str] | None = None,
) -> str:
    """Return the success message for an update that sent ``value``.

    Custom ``templates`` override individual entries of the default table,
    which allows translated messages.
    """
    table = dict(SUCCESS_TEMPLATES)
    if templates:
        table.update(templates)
    if value != GENERIC_TEMPLATE_KEY and value in table:
        return table[value].format(label=label)
    return table[GENERIC_TEMPLATE_KEY].format(label=label, mapped_value=mapped_value)
