"""Parsing of item representations returned by the openHAB REST API.

The server chooses the representation: openHAB 2+ answers with JSON, while
openHAB 1 servers answer with XML. The caller picks the parser through an
explicit ``ContentType`` tag derived from the response header.
"""

from __future__ import annotations

from enum import Enum
import json
import logging
from typing import Any
from xml.etree import ElementTree

from .exceptions import ItemLoadParseError
from .models import Item, ItemType, ParsedState

_LOGGER = logging.getLogger(__name__)


class ContentType(Enum):
    """Representation formats of an item."""

    JSON = "json"
    XML = "xml"

    @classmethod
    def from_header(cls, header: str | None) -> ContentType:
        """Select the representation from a Content-Type header.

        Anything that is not ``application/json`` is treated as XML.
        """
        if header:
            mime = header.split(";", 1)[0].strip().lower()
            if mime == "application/json":
                return cls.JSON
        return cls.XML


def parse_item(item_name: str, content: str, content_type: ContentType) -> Item:
    """Parse an item representation in the given format.

    Raises:
        ItemLoadParseError: If the payload is malformed or is not an item.

    """
    if content_type is ContentType.JSON:
        return parse_item_json(item_name, content)
    return parse_item_xml(item_name, content)


def parse_item_json(item_name: str, content: str) -> Item:
    """Parse a JSON item object."""
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as err:
        _LOGGER.exception("Failed parsing JSON result for item %s", item_name)
        raise ItemLoadParseError(item_name, f"invalid JSON: {err}") from err
    if not isinstance(data, dict):
        raise ItemLoadParseError(item_name, "JSON payload is not an object")
    return _item_from_dict(item_name, data)


def parse_item_xml(item_name: str, content: str) -> Item:
    """Parse an XML item document."""
    try:
        root = ElementTree.fromstring(content)
    except (ElementTree.ParseError, RecursionError) as err:
        _LOGGER.exception("Failed parsing XML result for item %s", item_name)
        raise ItemLoadParseError(item_name, f"invalid XML: {err}") from err
    if root.tag != "item":
        raise ItemLoadParseError(item_name, f"unexpected root element <{root.tag}>")
    data = {child.tag: (child.text or "") for child in root if len(child) == 0}
    return _item_from_dict(item_name, data)


def _item_from_dict(item_name: str, data: dict[str, Any]) -> Item:
    name = data.get("name")
    raw_type = data.get("type")
    if not isinstance(name, str) or not name:
        raise ItemLoadParseError(item_name, "item has no name")
    if not isinstance(raw_type, str) or not raw_type:
        raise ItemLoadParseError(item_name, "item has no type")

    state = data.get("state")
    if state is not None and not isinstance(state, str):
        state = str(state)

    item = Item(
        name=name,
        type=ItemType.from_server(raw_type),
        group_type=ItemType.from_server(data.get("groupType")),
        state=ParsedState.from_raw(state),
        label=data.get("label"),
        link=data.get("link"),
        raw_data=data,
    )
    _LOGGER.debug("Parsed item %s", item)
    return item
