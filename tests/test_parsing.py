"""Tests for item representation parsing."""

import pytest

from pyhabdroid.exceptions import ItemLoadParseError
from pyhabdroid.models import ItemType
from pyhabdroid.parsing import ContentType, parse_item, parse_item_json, parse_item_xml

SAMPLE_JSON = """{
  "link": "http://openhab:8080/rest/items/LivingRoom_Dimmer",
  "state": "35",
  "editable": false,
  "type": "Dimmer",
  "name": "LivingRoom_Dimmer",
  "label": "Living Room",
  "category": "light",
  "tags": [],
  "groupNames": ["LivingRoom"]
}"""

SAMPLE_GROUP_JSON = """{
  "members": [],
  "groupType": "Rollershutter",
  "state": "0",
  "type": "Group",
  "name": "gShutters",
  "label": "All shutters"
}"""

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<item>
  <type>SwitchItem</type>
  <name>Kitchen_Light</name>
  <state>ON</state>
  <link>http://openhab:8080/rest/items/Kitchen_Light</link>
</item>
"""


class TestContentType:
    """Tests for representation selection."""

    @pytest.mark.parametrize(
        "header",
        ["application/json", "application/json;charset=UTF-8", "Application/JSON ; q=1"],
    )
    def test_json(self, header) -> None:
        assert ContentType.from_header(header) is ContentType.JSON

    @pytest.mark.parametrize("header", [None, "", "text/xml", "application/xml", "text/plain"])
    def test_everything_else_is_xml(self, header) -> None:
        assert ContentType.from_header(header) is ContentType.XML


class TestParseJson:
    """Tests for JSON items."""

    def test_dimmer(self) -> None:
        item = parse_item_json("LivingRoom_Dimmer", SAMPLE_JSON)

        assert item.name == "LivingRoom_Dimmer"
        assert item.type is ItemType.DIMMER
        assert item.group_type is ItemType.NONE
        assert item.label == "Living Room"
        assert item.state.as_number.value == 35
        assert item.raw_data["category"] == "light"

    def test_group(self) -> None:
        item = parse_item_json("gShutters", SAMPLE_GROUP_JSON)

        assert item.type is ItemType.GROUP
        assert item.is_of_type_or_group_type(ItemType.ROLLERSHUTTER)

    def test_undefined_state(self) -> None:
        item = parse_item_json("X", '{"name": "X", "type": "Switch", "state": "NULL"}')

        assert item.state is None

    def test_number_with_dimension(self) -> None:
        item = parse_item_json(
            "Temp", '{"name": "Temp", "type": "Number:Temperature", "state": "21.5 °C"}'
        )

        assert item.type is ItemType.NUMBER_WITH_DIMENSION
        assert item.state.as_number.value == 21.5
        assert item.state.as_number.unit == "°C"

    @pytest.mark.parametrize(
        "content",
        ["{not json", "", "[1, 2]", '"ON"', '{"type": "Switch"}', '{"name": "X"}'],
    )
    def test_malformed(self, content) -> None:
        with pytest.raises(ItemLoadParseError) as excinfo:
            parse_item_json("X", content)
        assert excinfo.value.item_name == "X"

    def test_deeply_nested(self) -> None:
        """Nesting beyond the recursion limit is a parse error, not a crash."""
        with pytest.raises(ItemLoadParseError):
            parse_item_json("X", "[" * 200000 + "]" * 200000)


class TestParseXml:
    """Tests for XML items."""

    def test_switch(self) -> None:
        item = parse_item_xml("Kitchen_Light", SAMPLE_XML)

        assert item.name == "Kitchen_Light"
        assert item.type is ItemType.SWITCH
        assert item.state.as_boolean is True
        assert item.link == "http://openhab:8080/rest/items/Kitchen_Light"

    @pytest.mark.parametrize(
        "content",
        ["<item><name>X</name>", "", "not xml", "<items><item/></items>", "<item><name>X</name></item>"],
    )
    def test_malformed(self, content) -> None:
        with pytest.raises(ItemLoadParseError):
            parse_item_xml("X", content)


def test_parse_item_dispatches_on_content_type() -> None:
    """The explicit tag selects the parser."""
    assert parse_item("Kitchen_Light", SAMPLE_XML, ContentType.XML).type is ItemType.SWITCH
    with pytest.raises(ItemLoadParseError):
        parse_item("Kitchen_Light", SAMPLE_XML, ContentType.JSON)
