"""Shared fakes for pyhabdroid tests."""

import json

import pytest

from pyhabdroid.connection import HttpResult
from pyhabdroid.exceptions import HttpError
from pyhabdroid.notifications import CollectingNotificationSink

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
XML_CONTENT_TYPE = "text/xml;charset=UTF-8"


def json_item(name="Light", item_type="Switch", state="OFF", **extra):
    """Return an HttpResult carrying a JSON item."""
    data = {"name": name, "type": item_type, "state": state, "link": f"http://oh/rest/items/{name}"}
    data.update(extra)
    return HttpResult(200, JSON_CONTENT_TYPE, json.dumps(data))


class FakeHttpClient:
    """Records requests and replays canned responses."""

    def __init__(self, item_response=None, post_status=200, get_error=None, post_error=None):
        self.item_response = item_response or json_item()
        self.post_status = post_status
        self.get_error = get_error
        self.post_error = post_error
        self.gets = []
        self.posts = []

    async def get(self, path, timeout=None):
        self.gets.append(path)
        if self.get_error is not None:
            raise self.get_error
        return self.item_response

    async def post(self, path, body, content_type, timeout=None):
        self.posts.append((path, body, content_type))
        if self.post_error is not None:
            raise self.post_error
        if not 200 <= self.post_status < 300:
            raise HttpError(self.post_status, "error")
        return HttpResult(self.post_status, "text/plain", "")


class FakeConnection:
    def __init__(self, http_client):
        self.http_client = http_client


class FakeConnectionFactory:
    """Connection provider whose connection can be swapped by tests."""

    def __init__(self, connection=None):
        self.usable_connection_or_none = connection
        self.wait_calls = 0
        self.invalidate_calls = 0

    async def wait_for_initialization(self):
        self.wait_calls += 1

    def invalidate(self):
        self.invalidate_calls += 1
        self.usable_connection_or_none = None


@pytest.fixture
def http_client():
    return FakeHttpClient()


@pytest.fixture
def factory(http_client):
    return FakeConnectionFactory(FakeConnection(http_client))


@pytest.fixture
def sink():
    return CollectingNotificationSink()
