"""Pytest shared fixtures for the OneLogin users client."""
import json
import pathlib
import re
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from onelogin_users import UserClient

HOST = "https://api.us.onelogin.com"


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching a real OneLogin tenant.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _refuse(method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests, "request", _refuse)


# ─────────────────────────────────────────────────────────────────────────────
# Transport Doubles
# ─────────────────────────────────────────────────────────────────────────────
class FakeTransport:
    """Records every request and replies with canned bodies per operation.

    A canned response may be bytes, an exception instance (raised), or a
    callable receiving the request descriptor.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def _reply(self, operation, request):
        self.calls.append((operation, request))
        response = self.responses.get(operation, b"")
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    def read(self, request):
        return self._reply("read", request)

    def create(self, request):
        return self._reply("create", request)

    def update(self, request):
        return self._reply("update", request)

    def destroy(self, request):
        return self._reply("destroy", request)


class InMemoryTransport:
    """Minimal stateful stand-in for the users API."""

    _ID_URL = re.compile(r"/api/2/users/(\d+)$")

    def __init__(self):
        self.users = {}
        self._next_id = 1000

    def _id_from(self, url):
        match = self._ID_URL.search(url)
        return int(match.group(1)) if match else None

    def read(self, request):
        user_id = self._id_from(request.url)
        if user_id is None:
            return json.dumps(list(self.users.values())).encode()
        return json.dumps(self.users[user_id]).encode()

    def create(self, request):
        record = dict(request.payload, id=self._next_id, created_at="2024-05-01T09:30:00Z")
        self.users[self._next_id] = record
        self._next_id += 1
        return json.dumps(record).encode()

    def update(self, request):
        user_id = self._id_from(request.url)
        if user_id is not None:
            self.users[user_id].update(request.payload or {})
            return json.dumps(self.users[user_id]).encode()
        return b""

    def destroy(self, request):
        self.users.pop(self._id_from(request.url))
        return b""


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def users(fake_transport):
    """UserClient wired to a recording FakeTransport."""
    return UserClient(fake_transport, HOST)


@pytest.fixture
def memory_transport():
    return InMemoryTransport()
