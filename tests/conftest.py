"""Shared fixtures: connection settings and a recording Mattermost stub."""

import json

import httpx
import pytest

from whmcs_mattermost.schemas.settings import ConnectionSettings


class FakeMattermost:
    """
    Record every request and answer from a route table.

    Routes map ``"METHOD path"`` (path relative to /api/v4/) to either an
    ``httpx.Response`` or a callable taking the request.
    """

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(self, method: str, path: str, response) -> None:
        self.routes[f"{method} {path}"] = response

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v4/")
        route = self.routes.get(f"{request.method} {path}")
        if route is None:
            return httpx.Response(404, json={"id": "api.context.404.app_error"})
        if callable(route):
            return route(request)
        return route

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def connection() -> ConnectionSettings:
    return ConnectionSettings(
        mattermost_url="chat.example.com",
        mattermost_bot_username="whmcs",
        mattermost_bot_access_token="tok",
    )


@pytest.fixture
def module_settings() -> dict:
    return {
        "mattermost_url": "chat.example.com",
        "mattermost_bot_username": "whmcs",
        "mattermost_bot_access_token": "tok",
    }


@pytest.fixture
def fake() -> FakeMattermost:
    return FakeMattermost()
