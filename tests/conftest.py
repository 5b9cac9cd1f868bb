"""Shared fixtures: canned AppSignal payloads and a recording HTTP transport."""

import copy
import json
from typing import Any

import httpx
import pytest

from appsignal_mcp.client import AppSignalClient

API_TOKEN = "test-token"
APP_ID = "test-app-id"

INCIDENT = {
    "id": "incident-1",
    "number": 5321,
    "count": 10,
    "lastOccurredAt": "2023-05-20T12:00:00Z",
    "actionNames": ["Controller#action"],
    "exceptionName": "RuntimeError",
    "state": "open",
    "namespace": "web",
    "firstBacktraceLine": "app/controllers/application_controller.rb:25",
    "errorGroupingStrategy": "standard",
    "severity": "high",
}

SAMPLE = {
    "id": "sample-1",
    "appId": APP_ID,
    "time": "2023-05-20T12:00:00Z",
    "revision": "abc123",
    "action": "Controller#action",
    "namespace": "web",
    "overview": [
        {"key": "hostname", "value": "web-1"},
        {"key": "path", "value": "/checkout"},
    ],
    "exception": {
        "name": "RuntimeError",
        "message": "undefined method `total' for nil",
        "backtrace": [
            {
                "original": "app/controllers/application_controller.rb:25:in `index'",
                "line": 25,
                "column": None,
                "path": "app/controllers/application_controller.rb",
                "method": "index",
                "url": None,
                "type": "APP",
                "code": {"line": 25, "source": "order.total"},
                "error": {"class": "RuntimeError", "message": "boom"},
            },
            {"original": "lib/rack/handler.rb:10"},
        ],
    },
}


class FakeAppSignal:
    """httpx.MockTransport handler that records requests and replays one reply."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.response: httpx.Response = httpx.Response(200, json={"data": {}})
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def respond_app(self, **fields: Any) -> None:
        self.response = httpx.Response(
            200, json={"data": {"app": {"id": APP_ID, **copy.deepcopy(fields)}}}
        )

    def respond_json(self, body: Any, status: int = 200) -> None:
        self.response = httpx.Response(status, json=body)

    def fail(self, error: Exception) -> None:
        self.error = error

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    @property
    def last_variables(self) -> dict[str, Any]:
        return self.last_body["variables"]


@pytest.fixture
def appsignal() -> FakeAppSignal:
    return FakeAppSignal()


@pytest.fixture
def client(appsignal: FakeAppSignal) -> AppSignalClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(appsignal))
    return AppSignalClient(API_TOKEN, APP_ID, http_client=http_client)


@pytest.fixture
def incident_payload() -> dict[str, Any]:
    return copy.deepcopy(INCIDENT)


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE)
