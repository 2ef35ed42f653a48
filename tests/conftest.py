"""Pytest fixtures for WireMockQA tests."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from typing import Any

import pytest

from wiremockqa.config import WireMockSettings
from wiremockqa.module import WireMock
from wiremockqa.ports.transport import (
    AdminTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
)


class FakeTransport(AdminTransport):
    """Scripted transport that replays queued responses in order."""

    def __init__(self) -> None:
        self._responses: list[TransportResponse | Exception] = []
        self.sent: list[TransportRequest] = []
        self.closed = False

    def queue(self, status_code: int = 200, body: Any = "") -> FakeTransport:
        text = body if isinstance(body, str) else json.dumps(body)
        self._responses.append(TransportResponse(status_code=status_code, text=text))
        return self

    def queue_failure(self, message: str = "Connection refused") -> FakeTransport:
        self._responses.append(TransportError(message))
        return self

    def send(self, request: TransportRequest) -> TransportResponse:
        self.sent.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> TransportRequest:
        return self.sent[-1]

    def json_sent(self, index: int = -1) -> Any:
        body = self.sent[index].body
        return json.loads(body) if body else None

    @property
    def pending(self) -> int:
        return len(self._responses)


@pytest.fixture(autouse=True)
def clean_wiremock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep WIREMOCK_* variables from the shell out of unit tests."""
    for key in list(os.environ):
        if key.startswith("WIREMOCK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> WireMockSettings:
    return WireMockSettings(host="127.0.0.1", port=8080)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def wiremock_adapter(settings: WireMockSettings, fake_transport: FakeTransport) -> Iterator[WireMock]:
    """An initialized adapter; the health check is not left in ``sent``."""
    fake_transport.queue(200, {"status": "healthy"})
    adapter = WireMock.connect(settings, fake_transport)
    fake_transport.sent.clear()
    yield adapter
    adapter.close()
