"""Shared fixtures: clients wired to an in-memory httpx transport."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from canvas_api import client

TEST_API_URL = "https://example.test/api"
TEST_TOKEN = "abc"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers every request with one canned response.

    Outgoing requests are kept in ``requests`` with their bodies read.
    """

    def __init__(self, payload: Any = None, status_code: int = 200, content: bytes | None = None):
        self.requests: list[httpx.Request] = []
        self.payload = payload
        self.status_code = status_code
        self.content = content
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[client.CanvasClient, RecordingTransport]]:
    """Factory building a CanvasClient against a RecordingTransport."""

    def factory(
        payload: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
        token: str = TEST_TOKEN,
    ) -> tuple[client.CanvasClient, RecordingTransport]:
        transport = RecordingTransport(payload, status_code=status_code, content=content)
        canvas_client = (
            client.CanvasClient.builder(token)
            .set_api_url(TEST_API_URL)
            .set_transport(transport)
            .build()
        )
        return canvas_client, transport

    return factory
