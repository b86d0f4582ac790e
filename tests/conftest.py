"""Shared fixtures: a Pollinations gateway backed by ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from pollinations_mcp.gateway.pollinations import PollinationsGateway
from pollinations_mcp.protocols.adapter import ToolAdapter

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture
async def make_gateway() -> AsyncIterator[Callable[[Handler], PollinationsGateway]]:
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Handler) -> PollinationsGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return PollinationsGateway(client)

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def make_adapter(
    make_gateway: Callable[[Handler], PollinationsGateway],
) -> Callable[[Handler], ToolAdapter]:
    def _make(handler: Handler) -> ToolAdapter:
        return ToolAdapter(make_gateway(handler))

    return _make


@pytest.fixture
def recorder() -> type[RecordingHandler]:
    """The :class:`RecordingHandler` class, for building per-test handlers."""
    return RecordingHandler
