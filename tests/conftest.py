from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator

import httpx
import pytest

from fetchlane import LaneConfig, Runtime, diagnostics
from fetchlane.http import open_client

Responder = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def restore_diagnostics() -> Iterator[None]:
    diagnostics.reset()
    yield
    diagnostics.reset()


@pytest.fixture
def runtime() -> Iterator[Runtime]:
    with Runtime(config=LaneConfig(max_workers=4)) as scope:
        yield scope


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Build clients whose transport answers after a fixed latency."""

    def _factory(responder: Responder, *, delay: float = 0.0) -> httpx.AsyncClient:
        async def handler(request: httpx.Request) -> httpx.Response:
            if delay:
                await asyncio.sleep(delay)
            return responder(request)

        return open_client(transport=httpx.MockTransport(handler))

    return _factory
