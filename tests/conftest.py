"""Root pytest fixtures for bigmodel-python tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from helpers import TEST_BASE_URL

from bigmodel_python.client import Client, with_base_url, with_transport

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests captured by the mock transport."""
    return []


@pytest.fixture
def make_client(requests_seen: list[httpx.Request]) -> Callable[..., Client]:
    """Build a Client whose transport is an httpx.MockTransport.

    Every request is recorded in ``requests_seen`` before the handler runs.
    Extra options are applied after the base URL and transport.
    """

    def factory(handler: Handler, *options: Any) -> Client:
        def record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(record))
        return Client(
            "test-key",
            with_base_url(TEST_BASE_URL),
            with_transport(http),
            *options,
        )

    return factory

