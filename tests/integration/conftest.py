"""
Integration test fixtures.

These tests run the real default transport; pytest-httpx intercepts
requests underneath it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest_asyncio
from helpers import TEST_BASE_URL

from bigmodel_python import ClientBuilder

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from bigmodel_python import Client


@pytest_asyncio.fixture
async def client() -> AsyncIterator[Client]:
    """Client on the default transport, closed after the test."""
    client = ClientBuilder().api_key("test-key").base_url(TEST_BASE_URL).timeout(5).build()
    yield client
    await client.aclose()
