"""
Pytest configuration and fixtures for dispatch API tests.

No receiver or database is needed: receiver calls are stubbed or routed
to the receiver app in-process.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

from backend.main import app
from backend.services.dispatcher import Dispatcher
from backend.services.receiver_client import ReceiverClient

TODAY = date(2024, 6, 15)
PROCESSED_AT = datetime(2024, 6, 15, 9, 30, tzinfo=UTC)


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def fake_receiver():
    """A ReceiverClient stand-in whose forward() is an AsyncMock."""
    client = MagicMock(spec=ReceiverClient)
    client.forward = AsyncMock(return_value={"success": True, "action": "CREATE"})
    return client


@pytest.fixture
def fixed_dispatcher(fake_receiver):
    """Dispatcher with a pinned date and clock."""
    return Dispatcher(client=fake_receiver, today=lambda: TODAY, clock=lambda: PROCESSED_AT)


@pytest.fixture
def httpx_client():
    """
    Build stand-ins for httpx.AsyncClient usable as `async with`.

    Keyword arguments become AsyncMock methods on the entered client.
    """

    def build(**methods) -> AsyncMock:
        mock_client = AsyncMock()
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        for name, mock in methods.items():
            setattr(mock_client, name, mock)
        return mock_client

    return build
