"""
Pytest configuration and fixtures for receiver tests.

Route tests stub the repository and need no database. Repository tests
need a Postgres test database and are skipped when DATABASE_URL is unset.
"""

from __future__ import annotations

import os

import httpx
import pytest
import pytest_asyncio

from receiver import db
from receiver.main import app

# Only an explicit DATABASE_URL counts; the config default is for local dev
_DATABASE_URL = os.environ.get("DATABASE_URL")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS form_records (
    id              UUID PRIMARY KEY,
    name            TEXT NOT NULL,
    mobile          TEXT NOT NULL,
    dob             TEXT NOT NULL,
    age             INT NOT NULL CHECK (age BETWEEN 0 AND 150),
    action          TEXT NOT NULL CHECK (action IN ('create', 'update', 'delete')),
    processed_at    TIMESTAMPTZ NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def initialize_pool():
    """Initialize pool once for all repository tests."""
    if not _DATABASE_URL:
        pytest.skip("DATABASE_URL not set")

    await db.init_pool(_DATABASE_URL)
    async with db.record_conn() as conn:
        await conn.execute(_SCHEMA)
    yield
    await db.close_pool()


@pytest_asyncio.fixture(loop_scope="session")
async def clean_records(initialize_pool):
    """Empty the table before and after each repository test."""
    async with db.record_conn() as conn:
        await conn.execute("TRUNCATE form_records")
    yield
    async with db.record_conn() as conn:
        await conn.execute("TRUNCATE form_records")


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
