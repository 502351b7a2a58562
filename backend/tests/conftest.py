"""Integration/E2E test fixtures.

This conftest loads the full app and is used for integration/e2e tests.
Unit tests in tests/unit/ have their own isolated conftest that doesn't load the app.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, AsyncIterator, Generator, cast

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

from app import app  # noqa: E402
from infrastructure.persistence.factory import reset_repositories  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_repositories(
    request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Fresh in-memory repositories for every test.

    Tests marked ``mongodb`` keep the configured backend.
    """
    if not request.node.get_closest_marker("mongodb"):
        monkeypatch.setenv("REPOSITORY_BACKEND", "inmemory")
    monkeypatch.delenv("SNAPSHOT_STALE_HOURS", raising=False)
    reset_repositories()
    yield
    reset_repositories()


@pytest.fixture
def mongodb_available() -> bool:
    return bool(os.getenv("MONGODB_URI"))


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Client HTTP asincrono per test GraphQL/REST.

    Usa httpx.AsyncClient con ASGITransport esplicito e base_url fittizia
    per coerenza nelle richieste relative.
    """
    transport = ASGITransport(app=cast(Any, app))
    async with AsyncClient(
        transport=transport,
        base_url="http://testserver",
    ) as ac:
        yield ac
