"""Shared fixtures.

The app is driven in-process through ``httpx.ASGITransport``. The database
session and the record store are replaced by dependency overrides, so no
Postgres instance is needed.
"""

import os


# Settings are cached on first use, so the environment must be in place first
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret-key-for-lingopal-tests-only"
os.environ["SPEECH_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""

from collections.abc import AsyncGenerator, Awaitable, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from lingopal.auth.security import create_access_token
from lingopal.database.session import get_db_session
from lingopal.main import app as lingopal_app
from lingopal.progress.dependencies import get_record_store
from tests.fakes import InMemoryRecordStore


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def db_session() -> MagicMock:
    """Stand-in AsyncSession; tests configure ``execute`` as needed."""
    session = MagicMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def app(record_store, db_session):
    async def _session_override() -> AsyncGenerator[MagicMock, None]:
        yield db_session

    lingopal_app.dependency_overrides[get_db_session] = _session_override
    lingopal_app.dependency_overrides[get_record_store] = lambda: record_store
    yield lingopal_app
    lingopal_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[int], dict[str, str]]:
    def _headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
async def client_factory(app) -> AsyncGenerator[Callable[..., Awaitable[AsyncClient]], None]:
    """Build clients, optionally authenticated as ``user_id``."""
    clients: list[AsyncClient] = []

    async def _make(user_id: int | None = None) -> AsyncClient:
        headers = {}
        if user_id is not None:
            headers["Authorization"] = f"Bearer {create_access_token(user_id)}"
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test", headers=headers)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
async def client(client_factory) -> AsyncClient:
    """Unauthenticated client."""
    return await client_factory()
