"""
Shared test fixtures for the Inventory API test suite.

Every HTTP test runs twice: against the synchronous sqlite store and the
asyncio (aiosqlite) store, both on a private in-memory database.
"""

import os
from typing import AsyncGenerator

import pytest

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

from httpx import ASGITransport, AsyncClient

from inventory_api.core.config import Settings
from inventory_api.db.async_store import AsyncSQLStore
from inventory_api.db.session import engine_options
from inventory_api.db.store import CredentialStore
from inventory_api.db.sync_store import SyncSQLStore
from inventory_api.main import create_app

TEST_SECRET = "test-secret"

STORE_URLS = {
    "sync": "sqlite://",
    "async": "sqlite+aiosqlite://",
}


def make_store(kind: str) -> CredentialStore:
    url = STORE_URLS[kind]
    store_cls = SyncSQLStore if kind == "sync" else AsyncSQLStore
    return store_cls(url, **engine_options(url))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, JWT_SECRET=TEST_SECRET, DATABASE_URL="sqlite://")


@pytest.fixture(params=sorted(STORE_URLS))
async def store(request) -> AsyncGenerator[CredentialStore, None]:
    """A fresh store with both tables created; disposed after the test."""
    store = make_store(request.param)
    await store.create_schema()
    yield store
    await store.close()


@pytest.fixture
def app(test_settings: Settings, store: CredentialStore):
    return create_app(settings=test_settings, store=store)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def signup_and_login(async_client: AsyncClient):
    """Register a user, log in, and return the issued token."""

    async def _signup_and_login(
        username: str = "alice",
        email: str = "a@x.com",
        password: str = "pw1",
    ) -> str:
        resp = await async_client.post(
            "/api/signup", json={"username": username, "email": email, "password": password}
        )
        assert resp.status_code == 201, resp.text
        resp = await async_client.post(
            "/api/login", json={"username": username, "password": password}
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return _signup_and_login


@pytest.fixture
async def auth_headers(signup_and_login) -> dict[str, str]:
    token = await signup_and_login()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(params=sorted(STORE_URLS))
async def bare_client(request, test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app whose store never had its tables created."""
    store = make_store(request.param)
    transport = ASGITransport(app=create_app(settings=test_settings, store=store))
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        await store.close()
