"""Credential store behaviour shared by the sync and asyncio backends."""

import pytest
from httpx import ASGITransport, AsyncClient

from inventory_api.core.exceptions import StoreError, UniqueViolationError
from inventory_api.core.security import TokenService
from inventory_api.db.store import CredentialStore
from inventory_api.main import create_app

from conftest import make_store


@pytest.mark.asyncio
async def test_insert_user_assigns_id(store: CredentialStore):
    user = await store.insert_user("alice", "a@x.com", "hash")
    assert user.id == 1
    found = await store.find_user_by_username("alice")
    assert found.id == user.id
    assert found.password_hash == "hash"


@pytest.mark.asyncio
async def test_username_lookup_is_exact(store: CredentialStore):
    await store.insert_user("alice", "a@x.com", "hash")
    assert await store.find_user_by_username("Alice") is None
    assert await store.find_user_by_username("alic") is None


@pytest.mark.asyncio
async def test_duplicate_username_raises_unique_violation(store: CredentialStore):
    await store.insert_user("alice", "a@x.com", "hash")
    with pytest.raises(UniqueViolationError, match="(?i)unique"):
        await store.insert_user("alice", "b@x.com", "hash")
    # the failed insert left nothing behind
    second = await store.insert_user("bob", "b@x.com", "hash")
    assert second.id == 2


@pytest.mark.asyncio
async def test_product_crud(store: CredentialStore):
    product = await store.insert_product(
        {"product_name": "Widget", "description": "d", "quantity": 5, "price": 9.99}
    )
    assert product.id == 1

    updated = await store.update_product(1, {"product_name": "Gadget", "quantity": 1})
    assert (updated.product_name, updated.description, updated.quantity, updated.price) == (
        "Gadget",
        None,
        1,
        None,
    )

    patched = await store.update_product_quantity(1, 8)
    assert patched.quantity == 8
    assert patched.product_name == "Gadget"

    assert await store.delete_product(1) is True
    assert await store.delete_product(1) is False
    assert await store.get_product(1) is None


@pytest.mark.asyncio
async def test_update_missing_product_returns_none(store: CredentialStore):
    assert await store.update_product(42, {"product_name": "x"}) is None
    assert await store.update_product_quantity(42, 1) is None


@pytest.mark.asyncio
async def test_ping(store: CredentialStore):
    assert await store.ping() is True


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", ["sync", "async"])
async def test_driver_failure_becomes_store_error(kind: str):
    """Without the schema every query fails inside the driver."""
    bare = make_store(kind)
    try:
        with pytest.raises(StoreError, match="no such table: products"):
            await bare.list_products()
    finally:
        await bare.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", ["sync", "async"])
async def test_store_error_surfaces_as_500_with_raw_message(kind: str, test_settings):
    bare = make_store(kind)
    app = create_app(settings=test_settings, store=bare)
    token = TokenService(test_settings.JWT_SECRET).issue(1, "alice")
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get(
                "/api/products", headers={"Authorization": f"Bearer {token}"}
            )
    finally:
        await bare.close()
    assert resp.status_code == 500
    assert resp.json() == {"error": "no such table: products"}


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": True}
