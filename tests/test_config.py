"""Settings parsing and store selection."""

import pytest

from inventory_api.core.config import Settings
from inventory_api.db.async_store import AsyncSQLStore
from inventory_api.db.session import build_store, engine_options
from inventory_api.db.sync_store import SyncSQLStore


def _settings(**overrides) -> Settings:
    overrides.setdefault("DATABASE_URL", None)
    return Settings(_env_file=None, **overrides)


@pytest.mark.parametrize(
    "backend, expected",
    [
        ("sqlite", "sqlite:///data.db"),
        ("aiosqlite", "sqlite+aiosqlite:///data.db"),
        ("postgres", "postgresql+asyncpg://u:p@db/inv"),
    ],
)
def test_database_url_follows_backend(backend, expected):
    settings = _settings(
        STORE_BACKEND=backend, SQLITE_PATH="data.db", POSTGRES_URL="postgresql+asyncpg://u:p@db/inv"
    )
    assert settings.database_url == expected


def test_explicit_database_url_wins():
    settings = _settings(STORE_BACKEND="postgres", DATABASE_URL="sqlite://")
    assert settings.database_url == "sqlite://"


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert _settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_defaults():
    settings = _settings()
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 60
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.PORT == 3000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "backend, store_cls",
    [("sqlite", SyncSQLStore), ("aiosqlite", AsyncSQLStore)],
)
async def test_build_store_picks_implementation(backend, store_cls, tmp_path):
    store = build_store(_settings(STORE_BACKEND=backend, SQLITE_PATH=str(tmp_path / "db.sqlite")))
    try:
        assert isinstance(store, store_cls)
        await store.create_schema()
        assert await store.ping() is True
        assert (tmp_path / "db.sqlite").exists()
    finally:
        await store.close()


def test_postgres_pool_options():
    options = engine_options("postgresql+asyncpg://u:p@db/inv")
    assert options["pool_size"] == 20
    assert "poolclass" not in options


def test_in_memory_sqlite_shares_one_connection():
    from sqlalchemy.pool import StaticPool

    assert engine_options("sqlite://")["poolclass"] is StaticPool
    assert "poolclass" not in engine_options("sqlite:///file.db")
