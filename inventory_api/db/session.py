"""
Store selection — builds the configured Credential Store once at startup.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from inventory_api.core.config import Settings
from inventory_api.db.async_store import AsyncSQLStore
from inventory_api.db.store import CredentialStore
from inventory_api.db.sync_store import SyncSQLStore

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = {"aiosqlite", "asyncpg"}


def engine_options(database_url: str) -> dict[str, Any]:
    url = make_url(database_url)
    options: dict[str, Any] = {"echo": False}

    if url.get_backend_name() == "postgresql":
        options.update(
            {
                "pool_pre_ping": True,
                "pool_size": 20,
                "max_overflow": 10,
                "pool_recycle": 300,
            }
        )
    elif url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        # In-memory databases live and die with their connection; share one.
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    return options


def build_store(settings: Settings) -> CredentialStore:
    """Pick the sync or asyncio implementation from the URL's driver."""
    database_url = settings.database_url
    url = make_url(database_url)
    options = engine_options(database_url)

    if url.get_driver_name() in ASYNC_DRIVERS:
        store: CredentialStore = AsyncSQLStore(database_url, **options)
    else:
        store = SyncSQLStore(database_url, **options)
    logger.info("Credential store: %s (%s)", type(store).__name__, store.backend)
    return store
