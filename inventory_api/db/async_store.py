"""
Asyncio store — embedded ``aiosqlite`` or client/server ``asyncpg``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from inventory_api.db.base import Base
from inventory_api.db.store import CredentialStore, product_values, translate_errors
from inventory_api.models.product import Product
from inventory_api.models.user import User

logger = logging.getLogger(__name__)


class AsyncSQLStore(CredentialStore):
    def __init__(self, database_url: str, **engine_options: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.backend = self._engine.url.drivername
        if self._engine.url.get_backend_name() == "postgresql":
            # products.productid is INTEGER (int4) there
            self.max_id = 2**31 - 1

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Database ping failed: %s", exc)
            return False

    # ── Users ───────────────────────────────────────────────────────
    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        with translate_errors():
            async with self._session_factory.begin() as session:
                session.add(user)
        return user

    async def find_user_by_username(self, username: str) -> User | None:
        with translate_errors():
            async with self._session_factory() as session:
                result = await session.execute(select(User).where(User.username == username))
                return result.scalars().first()

    # ── Products ────────────────────────────────────────────────────
    async def insert_product(self, fields: Mapping[str, Any]) -> Product:
        product = Product(**product_values(fields))
        with translate_errors():
            async with self._session_factory.begin() as session:
                session.add(product)
        return product

    async def list_products(self) -> list[Product]:
        with translate_errors():
            async with self._session_factory() as session:
                result = await session.execute(select(Product).order_by(Product.id))
                return list(result.scalars())

    async def get_product(self, product_id: int) -> Product | None:
        if not self.accepts_id(product_id):
            return None
        with translate_errors():
            async with self._session_factory() as session:
                return await session.get(Product, product_id)

    async def update_product(self, product_id: int, fields: Mapping[str, Any]) -> Product | None:
        return await self._update(product_id, product_values(fields))

    async def update_product_quantity(self, product_id: int, quantity: int | None) -> Product | None:
        return await self._update(product_id, {"quantity": quantity})

    async def delete_product(self, product_id: int) -> bool:
        if not self.accepts_id(product_id):
            return False
        with translate_errors():
            async with self._session_factory.begin() as session:
                result = await session.execute(delete(Product).where(Product.id == product_id))
        return result.rowcount > 0

    async def _update(self, product_id: int, values: dict[str, Any]) -> Product | None:
        if not self.accepts_id(product_id):
            return None
        with translate_errors():
            async with self._session_factory.begin() as session:
                product = await session.get(Product, product_id)
                if product is None:
                    return None
                for key, value in values.items():
                    setattr(product, key, value)
                await session.flush()
                await session.refresh(product)
        return product
