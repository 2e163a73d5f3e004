"""
Embedded synchronous store (stdlib ``sqlite3`` through SQLAlchemy).

Each call runs in a worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import create_engine, delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from inventory_api.db.base import Base
from inventory_api.db.store import CredentialStore, product_values, translate_errors
from inventory_api.models.product import Product
from inventory_api.models.user import User

logger = logging.getLogger(__name__)


class SyncSQLStore(CredentialStore):
    def __init__(self, database_url: str, **engine_options: Any) -> None:
        self._engine = create_engine(database_url, **engine_options)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        self.backend = self._engine.url.drivername

    async def create_schema(self) -> None:
        await asyncio.to_thread(Base.metadata.create_all, self._engine)

    async def close(self) -> None:
        await asyncio.to_thread(self._engine.dispose)

    async def ping(self) -> bool:
        return await asyncio.to_thread(self._ping)

    async def insert_user(self, username: str, email: str, password_hash: str) -> User:
        return await asyncio.to_thread(self._insert_user, username, email, password_hash)

    async def find_user_by_username(self, username: str) -> User | None:
        return await asyncio.to_thread(self._find_user_by_username, username)

    async def insert_product(self, fields: Mapping[str, Any]) -> Product:
        return await asyncio.to_thread(self._insert_product, fields)

    async def list_products(self) -> list[Product]:
        return await asyncio.to_thread(self._list_products)

    async def get_product(self, product_id: int) -> Product | None:
        if not self.accepts_id(product_id):
            return None
        return await asyncio.to_thread(self._get_product, product_id)

    async def update_product(self, product_id: int, fields: Mapping[str, Any]) -> Product | None:
        if not self.accepts_id(product_id):
            return None
        return await asyncio.to_thread(self._update_product, product_id, product_values(fields))

    async def update_product_quantity(self, product_id: int, quantity: int | None) -> Product | None:
        if not self.accepts_id(product_id):
            return None
        return await asyncio.to_thread(self._update_product, product_id, {"quantity": quantity})

    async def delete_product(self, product_id: int) -> bool:
        if not self.accepts_id(product_id):
            return False
        return await asyncio.to_thread(self._delete_product, product_id)

    # ── Blocking implementations ────────────────────────────────────
    def _ping(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Database ping failed: %s", exc)
            return False

    def _insert_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        with translate_errors(), self._session_factory.begin() as session:
            session.add(user)
        return user

    def _find_user_by_username(self, username: str) -> User | None:
        with translate_errors(), self._session_factory() as session:
            return session.scalars(select(User).where(User.username == username)).first()

    def _insert_product(self, fields: Mapping[str, Any]) -> Product:
        product = Product(**product_values(fields))
        with translate_errors(), self._session_factory.begin() as session:
            session.add(product)
        return product

    def _list_products(self) -> list[Product]:
        with translate_errors(), self._session_factory() as session:
            return list(session.scalars(select(Product).order_by(Product.id)))

    def _get_product(self, product_id: int) -> Product | None:
        with translate_errors(), self._session_factory() as session:
            return session.get(Product, product_id)

    def _update_product(self, product_id: int, values: dict[str, Any]) -> Product | None:
        with translate_errors(), self._session_factory.begin() as session:
            product = session.get(Product, product_id)
            if product is None:
                return None
            for key, value in values.items():
                setattr(product, key, value)
            session.flush()
            session.refresh(product)
        return product

    def _delete_product(self, product_id: int) -> bool:
        with translate_errors(), self._session_factory.begin() as session:
            result = session.execute(delete(Product).where(Product.id == product_id))
        return result.rowcount > 0
