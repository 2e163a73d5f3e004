"""
Credential Store interface — the only shared mutable resource.

Implementations run one atomic unit of work per call.  Not-found is
reported as ``None`` / ``False``; every driver failure is re-raised as
:class:`StoreError` (or :class:`UniqueViolationError` for duplicate
unique keys) carrying the driver's own message.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inventory_api.core.exceptions import StoreError, UniqueViolationError
from inventory_api.models.product import Product
from inventory_api.models.user import User

PRODUCT_FIELDS = ("product_name", "description", "quantity", "price")


def describe_error(exc: SQLAlchemyError) -> str:
    """Return the driver's message, without SQLAlchemy's statement dump."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def translate_errors() -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        message = describe_error(exc)
        if "unique" in message.lower():
            raise UniqueViolationError(message) from exc
        raise StoreError(message) from exc
    except SQLAlchemyError as exc:
        raise StoreError(describe_error(exc)) from exc


class CredentialStore(abc.ABC):
    """Persistence for users and products."""

    backend: str
    # Widest primary key the driver can bind; anything outside cannot exist.
    max_id: int = 2**63 - 1

    def accepts_id(self, product_id: int) -> bool:
        return -self.max_id - 1 <= product_id <= self.max_id

    @abc.abstractmethod
    async def create_schema(self) -> None:
        """Create the ``users`` and ``products`` tables if they are missing."""

    @abc.abstractmethod
    async def close(self) -> None: ...

    @abc.abstractmethod
    async def ping(self) -> bool:
        """``True`` when the database answers a trivial query."""

    # ── Users ───────────────────────────────────────────────────────
    @abc.abstractmethod
    async def insert_user(self, username: str, email: str, password_hash: str) -> User: ...

    @abc.abstractmethod
    async def find_user_by_username(self, username: str) -> User | None: ...

    # ── Products ────────────────────────────────────────────────────
    @abc.abstractmethod
    async def insert_product(self, fields: Mapping[str, Any]) -> Product: ...

    @abc.abstractmethod
    async def list_products(self) -> list[Product]:
        """All products ordered by ascending id."""

    @abc.abstractmethod
    async def get_product(self, product_id: int) -> Product | None: ...

    @abc.abstractmethod
    async def update_product(self, product_id: int, fields: Mapping[str, Any]) -> Product | None:
        """Replace every product field; return the stored row or ``None``."""

    @abc.abstractmethod
    async def update_product_quantity(self, product_id: int, quantity: int | None) -> Product | None: ...

    @abc.abstractmethod
    async def delete_product(self, product_id: int) -> bool: ...


def product_values(fields: Mapping[str, Any]) -> dict[str, Any]:
    """All four product columns; absent keys become NULL."""
    return {name: fields.get(name) for name in PRODUCT_FIELDS}
