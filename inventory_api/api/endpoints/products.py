"""
Product CRUD endpoints.

Every route requires a valid bearer token; any authenticated user may
read or change any product.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from inventory_api.api.deps import get_current_user, get_store
from inventory_api.core.exceptions import NotFoundError
from inventory_api.core.security import TokenClaims
from inventory_api.db.store import CredentialStore
from inventory_api.models.product import Product
from inventory_api.schemas.auth import MessageResponse
from inventory_api.schemas.product import ProductRead, ProductWrite, QuantityUpdate

router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)

_NOT_FOUND = "Product not found"


def _read(product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        product_name=product.product_name,
        description=product.description,
        quantity=product.quantity,
        price=product.price,
    )


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductWrite,
    store: CredentialStore = Depends(get_store),
    user: TokenClaims = Depends(get_current_user),
) -> ProductRead:
    product = await store.insert_product(body.model_dump())
    logger.info("Product %s created by %s", product.id, user.username)
    return _read(product)


@router.get("", response_model=list[ProductRead])
async def list_products(store: CredentialStore = Depends(get_store)) -> list[ProductRead]:
    """All products, ascending by id."""
    return [_read(p) for p in await store.list_products()]


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: int,
    store: CredentialStore = Depends(get_store),
) -> ProductRead:
    product = await store.get_product(product_id)
    if product is None:
        raise NotFoundError(_NOT_FOUND)
    return _read(product)


@router.put("/{product_id}", response_model=ProductRead)
async def replace_product(
    product_id: int,
    body: ProductWrite,
    store: CredentialStore = Depends(get_store),
    user: TokenClaims = Depends(get_current_user),
) -> ProductRead:
    """Overwrite all four fields; absent fields are stored as null."""
    product = await store.update_product(product_id, body.model_dump())
    if product is None:
        raise NotFoundError(_NOT_FOUND)
    logger.info("Product %s replaced by %s", product_id, user.username)
    return _read(product)


@router.patch("/{product_id}", response_model=QuantityUpdate)
async def update_quantity(
    product_id: int,
    body: QuantityUpdate,
    store: CredentialStore = Depends(get_store),
    user: TokenClaims = Depends(get_current_user),
) -> QuantityUpdate:
    product = await store.update_product_quantity(product_id, body.quantity)
    if product is None:
        raise NotFoundError(_NOT_FOUND)
    logger.info("Product %s quantity set to %s by %s", product_id, product.quantity, user.username)
    return QuantityUpdate(quantity=product.quantity)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: int,
    store: CredentialStore = Depends(get_store),
    user: TokenClaims = Depends(get_current_user),
) -> MessageResponse:
    if not await store.delete_product(product_id):
        raise NotFoundError(_NOT_FOUND)
    logger.info("Product %s deleted by %s", product_id, user.username)
    return MessageResponse(message="Product deleted successfully")
