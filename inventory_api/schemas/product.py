"""Pydantic schemas for the products resource."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProductWrite(BaseModel):
    """Body of POST and PUT; every field is stored as given."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str | None = Field(default=None, alias="productName")
    description: str | None = None
    quantity: int | None = None
    price: float | None = None


class QuantityUpdate(BaseModel):
    quantity: int | None = None


class ProductRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    product_name: str | None = Field(default=None, alias="productName")
    description: str | None = None
    quantity: int | None = None
    price: float | None = None
