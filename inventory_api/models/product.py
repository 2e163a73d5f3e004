"""
Product model.

Column names (``productid``, ``productname``) match the tables created by
earlier deployments so existing database files keep working.
"""

from __future__ import annotations

from sqlalchemy import Column, Float, Integer, String, Text

from inventory_api.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id: int = Column("productid", Integer, primary_key=True, autoincrement=True)  # type: ignore[assignment]
    product_name: str | None = Column("productname", String(255), nullable=True)  # type: ignore[assignment]
    description: str | None = Column(Text, nullable=True)  # type: ignore[assignment]
    quantity: int | None = Column(Integer, nullable=True)  # type: ignore[assignment]
    price: float | None = Column(Float, nullable=True)  # type: ignore[assignment]
