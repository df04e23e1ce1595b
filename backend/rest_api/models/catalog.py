"""
Catalog Models: Category, Product.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Boolean, CheckConstraint, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, BigIntPK, TimestampMixin
from .restaurant import restaurant_category

if TYPE_CHECKING:
    from .restaurant import Restaurant


class Category(Base):
    """
    Menu category shared by every restaurant that offers it.

    Names are globally unique: adding "Desserts" to a second restaurant
    reuses the existing row. The row is deleted only when no restaurant
    offers it and no product references it.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)

    restaurants: Mapped[list["Restaurant"]] = relationship(
        secondary=restaurant_category, viewonly=True
    )
    products: Mapped[list["Product"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class Product(TimestampMixin, Base):
    """A menu item of one restaurant, filed under one category."""

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("category.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Units in stock
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
        Index("ix_product_restaurant_category", "restaurant_id", "category_id"),
    )

    restaurant: Mapped["Restaurant"] = relationship(back_populates="products")
    category: Mapped["Category"] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', restaurant_id={self.restaurant_id})>"
