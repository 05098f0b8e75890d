"""Product model definition."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Enum as SAEnum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UTCDateTime
from .category import ProductCategory


class Product(Base):
    """A catalog entry with price, stock level and lifecycle timestamps."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2, asdecimal=True), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sku: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    category: Mapped[ProductCategory | None] = mapped_column(
        SAEnum(ProductCategory, name="product_category", native_enum=False, length=20),
        nullable=True,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
    )

    @property
    def is_in_stock(self) -> bool:
        return self.quantity is not None and self.quantity > 0

    def is_low_stock(self, threshold: int) -> bool:
        return self.quantity is not None and self.quantity <= threshold

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, name='{self.name}', sku='{self.sku}', "
            f"price={self.price}, quantity={self.quantity}, active={self.active})>"
        )
