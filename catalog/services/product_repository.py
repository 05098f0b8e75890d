"""Product repository for database access."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from catalog.models.category import ProductCategory
from catalog.models.product import Product
from catalog.services.exceptions import ProductNotFoundError


class ProductRepository:
    """Handles database operations for Product entities.

    The repository never commits. Writes are flushed so generated values and
    constraint violations surface immediately, and the caller decides when
    the surrounding transaction ends.
    """

    def __init__(self, session: Session) -> None:
        """Initialize repository with a SQLAlchemy session.

        Args:
            session: Active database session for executing queries
        """
        self._session = session

    def insert(self, product: Product) -> Product:
        """Persist a new product and assign its identifier.

        Args:
            product: Transient Product instance

        Returns:
            The same instance, now carrying its database ID

        Raises:
            IntegrityError: If the SKU already exists
        """
        self._session.add(product)
        self._session.flush()
        return product

    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product | None:
        """Fetch a product by its database ID.

        Args:
            product_id: Database identifier
            for_update: Lock the row until the transaction ends

        Returns:
            Product instance if found, None otherwise
        """
        if for_update:
            stmt = (
                select(Product)
                .where(Product.id == product_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            return self._session.scalars(stmt).first()
        return self._session.get(Product, product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        """Fetch a product by its exact SKU."""
        return self._session.scalars(select(Product).where(Product.sku == sku)).first()

    def list_all(self) -> Sequence[Product]:
        return self._session.scalars(select(Product).order_by(Product.id)).all()

    def list_active(self) -> Sequence[Product]:
        return self._session.scalars(
            select(Product).where(Product.active.is_(True)).order_by(Product.id)
        ).all()

    def list_by_category(self, category: ProductCategory) -> Sequence[Product]:
        return self._session.scalars(
            select(Product).where(Product.category == category).order_by(Product.id)
        ).all()

    def list_by_name_substring(self, text: str) -> Sequence[Product]:
        """Case-insensitive containment match on the product name."""
        return self._session.scalars(
            select(Product).where(Product.name.ilike(f"%{text}%")).order_by(Product.id)
        ).all()

    def list_by_price_range(self, min_price: Decimal, max_price: Decimal) -> Sequence[Product]:
        """Products whose price lies within [min_price, max_price]."""
        return self._session.scalars(
            select(Product)
            .where(Product.price >= min_price, Product.price <= max_price)
            .order_by(Product.id)
        ).all()

    def list_low_stock(self, threshold: int) -> Sequence[Product]:
        """Active products with quantity at or below the threshold."""
        return self._session.scalars(
            select(Product)
            .where(Product.quantity <= threshold, Product.active.is_(True))
            .order_by(Product.id)
        ).all()

    def update(self, product: Product) -> Product:
        """Write back every column of a previously inserted product.

        Args:
            product: Product carrying the new field values

        Returns:
            The persistent instance after the overwrite

        Raises:
            ProductNotFoundError: If no product has this ID
            IntegrityError: If the new SKU collides with another product
        """
        existing = self._session.get(Product, product.id)
        if existing is None:
            raise ProductNotFoundError.for_id(product.id)

        if existing is not product:
            existing.name = product.name
            existing.description = product.description
            existing.price = product.price
            existing.quantity = product.quantity
            existing.sku = product.sku
            existing.category = product.category
            existing.active = product.active
            existing.updated_at = product.updated_at

        self._session.flush()
        return existing

    def delete(self, product_id: int) -> None:
        """Remove a product permanently.

        Raises:
            ProductNotFoundError: If no product has this ID
        """
        product = self.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError.for_id(product_id)

        self._session.delete(product)
        self._session.flush()

    def set_active(self, product_id: int, active: bool, updated_at: datetime) -> bool:
        """Flip the active flag with a single UPDATE statement.

        Returns:
            True if a row matched, False otherwise
        """
        result = self._session.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(active=active, updated_at=updated_at)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    def adjust_quantity(self, product_id: int, delta: int, updated_at: datetime) -> bool:
        """Add ``delta`` to the stock level unless the result would be negative.

        The check and the write are one UPDATE statement, so concurrent
        adjustments always see each other's committed quantity.

        Returns:
            True if the row was changed, False if it is missing or the stock
            is insufficient
        """
        result = self._session.execute(
            update(Product)
            .where(Product.id == product_id, Product.quantity + delta >= 0)
            .values(quantity=Product.quantity + delta, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(Product))

    def count_active(self) -> int:
        return self._session.scalar(
            select(func.count()).select_from(Product).where(Product.active.is_(True))
        )

    def count_by_category(self, category: ProductCategory) -> int:
        return self._session.scalar(
            select(func.count()).select_from(Product).where(Product.category == category)
        )

    def exists_by_sku(self, sku: str, *, exclude_id: int | None = None) -> bool:
        """Check whether any product (optionally other than ``exclude_id``) owns the SKU."""
        stmt = select(Product.id).where(Product.sku == sku)
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        return bool(self._session.scalar(select(stmt.exists())))
