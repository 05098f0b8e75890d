"""Service layer enforcing product invariants against the repository."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.models.category import ProductCategory
from catalog.models.product import Product
from catalog.schemas.product import ProductPayload
from catalog.services.exceptions import (
    DuplicateSkuError,
    InsufficientStockError,
    InvalidInputError,
    ProductNotFoundError,
)
from catalog.services.product_repository import ProductRepository
from catalog.services.product_validator import validate_product

logger = logging.getLogger(__name__)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, nudged forward so it is strictly after ``previous``."""
    now = datetime.now(timezone.utc)
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def _is_sku_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "sku" in message or "unique" in message or "duplicate" in message


class ProductService:
    """High-level product operations, one transaction per write."""

    def __init__(self, session: Session) -> None:
        """Initialize service with a database session.

        Args:
            session: Active database session
        """
        self._session = session
        self._repository = ProductRepository(session)

    @contextmanager
    def _transaction(self) -> Generator[None, None, None]:
        """Commit the enclosed work, or roll all of it back on any error."""
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def _load_for_update(self, product_id: int) -> Product:
        product = self._repository.get_by_id(product_id, for_update=True)
        if product is None:
            raise ProductNotFoundError.for_id(product_id)
        return product

    # Queries

    def get_by_id(self, product_id: int) -> Product:
        """Fetch a product or raise ``ProductNotFoundError``."""
        product = self._repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError.for_id(product_id)
        return product

    def get_by_sku(self, sku: str) -> Product:
        """Fetch a product by SKU or raise ``ProductNotFoundError``."""
        product = self._repository.get_by_sku(sku)
        if product is None:
            raise ProductNotFoundError.for_sku(sku)
        return product

    def list_all(self) -> Sequence[Product]:
        return self._repository.list_all()

    def list_active(self) -> Sequence[Product]:
        return self._repository.list_active()

    def list_by_category(self, category: ProductCategory) -> Sequence[Product]:
        return self._repository.list_by_category(category)

    def search_by_name(self, name: str) -> Sequence[Product]:
        return self._repository.list_by_name_substring(name)

    def list_by_price_range(self, min_price: Decimal, max_price: Decimal) -> Sequence[Product]:
        return self._repository.list_by_price_range(min_price, max_price)

    def list_low_stock(self, threshold: int) -> Sequence[Product]:
        return self._repository.list_low_stock(threshold)

    def search(
        self,
        name: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> Sequence[Product]:
        """Single-criterion search.

        A non-blank ``name`` wins and the price bounds are ignored; otherwise
        both bounds must be present to filter by price; otherwise every
        product is returned.
        """
        if name is not None and name.strip():
            return self.search_by_name(name)
        if min_price is not None and max_price is not None:
            return self.list_by_price_range(min_price, max_price)
        return self.list_all()

    def count(self) -> int:
        return self._repository.count()

    def count_active(self) -> int:
        return self._repository.count_active()

    def count_by_category(self, category: ProductCategory) -> int:
        return self._repository.count_by_category(category)

    # Commands

    def create(self, payload: ProductPayload) -> Product:
        """Validate and insert a new product.

        Args:
            payload: Product fields from the request body

        Returns:
            The persisted product with ID and timestamps assigned

        Raises:
            InvalidInputError: If a field violates its constraints
            DuplicateSkuError: If the SKU is already taken
        """
        validate_product(payload)

        try:
            with self._transaction():
                if self._repository.exists_by_sku(payload.sku):
                    logger.warning(f"Attempted to create product with duplicate SKU: {payload.sku}")
                    raise DuplicateSkuError(payload.sku)

                now = next_timestamp()
                product = Product(
                    name=payload.name,
                    description=payload.description,
                    price=payload.price,
                    quantity=payload.quantity,
                    sku=payload.sku,
                    category=payload.category,
                    active=payload.active,
                    created_at=now,
                    updated_at=now,
                )
                self._repository.insert(product)
        except IntegrityError as e:
            if _is_sku_violation(e):
                logger.warning(f"SKU {payload.sku} was claimed concurrently")
                raise DuplicateSkuError(payload.sku) from e
            raise

        logger.info(f"Created product {product.id} (sku={product.sku})")
        return product

    def update(self, product_id: int, payload: ProductPayload) -> Product:
        """Overwrite every mutable field of an existing product.

        Raises:
            ProductNotFoundError: If the product does not exist
            DuplicateSkuError: If the new SKU belongs to another product
            InvalidInputError: If a field violates its constraints
        """
        try:
            with self._transaction():
                product = self._load_for_update(product_id)

                if payload.sku != product.sku and self._repository.exists_by_sku(
                    payload.sku, exclude_id=product_id
                ):
                    logger.warning(f"Attempted to update product {product_id} with duplicate SKU: {payload.sku}")
                    raise DuplicateSkuError(payload.sku)

                validate_product(payload)

                product.name = payload.name
                product.description = payload.description
                product.price = payload.price
                product.quantity = payload.quantity
                product.sku = payload.sku
                product.category = payload.category
                product.active = payload.active
                product.updated_at = next_timestamp(product.updated_at)
                product = self._repository.update(product)
        except IntegrityError as e:
            if _is_sku_violation(e):
                raise DuplicateSkuError(payload.sku) from e
            raise

        logger.info(f"Updated product {product_id}")
        return product

    def delete(self, product_id: int) -> None:
        """Hard-delete a product.

        Raises:
            ProductNotFoundError: If the product does not exist
        """
        with self._transaction():
            self._repository.delete(product_id)
        logger.info(f"Deleted product {product_id}")

    def activate(self, product_id: int) -> Product:
        return self._set_active(product_id, True)

    def deactivate(self, product_id: int) -> Product:
        return self._set_active(product_id, False)

    def _set_active(self, product_id: int, active: bool) -> Product:
        with self._transaction():
            product = self._load_for_update(product_id)
            if not self._repository.set_active(product_id, active, next_timestamp(product.updated_at)):
                raise ProductNotFoundError.for_id(product_id)
        self._session.refresh(product)
        logger.info(f"{'Activated' if active else 'Deactivated'} product {product_id}")
        return product

    def set_stock(self, product_id: int, quantity: int) -> Product:
        """Replace the stock level with an absolute value.

        Raises:
            ProductNotFoundError: If the product does not exist
            InvalidInputError: If ``quantity`` is negative
        """
        with self._transaction():
            product = self._load_for_update(product_id)
            if quantity < 0:
                raise InvalidInputError("Quantity cannot be negative")
            product.quantity = quantity
            product.updated_at = next_timestamp(product.updated_at)
            product = self._repository.update(product)
        logger.info(f"Set stock of product {product_id} to {quantity}")
        return product

    def adjust_stock(self, product_id: int, delta: int) -> Product:
        """Add ``delta`` (possibly negative) to the current stock level.

        The quantity check and the write happen in one conditional UPDATE;
        the row is re-read afterwards to report the committed quantity.

        Raises:
            ProductNotFoundError: If the product does not exist
            InsufficientStockError: If the result would be negative
        """
        with self._transaction():
            product = self._load_for_update(product_id)
            updated_at = next_timestamp(product.updated_at)
            adjusted = self._repository.adjust_quantity(product_id, delta, updated_at)
            product = self._load_for_update(product_id)
            if not adjusted:
                logger.warning(
                    f"Rejected stock adjustment of {delta} for product {product_id} "
                    f"(current quantity {product.quantity})"
                )
                raise InsufficientStockError(product.quantity)
        logger.info(f"Adjusted stock of product {product_id} by {delta} to {product.quantity}")
        return product
