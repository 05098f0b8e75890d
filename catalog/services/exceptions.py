"""Product domain exceptions.

Raised by the service layer when business rules are violated. The API layer
translates them into HTTP responses; see ``catalog.api.errors``.
"""
from __future__ import annotations


class ProductServiceError(Exception):
    """Base class for recoverable, per-request product failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(ProductServiceError):
    """The requested product does not exist."""

    @classmethod
    def for_id(cls, product_id: int) -> ProductNotFoundError:
        return cls(f"Product not found with id: {product_id}")

    @classmethod
    def for_sku(cls, sku: str) -> ProductNotFoundError:
        return cls(f"Product not found with SKU: {sku}")


class DuplicateSkuError(ProductServiceError):
    """A different product already owns the SKU."""

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product with SKU '{sku}' already exists")
        self.sku = sku


class InvalidInputError(ProductServiceError):
    """A field failed its constraint check."""


class InsufficientStockError(ProductServiceError):
    """A stock adjustment would drive the quantity below zero."""

    def __init__(self, current_quantity: int) -> None:
        super().__init__(f"Insufficient stock. Current quantity: {current_quantity}")
        self.current_quantity = current_quantity


class MissingFieldError(ProductServiceError):
    """A partial-update payload omitted its required field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field.capitalize()} is required")
        self.field = field
