"""Services module for business logic."""
from __future__ import annotations

from .exceptions import (
    DuplicateSkuError,
    InsufficientStockError,
    InvalidInputError,
    MissingFieldError,
    ProductNotFoundError,
    ProductServiceError,
)
from .product_repository import ProductRepository
from .product_service import ProductService
from .product_validator import validate_product

__all__ = [
    "DuplicateSkuError",
    "InsufficientStockError",
    "InvalidInputError",
    "MissingFieldError",
    "ProductNotFoundError",
    "ProductRepository",
    "ProductService",
    "ProductServiceError",
    "validate_product",
]
