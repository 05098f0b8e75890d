"""ORM models exposed for external modules."""
from .base import Base
from .category import ProductCategory
from .product import Product

__all__ = [
    "Base",
    "Product",
    "ProductCategory",
]
