"""Public schema exports."""

from .product import (
    CategoryCount,
    MessageResponse,
    ProductPayload,
    ProductResponse,
    ProductStats,
    StockAdjustmentRequest,
    StockUpdateRequest,
)

__all__ = [
    "CategoryCount",
    "MessageResponse",
    "ProductPayload",
    "ProductResponse",
    "ProductStats",
    "StockAdjustmentRequest",
    "StockUpdateRequest",
]
