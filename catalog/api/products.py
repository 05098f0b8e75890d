"""Product catalog API endpoints."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from catalog.core.config import get_settings
from catalog.core.db import get_session
from catalog.models.category import ProductCategory
from catalog.models.product import Product
from catalog.schemas.product import (
    CategoryCount,
    MessageResponse,
    ProductPayload,
    ProductResponse,
    ProductStats,
    StockAdjustmentRequest,
    StockUpdateRequest,
)
from catalog.services.exceptions import MissingFieldError
from catalog.services.product_service import ProductService

settings = get_settings()

router = APIRouter(prefix="/products", tags=["products"])


def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    """Dependency to get ProductService instance."""
    return ProductService(session)


def _to_responses(products: Iterable[Product]) -> list[ProductResponse]:
    return [ProductResponse.model_validate(p) for p in products]


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List products",
    description="Return every product, or only active ones when `active=true`.",
)
def list_products(
    active: bool | None = Query(default=None, description="Only return active products when true"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    if active:
        return _to_responses(service.list_active())
    return _to_responses(service.list_all())


@router.get("/stats", response_model=ProductStats, summary="Aggregate product counts")
def get_product_stats(service: ProductService = Depends(get_product_service)) -> ProductStats:
    return ProductStats(total_products=service.count(), active_products=service.count_active())


@router.get("/categories", response_model=list[ProductCategory], summary="List product categories")
def get_categories() -> list[ProductCategory]:
    return list(ProductCategory)


@router.get(
    "/search",
    response_model=list[ProductResponse],
    summary="Search products",
    description=(
        "Search by name (case-insensitive substring). When no name is given and both "
        "price bounds are, filter by inclusive price range instead. Otherwise return all products."
    ),
)
def search_products(
    name: str | None = Query(default=None, description="Name substring"),
    min_price: Decimal | None = Query(default=None, alias="minPrice", description="Inclusive lower price bound"),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", description="Inclusive upper price bound"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    return _to_responses(service.search(name=name, min_price=min_price, max_price=max_price))


@router.get(
    "/low-stock",
    response_model=list[ProductResponse],
    summary="List active products at or below a stock threshold",
)
def get_low_stock_products(
    threshold: int = Query(default=settings.low_stock_default_threshold, description="Inclusive quantity threshold"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    return _to_responses(service.list_low_stock(threshold))


@router.get("/sku/{sku}", response_model=ProductResponse, summary="Get product by SKU")
def get_product_by_sku(sku: str, service: ProductService = Depends(get_product_service)) -> ProductResponse:
    return ProductResponse.model_validate(service.get_by_sku(sku))


@router.get("/category/{category}", response_model=list[ProductResponse], summary="List products in a category")
def get_products_by_category(
    category: ProductCategory,
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    return _to_responses(service.list_by_category(category))


@router.get("/category/{category}/count", response_model=CategoryCount, summary="Count products in a category")
def count_products_by_category(
    category: ProductCategory,
    service: ProductService = Depends(get_product_service),
) -> CategoryCount:
    return CategoryCount(category=category, count=service.count_by_category(category))


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)) -> ProductResponse:
    """
    Get a product by ID.

    Raises:
        ProductNotFoundError: Mapped to 404 if the product does not exist
    """
    return ProductResponse.model_validate(service.get_by_id(product_id))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. SKU must be unique.",
)
def create_product(
    product: ProductPayload,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """
    Create a new product.

    Raises:
        DuplicateSkuError: Mapped to 400 if the SKU already exists
        InvalidInputError: Mapped to 400 if a field violates its constraints
    """
    return ProductResponse.model_validate(service.create(product))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Update a product (full update)",
    description="Overwrite every mutable field of a product. SKU must remain unique.",
)
def update_product(
    product_id: int,
    product: ProductPayload,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    return ProductResponse.model_validate(service.update(product_id, product))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product by ID",
)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)) -> None:
    service.delete(product_id)


@router.put("/{product_id}/deactivate", response_model=MessageResponse, summary="Deactivate a product")
def deactivate_product(product_id: int, service: ProductService = Depends(get_product_service)) -> MessageResponse:
    service.deactivate(product_id)
    return MessageResponse(message="Product deactivated successfully")


@router.put("/{product_id}/activate", response_model=MessageResponse, summary="Activate a product")
def activate_product(product_id: int, service: ProductService = Depends(get_product_service)) -> MessageResponse:
    service.activate(product_id)
    return MessageResponse(message="Product activated successfully")


@router.put("/{product_id}/stock", response_model=ProductResponse, summary="Set the stock level")
def update_stock(
    product_id: int,
    body: StockUpdateRequest | None = Body(default=None),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    if body is None or body.quantity is None:
        raise MissingFieldError("quantity")
    return ProductResponse.model_validate(service.set_stock(product_id, body.quantity))


@router.put("/{product_id}/stock/adjust", response_model=ProductResponse, summary="Adjust the stock level")
def adjust_stock(
    product_id: int,
    body: StockAdjustmentRequest | None = Body(default=None),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    if body is None or body.adjustment is None:
        raise MissingFieldError("adjustment")
    return ProductResponse.model_validate(service.adjust_stock(product_id, body.adjustment))
