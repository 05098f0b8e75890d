"""Pydantic schemas for product resources."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from catalog.models.category import ProductCategory

# Emitted as a JSON number; prices carry at most 12 significant digits, which a
# float reproduces exactly in its shortest repr.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire and accepting snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductPayload(CamelModel):
    """Body accepted by create and full-update requests.

    Only types are checked here; field constraints live in ``validate_product``.
    """

    name: str | None = Field(default=None, description="Display name for the product")
    description: str | None = Field(default=None, description="Optional marketing copy")
    price: Decimal | None = Field(default=None, description="Unit price, exact decimal")
    quantity: int | None = Field(default=None, description="Units in stock")
    sku: str | None = Field(default=None, description="Unique stock keeping unit identifier")
    category: ProductCategory | None = Field(default=None, description="Catalog category")
    active: bool = Field(default=True, description="Indicates if the product is sellable")


class ProductResponse(CamelModel):
    """Response model returned by API endpoints."""

    id: int = Field(description="Database identifier")
    name: str
    description: str | None = None
    price: Price
    quantity: int
    sku: str
    category: ProductCategory | None = None
    active: bool
    in_stock: bool = Field(
        validation_alias=AliasChoices("is_in_stock", "inStock", "in_stock"),
        serialization_alias="inStock",
        description="True when quantity is above zero",
    )
    created_at: datetime = Field(description="Timestamp when the product was created")
    updated_at: datetime = Field(description="Timestamp when the product was last updated")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class StockUpdateRequest(BaseModel):
    """Body for setting an absolute stock level."""

    quantity: int | None = None


class StockAdjustmentRequest(BaseModel):
    """Body for a relative stock change; negative values remove stock."""

    adjustment: int | None = None


class MessageResponse(BaseModel):
    message: str


class ProductStats(CamelModel):
    """Aggregate counts over the catalog."""

    total_products: int
    active_products: int


class CategoryCount(BaseModel):
    category: ProductCategory
    count: int
