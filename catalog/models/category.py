"""Product category enumeration."""
from __future__ import annotations

from enum import Enum


class ProductCategory(str, Enum):
    """Closed set of categories a product can be filed under.

    Values are the member names so they round-trip unchanged through JSON and
    the database; ``display_name`` carries the human-readable label.
    """

    ELECTRONICS = "ELECTRONICS"
    CLOTHING = "CLOTHING"
    BOOKS = "BOOKS"
    HOME_GARDEN = "HOME_GARDEN"
    SPORTS = "SPORTS"
    TOYS = "TOYS"
    AUTOMOTIVE = "AUTOMOTIVE"
    BEAUTY = "BEAUTY"
    FOOD_BEVERAGE = "FOOD_BEVERAGE"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES: dict[ProductCategory, str] = {
    ProductCategory.ELECTRONICS: "Electronics",
    ProductCategory.CLOTHING: "Clothing",
    ProductCategory.BOOKS: "Books",
    ProductCategory.HOME_GARDEN: "Home & Garden",
    ProductCategory.SPORTS: "Sports",
    ProductCategory.TOYS: "Toys",
    ProductCategory.AUTOMOTIVE: "Automotive",
    ProductCategory.BEAUTY: "Beauty",
    ProductCategory.FOOD_BEVERAGE: "Food & Beverage",
    ProductCategory.OTHER: "Other",
}
