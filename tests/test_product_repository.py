"""Tests for ProductRepository."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.models.category import ProductCategory
from catalog.models.product import Product
from catalog.services.exceptions import ProductNotFoundError
from catalog.services.product_repository import ProductRepository


def build_product(
    sku: str,
    *,
    name: str = "Product",
    price: str = "10.00",
    quantity: int = 10,
    category: ProductCategory | None = ProductCategory.OTHER,
    active: bool = True,
) -> Product:
    now = datetime.now(timezone.utc)
    return Product(
        name=name,
        description=None,
        price=Decimal(price),
        quantity=quantity,
        sku=sku,
        category=category,
        active=active,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def repo(db_session: Session) -> ProductRepository:
    return ProductRepository(db_session)


class TestProductRepository:
    """Test suite for ProductRepository."""

    def test_insert_assigns_id(self, repo: ProductRepository, db_session: Session) -> None:
        """Test inserting a product assigns a database ID."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        assert product.id is not None
        assert repo.get_by_id(product.id) is product

    def test_insert_duplicate_sku_violates_unique_index(self, repo: ProductRepository, db_session: Session) -> None:
        """Test the store rejects a second product with the same SKU."""
        repo.insert(build_product("SKU-001"))
        db_session.commit()

        with pytest.raises(IntegrityError):
            repo.insert(build_product("SKU-001", name="Other"))
        db_session.rollback()

        assert repo.count() == 1

    def test_get_by_id_not_found(self, repo: ProductRepository) -> None:
        """Test get_by_id returns None when ID doesn't exist."""
        assert repo.get_by_id(99999) is None
        assert repo.get_by_id(99999, for_update=True) is None

    def test_get_by_id_for_update(self, repo: ProductRepository, db_session: Session) -> None:
        """Test the locking lookup returns the same product."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        locked = repo.get_by_id(product.id, for_update=True)
        assert locked is not None
        assert locked.sku == "SKU-001"

    def test_get_by_sku(self, repo: ProductRepository, db_session: Session) -> None:
        """Test fetching a product by exact SKU."""
        repo.insert(build_product("SKU-001", name="Widget"))
        db_session.commit()

        product = repo.get_by_sku("SKU-001")
        assert product is not None
        assert product.name == "Widget"
        assert repo.get_by_sku("NONEXISTENT") is None

    def test_list_all_and_active(self, repo: ProductRepository, db_session: Session) -> None:
        """Test listing every product versus only active ones."""
        repo.insert(build_product("SKU-001"))
        repo.insert(build_product("SKU-002", active=False))
        repo.insert(build_product("SKU-003"))
        db_session.commit()

        assert [p.sku for p in repo.list_all()] == ["SKU-001", "SKU-002", "SKU-003"]
        assert [p.sku for p in repo.list_active()] == ["SKU-001", "SKU-003"]

    def test_list_by_category(self, repo: ProductRepository, db_session: Session) -> None:
        """Test filtering by category."""
        repo.insert(build_product("SKU-001", category=ProductCategory.BOOKS))
        repo.insert(build_product("SKU-002", category=ProductCategory.TOYS))
        repo.insert(build_product("SKU-003", category=None))
        db_session.commit()

        books = repo.list_by_category(ProductCategory.BOOKS)
        assert [p.sku for p in books] == ["SKU-001"]
        assert books[0].category is ProductCategory.BOOKS
        assert repo.list_by_category(ProductCategory.SPORTS) == []

    def test_list_by_name_substring_case_insensitive(self, repo: ProductRepository, db_session: Session) -> None:
        """Test name search is a case-insensitive containment match."""
        repo.insert(build_product("SKU-001", name="Blue Widget"))
        repo.insert(build_product("SKU-002", name="widget stand"))
        repo.insert(build_product("SKU-003", name="Gadget"))
        db_session.commit()

        matches = repo.list_by_name_substring("WIDGET")
        assert [p.sku for p in matches] == ["SKU-001", "SKU-002"]

    def test_list_by_price_range_inclusive(self, repo: ProductRepository, db_session: Session) -> None:
        """Test price range bounds are inclusive."""
        repo.insert(build_product("SKU-001", price="10.00"))
        repo.insert(build_product("SKU-002", price="20.00"))
        repo.insert(build_product("SKU-003", price="30.01"))
        db_session.commit()

        matches = repo.list_by_price_range(Decimal("10.00"), Decimal("30.00"))
        assert [p.sku for p in matches] == ["SKU-001", "SKU-002"]

    def test_price_is_exact_decimal(self, repo: ProductRepository, db_session: Session) -> None:
        """Test prices come back as Decimal with two places."""
        product = repo.insert(build_product("SKU-001", price="0.10"))
        db_session.commit()
        db_session.refresh(product)

        assert isinstance(product.price, Decimal)
        assert product.price == Decimal("0.10")

    def test_list_low_stock_excludes_inactive(self, repo: ProductRepository, db_session: Session) -> None:
        """Test low-stock listing only returns active products at or below threshold."""
        repo.insert(build_product("SKU-001", quantity=5))
        repo.insert(build_product("SKU-002", quantity=6))
        repo.insert(build_product("SKU-003", quantity=1, active=False))
        repo.insert(build_product("SKU-004", quantity=0))
        db_session.commit()

        low = repo.list_low_stock(5)
        assert [p.sku for p in low] == ["SKU-001", "SKU-004"]
        assert all(p.is_low_stock(5) for p in low)

    def test_update_overwrites_fields(self, repo: ProductRepository, db_session: Session) -> None:
        """Test a full overwrite by id."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        product.name = "Renamed"
        product.quantity = 42
        repo.update(product)
        db_session.commit()
        db_session.expire_all()

        reloaded = repo.get_by_id(product.id)
        assert reloaded.name == "Renamed"
        assert reloaded.quantity == 42

    def test_update_detached_copy(self, repo: ProductRepository, db_session: Session) -> None:
        """Test updating from a separate instance carrying the same id."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        replacement = build_product("SKU-999", name="Replacement", quantity=3)
        replacement.id = product.id
        result = repo.update(replacement)
        db_session.commit()

        assert result is product
        assert product.sku == "SKU-999"
        assert product.name == "Replacement"
        assert product.quantity == 3

    def test_update_missing_raises(self, repo: ProductRepository) -> None:
        """Test update of an unknown id raises ProductNotFoundError."""
        ghost = build_product("SKU-001")
        ghost.id = 12345

        with pytest.raises(ProductNotFoundError, match="Product not found with id: 12345"):
            repo.update(ghost)

    def test_delete(self, repo: ProductRepository, db_session: Session) -> None:
        """Test hard delete removes the row."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        repo.delete(product.id)
        db_session.commit()

        assert repo.get_by_id(product.id) is None
        assert repo.count() == 0

    def test_delete_missing_raises(self, repo: ProductRepository) -> None:
        """Test delete of an unknown id raises ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError):
            repo.delete(99999)

    def test_set_active(self, repo: ProductRepository, db_session: Session) -> None:
        """Test flipping the active flag with a single statement."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        assert repo.set_active(product.id, False, datetime.now(timezone.utc)) is True
        db_session.commit()

        assert repo.get_by_id(product.id).active is False
        assert repo.set_active(99999, False, datetime.now(timezone.utc)) is False

    def test_adjust_quantity_is_conditional(self, repo: ProductRepository, db_session: Session) -> None:
        """Test the conditional UPDATE applies deltas and refuses to go negative."""
        product = repo.insert(build_product("SKU-001", quantity=10))
        db_session.commit()

        assert repo.adjust_quantity(product.id, -4, datetime.now(timezone.utc)) is True
        assert repo.adjust_quantity(product.id, -7, datetime.now(timezone.utc)) is False
        assert repo.adjust_quantity(99999, 1, datetime.now(timezone.utc)) is False
        db_session.commit()

        assert repo.get_by_id(product.id, for_update=True).quantity == 6

    def test_counts(self, repo: ProductRepository, db_session: Session) -> None:
        """Test total, active and per-category counts."""
        assert repo.count() == 0

        repo.insert(build_product("SKU-001", category=ProductCategory.BOOKS))
        repo.insert(build_product("SKU-002", category=ProductCategory.BOOKS, active=False))
        repo.insert(build_product("SKU-003", category=ProductCategory.TOYS))
        db_session.commit()

        assert repo.count() == 3
        assert repo.count_active() == 2
        assert repo.count_by_category(ProductCategory.BOOKS) == 2
        assert repo.count_by_category(ProductCategory.BEAUTY) == 0

    def test_exists_by_sku(self, repo: ProductRepository, db_session: Session) -> None:
        """Test SKU existence checks, optionally ignoring one product."""
        product = repo.insert(build_product("SKU-001"))
        db_session.commit()

        assert repo.exists_by_sku("SKU-001") is True
        assert repo.exists_by_sku("SKU-002") is False
        assert repo.exists_by_sku("SKU-001", exclude_id=product.id) is False
