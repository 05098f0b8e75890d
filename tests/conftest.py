"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
from decimal import Decimal
from typing import Callable, Generator

# Settings are read at import time; point the application at a throwaway database.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.models.base import Base
from catalog.models.category import ProductCategory
from catalog.schemas.product import ProductPayload

# SQLite by default; set TEST_DATABASE_URL to run against PostgreSQL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")


def _create_test_engine() -> Engine:
    if TEST_DATABASE_URL.startswith("sqlite"):
        return create_engine(
            TEST_DATABASE_URL,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(TEST_DATABASE_URL, future=True, pool_pre_ping=True)


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create a fresh schema for every test so committed writes never leak."""
    engine = _create_test_engine()
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the per-test schema."""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_payload() -> Callable[..., ProductPayload]:
    """Factory for valid product payloads with per-test overrides."""

    def _make(**overrides) -> ProductPayload:
        fields = {
            "name": "Test Product",
            "description": "Test Description",
            "price": Decimal("99.99"),
            "quantity": 10,
            "sku": "TEST-001",
            "category": ProductCategory.ELECTRONICS,
            "active": True,
        }
        fields.update(overrides)
        return ProductPayload(**fields)

    return _make
