"""Database session/engine helpers."""
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings

_settings = get_settings()


def _engine_options(database_url: str) -> dict[str, Any]:
    """Pool options for the configured backend.

    SQLite connections are opened per thread by SQLAlchemy's default pool. An
    in-memory SQLite URL therefore gives each thread its own empty database and
    is only suitable for tests that override ``get_session``.
    """
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": _settings.db_pool_size,
        "max_overflow": _settings.db_max_overflow,
    }


engine = create_engine(
    _settings.database_url,
    future=True,
    pool_pre_ping=True,
    **_engine_options(_settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a database session."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
