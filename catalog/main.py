"""Entrypoint for the FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api import health, info, products
from catalog.api.errors import register_exception_handlers
from catalog.core.config import get_settings
from catalog.core.db import engine
from catalog.models import Base

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.create_tables_on_startup:
        Base.metadata.create_all(engine)
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Product catalog with stock management",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_exception_handlers(app)

# Register API routers
app.include_router(health.router)  # Health checks at root level
app.include_router(info.router, prefix=settings.api_prefix)
app.include_router(products.router, prefix=settings.api_prefix)
