"""Service status and self-description endpoints."""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from catalog.core.config import get_settings

router = APIRouter(tags=["info"])
settings = get_settings()


@router.get("/status")
async def service_status() -> dict[str, Any]:
    return {
        "status": "UP",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/info")
async def service_info() -> dict[str, Any]:
    """Describe the application and the endpoints it exposes."""
    prefix = settings.api_prefix
    return {
        "application_name": settings.app_name,
        "description": "Product catalog REST API with stock management",
        "version": settings.app_version,
        "framework": "FastAPI",
        "available_endpoints": {
            f"GET {prefix}/products": "List products (optionally only active ones)",
            f"GET {prefix}/products/{{id}}": "Get a product by ID",
            f"GET {prefix}/products/sku/{{sku}}": "Get a product by SKU",
            f"GET {prefix}/products/category/{{category}}": "List products in a category",
            f"GET {prefix}/products/category/{{category}}/count": "Count products in a category",
            f"GET {prefix}/products/search": "Search by name or price range",
            f"GET {prefix}/products/low-stock": "List active products at or below a threshold",
            f"GET {prefix}/products/stats": "Product counts",
            f"GET {prefix}/products/categories": "Available categories",
            f"POST {prefix}/products": "Create a product",
            f"PUT {prefix}/products/{{id}}": "Update a product",
            f"PUT {prefix}/products/{{id}}/activate": "Activate a product",
            f"PUT {prefix}/products/{{id}}/deactivate": "Deactivate a product",
            f"DELETE {prefix}/products/{{id}}": "Delete a product",
            f"PUT {prefix}/products/{{id}}/stock": "Set the stock level",
            f"PUT {prefix}/products/{{id}}/stock/adjust": "Adjust the stock level",
            f"GET {prefix}/status": "Service status",
            "GET /health": "Liveness check",
            "GET /health/detailed": "Database connectivity check",
        },
    }
