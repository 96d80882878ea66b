"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from src.config import settings
from src.services.product_registry import RegistryDependency

router = APIRouter(tags=["system"])


@router.get("/")
async def read_root() -> dict[str, str]:
    """Greeting endpoint used by smoke tests."""

    return {"message": "Product Registry API"}


@router.get("/health")
async def health_check(registry: RegistryDependency) -> dict[str, str | int]:
    """Health check endpoint reporting the registry size."""

    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "products": registry.count(),
    }
