"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
import math
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import include_api_routes
from src.config import settings
from src.models.product import DEFAULT_PRODUCTS
from src.services.product_registry import ProductRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""

    logger.info(
        "Product registry ready with %d products", app.state.registry.count()
    )
    yield
    logger.info(
        "Shutting down with %d products in memory", app.state.registry.count()
    )


def create_app(registry: ProductRegistry | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The registry lives for as long as the returned app. When none is given a
    fresh one is built and, unless disabled, seeded with the default products.
    """

    app = FastAPI(
        title="Product Registry API",
        description="In-memory CRUD service for products",
        version="v1",
        lifespan=lifespan,
        docs_url="/swagger" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/swagger/v1/swagger.json" if settings.docs_enabled else None,
    )

    app.state.registry = registry if registry is not None else _build_registry()

    _configure_cors(app)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    include_api_routes(app)

    return app


def _build_registry() -> ProductRegistry:
    if not settings.SEED_DEFAULT_PRODUCTS:
        return ProductRegistry()
    return ProductRegistry(DEFAULT_PRODUCTS)


def _configure_cors(app: FastAPI) -> None:
    """Allow the single trusted frontend origin."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ALLOWED_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _json_safe_float(value: float) -> float | str:
    return value if math.isfinite(value) else str(value)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report validation errors; rejected inputs such as ``inf`` are echoed as text."""

    logger.info("Rejected invalid request to %s", request.url.path)
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_encoder(
                exc.errors(), custom_encoder={float: _json_safe_float}
            )
        },
    )
