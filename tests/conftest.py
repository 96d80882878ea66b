"""Pytest configuration and fixtures for the product registry service."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.application import create_app
from src.models.product import DEFAULT_PRODUCTS
from src.services.product_registry import ProductRegistry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def registry():
    """Provide a registry seeded with the default products."""
    return ProductRegistry(DEFAULT_PRODUCTS)


@pytest.fixture()
def app(registry):
    """Build a fresh application around the per-test registry."""
    return create_app(registry)


@pytest_asyncio.fixture()
async def client(app):
    """Return an HTTPX async client pointing at the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
