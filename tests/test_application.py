"""Tests for application wiring: system routes, seeding, CORS and docs."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from src.application import create_app
from src.config import settings


@pytest.mark.asyncio
async def test_root_returns_greeting(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Product Registry API"}


@pytest.mark.asyncio
async def test_health_reports_product_count(client):
    await client.post("/products", json={"id": 3, "name": "Keyboard", "price": 50})

    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["products"] == 3


def test_create_app_seeds_default_products(monkeypatch):
    monkeypatch.setattr(settings, "SEED_DEFAULT_PRODUCTS", True)

    app = create_app()

    assert [p.id for p in app.state.registry.list_products()] == [1, 2]


def test_create_app_can_skip_seeding(monkeypatch):
    monkeypatch.setattr(settings, "SEED_DEFAULT_PRODUCTS", False)

    app = create_app()

    assert app.state.registry.count() == 0


def test_each_app_owns_its_registry():
    first = create_app()
    second = create_app()

    assert first.state.registry is not second.state.registry


@pytest.mark.asyncio
async def test_cors_allows_trusted_origin(client):
    response = await client.options(
        "/products",
        headers={
            "Origin": settings.CORS_ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert (
        response.headers["access-control-allow-origin"]
        == settings.CORS_ALLOWED_ORIGIN
    )


@pytest.mark.asyncio
async def test_cors_rejects_unknown_origin(client):
    response = await client.options(
        "/products",
        headers={
            "Origin": "http://evil.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert "access-control-allow-origin" not in response.headers


@pytest.mark.asyncio
async def test_openapi_document_lists_product_routes(client):
    response = await client.get("/swagger/v1/swagger.json")

    assert response.status_code == 200
    paths = response.json()["paths"]
    assert set(paths["/products"]) == {"get", "post"}
    assert set(paths["/products/{product_id}"]) == {"get", "put", "delete"}


@pytest.mark.asyncio
async def test_docs_disabled_in_production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        response = await test_client.get("/swagger")

    assert response.status_code == 404
