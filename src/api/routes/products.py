"""Routes for managing products in the registry."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from src.models.product import Product, ProductPayload, ProductUpdatePayload
from src.services.product_registry import ProductConflictError, RegistryDependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

PRODUCT_NOT_FOUND = "Product not found"


def _not_found(product_id: int) -> HTTPException:
    logger.info("Product %s not found", product_id)
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=PRODUCT_NOT_FOUND,
    )


@router.get(
    "",
    response_model=list[Product],
    summary="List all products",
)
async def list_products(registry: RegistryDependency) -> list[Product]:
    return registry.list_products()


@router.get(
    "/{product_id}",
    response_model=Product,
    summary="Fetch a single product",
)
async def get_product(product_id: int, registry: RegistryDependency) -> Product:
    product = registry.get_product(product_id)
    if product is None:
        raise _not_found(product_id)
    return product


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product with a client supplied id",
)
async def create_product(
    payload: ProductPayload,
    response: Response,
    registry: RegistryDependency,
) -> Product:
    """Store a new product and point the Location header at it.

    Raises:
        HTTPException: 409 when a product with the same id already exists.
    """

    try:
        product = registry.create_product(payload)
    except ProductConflictError as error:
        logger.warning("Rejected duplicate product %s", error.product_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(error),
        ) from error

    response.headers["Location"] = f"{router.prefix}/{product.id}"
    return product


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Replace the name and price of a product",
)
async def update_product(
    product_id: int,
    payload: ProductUpdatePayload,
    registry: RegistryDependency,
) -> Response:
    if payload.id is not None and payload.id != product_id:
        logger.debug(
            "Ignoring body id %s for product %s", payload.id, product_id
        )

    if not registry.update_product(product_id, payload.name, payload.price):
        raise _not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product",
)
async def delete_product(product_id: int, registry: RegistryDependency) -> Response:
    if not registry.delete_product(product_id):
        raise _not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
