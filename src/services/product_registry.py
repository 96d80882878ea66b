"""In-memory registry holding the authoritative set of products."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import RLock
from typing import Annotated

from fastapi import Depends, Request

from src.models.product import Product

logger = logging.getLogger(__name__)


class ProductRegistryError(Exception):
    """Base class for errors raised by the product registry."""


class ProductConflictError(ProductRegistryError):
    """Raised when creating a product whose id is already registered."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with id {product_id} already exists")
        self.product_id = product_id


class ProductRegistry:
    """Thread-safe in-memory product registry.

    Products are kept in insertion order. Every operation holds the lock for
    its whole duration, and records are copied on the way in and on the way
    out so callers never share state with the registry.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = RLock()
        self._storage: dict[int, Product] = {}
        self.seed(products)

    def seed(self, products: Iterable[Product]) -> None:
        """Insert several products at once.

        Either every product is stored or none is.

        Raises:
            ProductConflictError: If an id is already registered or repeated
                within ``products``.
        """

        staged: dict[int, Product] = {}
        for product in products:
            stored = Product(**product.model_dump())
            if stored.id in staged:
                raise ProductConflictError(stored.id)
            staged[stored.id] = stored

        with self._lock:
            for product_id in staged:
                if product_id in self._storage:
                    raise ProductConflictError(product_id)
            self._storage.update(staged)

        if staged:
            logger.info("Seeded %d products", len(staged))

    def list_products(self) -> list[Product]:
        with self._lock:
            return [product.model_copy() for product in self._storage.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

    def get_product(self, product_id: int) -> Product | None:
        """Return a copy of the product, or ``None`` when the id is unknown."""

        with self._lock:
            product = self._storage.get(product_id)
            return product.model_copy() if product is not None else None

    def create_product(self, product: Product) -> Product:
        """Store a new product and return it.

        Raises:
            ProductConflictError: If a product with the same id already exists.
        """

        stored = Product(**product.model_dump())
        with self._lock:
            if stored.id in self._storage:
                raise ProductConflictError(stored.id)
            self._storage[stored.id] = stored

        logger.info("Created product %s", stored.id)
        logger.debug("Product payload: %s", stored.model_dump_json())
        return stored.model_copy()

    def update_product(self, product_id: int, name: str, price: float) -> bool:
        """Overwrite name and price of an existing product.

        Returns ``False`` when no product has the given id.
        """

        with self._lock:
            product = self._storage.get(product_id)
            if product is None:
                return False
            product.name = name
            product.price = price

        logger.info("Updated product %s", product_id)
        return True

    def delete_product(self, product_id: int) -> bool:
        """Remove a product. Returns ``False`` when no product has the given id."""

        with self._lock:
            removed = self._storage.pop(product_id, None)

        if removed is None:
            return False
        logger.info("Deleted product %s", product_id)
        return True


def get_registry(request: Request) -> ProductRegistry:
    """FastAPI dependency returning the registry owned by the running app."""

    return request.app.state.registry


RegistryDependency = Annotated[ProductRegistry, Depends(get_registry)]
