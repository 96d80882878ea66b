"""Product domain models and API schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def _reject_blank_name(value: str) -> str:
    if not value.strip():
        raise ValueError("name must not be blank")
    return value


ProductName = Annotated[
    str,
    Field(min_length=1, description="Human readable label"),
    AfterValidator(_reject_blank_name),
]
"""Product label; must contain at least one non-whitespace character."""

ProductPrice = Annotated[
    float,
    Field(ge=0, allow_inf_nan=False, description="Unit price, never negative"),
]
"""Finite, non-negative price."""


class Product(BaseModel):
    """A product record as stored in the registry and returned by the API."""

    id: int = Field(..., ge=0, description="Client supplied unique identifier")
    name: ProductName
    price: ProductPrice


class ProductPayload(Product):
    """Incoming payload for creating a product."""


class ProductUpdatePayload(BaseModel):
    """Incoming payload for replacing the mutable fields of a product.

    The path parameter identifies the product; an ``id`` sent in the body is
    accepted for compatibility with clients that PUT the whole record, but it
    is ignored.
    """

    id: int | None = Field(
        None,
        description="Ignored; the id in the path is authoritative",
    )
    name: ProductName
    price: ProductPrice


DEFAULT_PRODUCTS: tuple[Product, ...] = (
    Product(id=1, name="Laptop", price=1000),
    Product(id=2, name="Mouse", price=20),
)
"""Products inserted into a fresh registry before the API serves traffic."""
