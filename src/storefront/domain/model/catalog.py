"""Read-only catalog and content data used for display."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ImageAsset:
    url: str
    alt: str = ""


@dataclass(frozen=True)
class ProductVariant:
    """The product shown on the checkout page before a checkout exists."""

    id: str
    product_name: str
    description: str | None
    base_price: Money
    image: ImageAsset | None = None
