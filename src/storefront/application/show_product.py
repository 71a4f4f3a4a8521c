"""Application service: Show Product use case (query).

The product column of the checkout page, available before any checkout
exists. The content service image wins over the catalog media; it is
display-only, so a missing image is never an error.
"""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, pricing_to_dto
from storefront.domain.exceptions import EntityNotFoundError, GatewayError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.gateway.content_gateway import ContentGateway
from storefront.domain.model.catalog import ImageAsset
from storefront.domain.service.pricing_projection import project

logger = logging.getLogger(__name__)


class ShowProductHandler:

    def __init__(
        self,
        checkout_gateway: CheckoutGateway,
        content_gateway: ContentGateway | None,
        variant_id: str,
        quantity: int = 1,
    ) -> None:
        self._checkout_gateway = checkout_gateway
        self._content_gateway = content_gateway
        self._variant_id = variant_id
        self._quantity = quantity

    def handle(self) -> ProductDTO:
        variant = self._checkout_gateway.get_product_variant(self._variant_id)
        if variant is None:
            raise EntityNotFoundError("Variant not found")

        image = self._content_image() or variant.image
        return ProductDTO(
            id=variant.id,
            name=variant.product_name,
            description=variant.description,
            quantity=self._quantity,
            base_price=str(variant.base_price),
            currency=variant.base_price.currency,
            pricing=pricing_to_dto(project(product=variant, quantity=self._quantity)),
            image_url=image.url if image else None,
            image_alt=image.alt if image else None,
        )

    def _content_image(self) -> ImageAsset | None:
        if self._content_gateway is None:
            return None
        try:
            return self._content_gateway.get_checkout_image()
        except GatewayError as exc:
            logger.warning("Content service unavailable: %s", exc)
            return None
