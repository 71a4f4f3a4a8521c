"""Application service: Create Checkout use case.

Starts a checkout attempt for the fixed product line. The session
is only stored once the backend has issued a checkout id. A rejection
(e.g. out of stock) or an unreachable backend leaves nothing behind;
the caller gets the error and can simply start again.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CheckoutDTO, checkout_to_dto
from storefront.domain.exceptions import DomainError, EntityNotFoundError, GatewayError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutLine, CheckoutSession
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.checkout_repository import CheckoutRepository

logger = logging.getLogger(__name__)


class CreateCheckoutHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
        variant_id: str,
        quantity: int = 1,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway
        self._variant_id = variant_id
        self._quantity = quantity

    def handle(self) -> CheckoutDTO:
        """Create a new checkout session.

        Steps:
        1. Resolve the configured variant (fail if it is gone).
        2. Build the single checkout line.
        3. Ask the backend for a checkout and record its id and pricing.
        4. Store the session; a failed attempt is never stored.
        """
        variant = self._checkout_gateway.get_product_variant(self._variant_id)
        if variant is None:
            raise EntityNotFoundError(f"Variant not found: '{self._variant_id}'")

        line = CheckoutLine(
            variant_id=variant.id,
            product_name=variant.product_name,
            product_description=variant.description or "",
            quantity=Quantity(self._quantity),
        )
        session = CheckoutSession(key=self._checkout_repo.next_key(), lines=[line])

        try:
            checkout_id, pricing = self._checkout_gateway.create_checkout(session.lines)
        except (DomainError, GatewayError) as exc:
            logger.info("Checkout could not be created: %s", exc)
            raise
        session.record_created(checkout_id, pricing)
        self._checkout_repo.save(session)

        return checkout_to_dto(session)
