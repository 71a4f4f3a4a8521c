"""Application service: Complete Checkout use case.

Turns a processed checkout into an order. When the backend answers
without an order the session stays PROCESSED for support to reconcile;
it is never retried silently.
"""

from __future__ import annotations

import logging

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import CheckoutDTO, checkout_to_dto
from storefront.domain.exceptions import CheckoutNotCompletedError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.checkout_repository import CheckoutRepository

logger = logging.getLogger(__name__)


class CompleteCheckoutHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(self, key: str, context: SessionContext) -> CheckoutDTO:
        context.require_identity()

        with checkout_step(self._checkout_repo, key, CheckoutStep.COMPLETE) as session:
            order_id = self._checkout_gateway.complete_checkout(session.backend_id)
            if not order_id:
                logger.error(
                    "Checkout %s (%s) processed but no order was created",
                    session.key,
                    session.id,
                )
                raise CheckoutNotCompletedError()
            session.mark_completed(order_id)

        logger.info("Checkout %s completed as order %s", session.key, order_id)
        dto = checkout_to_dto(session)
        # A completed session cannot be reused.
        self._checkout_repo.discard(session.key)
        return dto
