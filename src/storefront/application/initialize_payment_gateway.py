"""Application service: Initialize Payment Gateway use case.

The gateway configuration is bound to the amount due at the time of the
call. Changing the address or delivery method afterwards drops the
session back to a priced state, and this step has to run again.
"""

from __future__ import annotations

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import GatewayDTO
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.checkout_repository import CheckoutRepository


class InitializePaymentGatewayHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(self, key: str, context: SessionContext) -> GatewayDTO:
        context.require_identity()

        with checkout_step(self._checkout_repo, key, CheckoutStep.PAYMENT_GATEWAY) as session:
            amount = session.amount_due
            config = self._checkout_gateway.initialize_payment_gateway(
                session.backend_id, amount
            )
            session.mark_gateway_ready(config.id)

        return GatewayDTO(gateway_id=config.id, amount=str(amount), data=config.data)
