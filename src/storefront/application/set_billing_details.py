"""Application service: Set Billing Details use case.

Attaches the signed-in customer's email and the billing address. Both are
required by the backend before the order can be placed.
"""

from __future__ import annotations

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import CheckoutDTO, checkout_to_dto
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.identity import SessionContext
from storefront.domain.model.value_objects import BillingInput
from storefront.domain.repository.checkout_repository import CheckoutRepository


class SetBillingDetailsHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(
        self, key: str, context: SessionContext, billing_input: BillingInput
    ) -> CheckoutDTO:
        identity = context.require_identity()
        address = billing_input.validated()

        with checkout_step(self._checkout_repo, key, CheckoutStep.BILLING_DETAILS) as session:
            self._checkout_gateway.update_email(session.backend_id, identity.email)
            self._checkout_gateway.update_billing_address(session.backend_id, address)
            session.apply_billing_details(identity.email, address)

        return checkout_to_dto(session)
