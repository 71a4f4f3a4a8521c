"""Application service: Initialize Transaction use case.

Consumes the opaque payment-method reference produced by the payment
processor's client SDK. Card details never pass through here.
"""

from __future__ import annotations

from typing import Any

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import TransactionDTO
from storefront.domain.exceptions import DomainError, ValidationError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.checkout_repository import CheckoutRepository


def payment_data(payment_method_ref: str) -> dict[str, Any]:
    """Wrap the processor's payment-method reference for the backend."""
    return {"paymentIntent": {"paymentMethod": payment_method_ref}}


class InitializeTransactionHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(
        self, key: str, context: SessionContext, payment_method_ref: str
    ) -> TransactionDTO:
        context.require_identity()
        if not payment_method_ref or not payment_method_ref.strip():
            raise ValidationError("Payment method is required")

        with checkout_step(self._checkout_repo, key, CheckoutStep.TRANSACTION) as session:
            result = self._checkout_gateway.initialize_transaction(
                session.backend_id,
                session.gateway_ref,
                session.amount_due,
                payment_data(payment_method_ref.strip()),
            )
            if result.failed:
                raise DomainError(result.message or "Payment was declined")
            session.mark_transaction_initialized(result.id)

        return TransactionDTO(
            transaction_id=result.id,
            event_type=result.event_type,
            state=session.state.value,
            action_required=result.action_required,
            data=result.data,
        )
