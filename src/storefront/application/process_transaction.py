"""Application service: Process Transaction use case.

Drives the charge for an initialized transaction. A declined charge ends
the checkout attempt; nothing here retries, since repeating a charge
without an idempotency key could take the money twice.
"""

from __future__ import annotations

from typing import Any

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import TransactionDTO
from storefront.domain.exceptions import DomainError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.checkout_repository import CheckoutRepository


class ProcessTransactionHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(
        self,
        key: str,
        context: SessionContext,
        data: dict[str, Any] | None = None,
    ) -> TransactionDTO:
        """Process the session's transaction.

        Outcomes:
        - charge succeeded -> PROCESSED
        - processor needs a customer action (e.g. 3-D Secure) -> session
          stays TRANSACTION_INITIALIZED; run this again once it is done
        - charge failed -> FAILED
        """
        context.require_identity()

        with checkout_step(self._checkout_repo, key, CheckoutStep.PROCESS) as session:
            session.mark_processing()
            result = self._checkout_gateway.process_transaction(
                session.transaction_ref, data
            )
            if result.failed:
                raise DomainError(result.message or "Payment failed")
            if result.succeeded:
                session.mark_processed()
            else:
                session.mark_action_required()

        return TransactionDTO(
            transaction_id=result.id,
            event_type=result.event_type,
            state=session.state.value,
            action_required=not result.succeeded,
            data=result.data,
        )
