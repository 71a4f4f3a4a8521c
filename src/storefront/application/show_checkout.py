"""Application service: Show Checkout use case (query)."""

from __future__ import annotations

from storefront.application.checkout_step import load_session
from storefront.application.dto import CheckoutDTO, checkout_to_dto
from storefront.domain.repository.checkout_repository import CheckoutRepository


class ShowCheckoutHandler:

    def __init__(self, checkout_repo: CheckoutRepository) -> None:
        self._checkout_repo = checkout_repo

    def handle(self, key: str) -> CheckoutDTO:
        return checkout_to_dto(load_session(self._checkout_repo, key))


class AbandonCheckoutHandler:
    """Forget a checkout session.

    The backend checkout is left orphaned; it carries no committed payment.
    """

    def __init__(self, checkout_repo: CheckoutRepository) -> None:
        self._checkout_repo = checkout_repo

    def handle(self, key: str) -> None:
        load_session(self._checkout_repo, key)
        self._checkout_repo.discard(key)
