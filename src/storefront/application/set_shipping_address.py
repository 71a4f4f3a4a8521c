"""Application service: Set Shipping Address use case.

The backend recomputes tax for the address, so this is also how the
displayed tax gets updated. Re-submitting an address simply repeats the
computation; there is no separate undo.
"""

from __future__ import annotations

from storefront.application.checkout_step import checkout_step
from storefront.application.dto import CheckoutDTO, checkout_to_dto
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.model.value_objects import AddressInput
from storefront.domain.repository.checkout_repository import CheckoutRepository


class SetShippingAddressHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(self, key: str, address_input: AddressInput) -> CheckoutDTO:
        # Rejected here, before any network call, when malformed.
        address = address_input.validated()

        with checkout_step(self._checkout_repo, key, CheckoutStep.SHIPPING_ADDRESS) as session:
            pricing = self._checkout_gateway.update_shipping_address(
                session.backend_id, address
            )
            session.apply_shipping_address(address, pricing)

        return checkout_to_dto(session)
