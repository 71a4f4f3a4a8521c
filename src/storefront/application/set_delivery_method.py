"""Application services: list and select delivery methods."""

from __future__ import annotations

from storefront.application.checkout_step import checkout_step, load_session
from storefront.application.dto import CheckoutDTO, DeliveryMethodDTO, checkout_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.checkout import CheckoutStep
from storefront.domain.repository.checkout_repository import CheckoutRepository


class ListDeliveryMethodsHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(self, key: str) -> list[DeliveryMethodDTO]:
        session = load_session(self._checkout_repo, key)
        # Methods depend on the shipping address.
        session.require(CheckoutStep.DELIVERY_METHOD)
        methods = self._checkout_gateway.list_delivery_methods(session.backend_id)
        return [
            DeliveryMethodDTO(id=m.id, name=m.name, price=str(m.price))
            for m in methods
        ]


class SetDeliveryMethodHandler:

    def __init__(
        self,
        checkout_repo: CheckoutRepository,
        checkout_gateway: CheckoutGateway,
    ) -> None:
        self._checkout_repo = checkout_repo
        self._checkout_gateway = checkout_gateway

    def handle(self, key: str, method_id: str) -> CheckoutDTO:
        if not method_id or not method_id.strip():
            raise ValidationError("Delivery method is required")

        with checkout_step(self._checkout_repo, key, CheckoutStep.DELIVERY_METHOD) as session:
            pricing = self._checkout_gateway.update_delivery_method(
                session.backend_id, method_id.strip()
            )
            session.apply_delivery_method(method_id.strip(), pricing)

        return checkout_to_dto(session)
