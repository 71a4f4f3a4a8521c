"""Saleor-backed implementation of CheckoutGateway."""

from __future__ import annotations

import logging
from typing import Any

from storefront.domain.exceptions import DecodeError, DomainError, ValidationError
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.model.catalog import ImageAsset, ProductVariant
from storefront.domain.model.checkout import CheckoutLine, DeliveryMethod, Pricing
from storefront.domain.model.payment import GatewayConfig, TransactionResult
from storefront.domain.model.value_objects import Money, PostalAddress
from storefront.infrastructure.saleor import operations as ops
from storefront.infrastructure.saleor import schemas
from storefront.infrastructure.saleor.editorjs import editorjs_to_text
from storefront.infrastructure.saleor.graphql_client import GraphQLClient

logger = logging.getLogger(__name__)


def raise_for_errors(payload: schemas.MutationPayload, default: str) -> None:
    """Turn a mutation's own ``errors`` list into a DomainError."""
    if not payload.errors:
        return
    messages = [e.message for e in payload.errors if e.message]
    raise DomainError(", ".join(messages) or default, field=payload.errors[0].field)


def address_variables(address: PostalAddress) -> dict[str, str]:
    return {
        "firstName": address.first_name,
        "lastName": address.last_name,
        "streetAddress1": address.street1,
        "streetAddress2": address.street2,
        "city": address.city,
        "countryArea": address.region,
        "postalCode": address.postal_code,
        "country": address.country,
    }


def _money(node: schemas.MoneyNode) -> Money:
    return Money(node.amount, node.currency.upper())


def _amount(money: Money) -> str:
    return str(money.amount)


class SaleorCheckoutGateway(CheckoutGateway):

    def __init__(self, client: GraphQLClient, channel: str, payment_app_id: str) -> None:
        self._client = client
        self._channel = channel
        self._payment_app_id = payment_app_id

    # --- Catalog --------------------------------------------------------------

    def get_product_variant(self, variant_id: str) -> ProductVariant | None:
        data = self._client.execute(
            ops.PRODUCT_VARIANT,
            schemas.ProductVariantData,
            {"variantId": variant_id, "channel": self._channel},
        )
        node = data.product_variant
        if node is None:
            return None
        if node.pricing is None or node.pricing.price is None:
            raise DecodeError(f"Variant {variant_id} has no price in {self._channel}")

        media = node.product.media or []
        image = ImageAsset(url=media[0].url, alt=media[0].alt or "") if media else None
        return ProductVariant(
            id=node.id,
            product_name=node.product.name,
            description=editorjs_to_text(node.product.description),
            base_price=self._to_money(node.pricing.price.net),
            image=image,
        )

    # --- Checkout -------------------------------------------------------------

    def create_checkout(self, lines: list[CheckoutLine]) -> tuple[str, Pricing | None]:
        data = self._client.execute(
            ops.CHECKOUT_CREATE,
            schemas.CheckoutCreateData,
            {
                "channel": self._channel,
                "lines": [
                    {"variantId": line.variant_id, "quantity": line.quantity.value}
                    for line in lines
                ],
            },
        )
        payload = data.checkout_create
        raise_for_errors(payload, "Failed to create checkout")
        if payload.checkout is None:
            raise DomainError("Failed to create checkout")
        return payload.checkout.id, self._pricing(payload.checkout)

    def update_shipping_address(
        self, checkout_id: str, address: PostalAddress
    ) -> Pricing | None:
        data = self._client.execute(
            ops.CHECKOUT_SHIPPING_ADDRESS_UPDATE,
            schemas.CheckoutShippingAddressUpdateData,
            {"checkoutId": checkout_id, "address": address_variables(address)},
        )
        payload = data.checkout_shipping_address_update
        raise_for_errors(payload, "Address update failed")
        if payload.checkout is None:
            raise DomainError("Address update failed")
        return self._pricing(payload.checkout)

    def list_delivery_methods(self, checkout_id: str) -> list[DeliveryMethod]:
        data = self._client.execute(
            ops.CHECKOUT_SHIPPING_METHODS,
            schemas.CheckoutShippingMethodsData,
            {"checkoutId": checkout_id},
        )
        if data.checkout is None:
            return []
        return [
            DeliveryMethod(id=m.id, name=m.name, price=self._to_money(m.price))
            for m in data.checkout.shipping_methods
        ]

    def update_delivery_method(self, checkout_id: str, method_id: str) -> Pricing | None:
        data = self._client.execute(
            ops.CHECKOUT_DELIVERY_METHOD_UPDATE,
            schemas.CheckoutDeliveryMethodUpdateData,
            {"checkoutId": checkout_id, "deliveryMethodId": method_id},
        )
        payload = data.checkout_delivery_method_update
        raise_for_errors(payload, "Delivery method update failed")
        if payload.checkout is None:
            raise DomainError("Delivery method update failed")
        return self._pricing(payload.checkout)

    def update_email(self, checkout_id: str, email: str) -> None:
        data = self._client.execute(
            ops.CHECKOUT_EMAIL_UPDATE,
            schemas.CheckoutEmailUpdateData,
            {"checkoutId": checkout_id, "email": email},
        )
        raise_for_errors(data.checkout_email_update, "Email update failed")

    def update_billing_address(self, checkout_id: str, address: PostalAddress) -> None:
        data = self._client.execute(
            ops.CHECKOUT_BILLING_ADDRESS_UPDATE,
            schemas.CheckoutBillingAddressUpdateData,
            {"checkoutId": checkout_id, "billingAddress": address_variables(address)},
        )
        raise_for_errors(data.checkout_billing_address_update, "Billing address update failed")

    # --- Payments -------------------------------------------------------------

    def initialize_payment_gateway(self, checkout_id: str, amount: Money) -> GatewayConfig:
        data = self._client.execute(
            ops.PAYMENT_GATEWAY_INITIALIZE,
            schemas.PaymentGatewayInitializeData,
            {
                "checkoutId": checkout_id,
                "amount": _amount(amount),
                "paymentGateways": [{"id": self._payment_app_id}],
            },
        )
        payload = data.payment_gateway_initialize
        raise_for_errors(payload, "Payment gateway not initialized")
        configs = payload.gateway_configs or []
        if not configs:
            raise DomainError("Payment gateway not initialized")
        config = configs[0]
        if config.errors:
            raise_for_errors(
                schemas.MutationPayload(errors=config.errors),
                "Payment gateway not initialized",
            )
        return GatewayConfig(id=config.id, data=self._as_dict(config.data))

    def initialize_transaction(
        self,
        checkout_id: str,
        gateway_id: str,
        amount: Money,
        data: dict[str, Any],
    ) -> TransactionResult:
        response = self._client.execute(
            ops.TRANSACTION_INITIALIZE,
            schemas.TransactionInitializeData,
            {
                "checkoutId": checkout_id,
                "amount": _amount(amount),
                "paymentGateway": {"id": gateway_id, "data": data},
            },
        )
        return self._transaction(response.transaction_initialize, "Transaction not created")

    def process_transaction(
        self, transaction_id: str, data: dict[str, Any] | None = None
    ) -> TransactionResult:
        response = self._client.execute(
            ops.TRANSACTION_PROCESS,
            schemas.TransactionProcessData,
            {"transactionId": transaction_id, "data": data},
        )
        return self._transaction(response.transaction_process, "Transaction not processed")

    def complete_checkout(self, checkout_id: str) -> str | None:
        data = self._client.execute(
            ops.CHECKOUT_COMPLETE,
            schemas.CheckoutCompleteData,
            {"checkoutId": checkout_id},
        )
        payload = data.checkout_complete
        raise_for_errors(payload, "Checkout not completed")
        return payload.order.id if payload.order is not None else None

    # --- Mapping --------------------------------------------------------------

    def _pricing(self, node: schemas.CheckoutNode) -> Pricing | None:
        if node.total_price is None:
            return None
        subtotal = node.subtotal_price.net if node.subtotal_price else node.total_price.net
        try:
            return Pricing(
                subtotal_net=_money(subtotal),
                total_net=_money(node.total_price.net),
                total_gross=_money(node.total_price.gross),
            )
        except ValidationError as exc:
            raise DecodeError(f"Invalid checkout pricing: {exc}") from exc

    @staticmethod
    def _to_money(node: schemas.MoneyNode) -> Money:
        try:
            return _money(node)
        except ValidationError as exc:
            raise DecodeError(f"Invalid amount: {exc}") from exc

    @staticmethod
    def _transaction(payload: schemas.TransactionPayload, default: str) -> TransactionResult:
        raise_for_errors(payload, default)
        if payload.transaction is None:
            raise DomainError(default)
        event = payload.transaction_event
        return TransactionResult(
            id=payload.transaction.id,
            event_type=event.type if event else None,
            message=(event.message or "") if event else "",
            data=SaleorCheckoutGateway._as_dict(payload.data),
        )

    @staticmethod
    def _as_dict(value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, dict):
            return value
        return {"value": value}
