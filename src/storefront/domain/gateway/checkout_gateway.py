"""Port for the checkout half of the commerce backend.

Implementations raise ``DomainError`` when a mutation reports its own
errors, and ``GatewayError`` subclasses when the call itself fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storefront.domain.model.catalog import ProductVariant
from storefront.domain.model.checkout import CheckoutLine, DeliveryMethod, Pricing
from storefront.domain.model.payment import GatewayConfig, TransactionResult
from storefront.domain.model.value_objects import Money, PostalAddress


class CheckoutGateway(ABC):

    @abstractmethod
    def get_product_variant(self, variant_id: str) -> ProductVariant | None:
        """Return the variant in the configured channel, or None."""

    @abstractmethod
    def create_checkout(self, lines: list[CheckoutLine]) -> tuple[str, Pricing | None]:
        """Create a backend checkout; return its id and initial pricing."""

    @abstractmethod
    def update_shipping_address(
        self, checkout_id: str, address: PostalAddress
    ) -> Pricing | None:
        """Attach the address; return the pricing recomputed by the backend."""

    @abstractmethod
    def list_delivery_methods(self, checkout_id: str) -> list[DeliveryMethod]:
        """Return the shipping methods available for the current address."""

    @abstractmethod
    def update_delivery_method(self, checkout_id: str, method_id: str) -> Pricing | None:
        """Select a delivery method; return the updated pricing."""

    @abstractmethod
    def update_email(self, checkout_id: str, email: str) -> None:
        """Set the customer email on the checkout."""

    @abstractmethod
    def update_billing_address(self, checkout_id: str, address: PostalAddress) -> None:
        """Attach the billing address."""

    @abstractmethod
    def initialize_payment_gateway(self, checkout_id: str, amount: Money) -> GatewayConfig:
        """Ask for a gateway configuration bound to the checkout and amount."""

    @abstractmethod
    def initialize_transaction(
        self,
        checkout_id: str,
        gateway_id: str,
        amount: Money,
        data: dict[str, Any],
    ) -> TransactionResult:
        """Start a payment transaction for the checkout."""

    @abstractmethod
    def process_transaction(
        self, transaction_id: str, data: dict[str, Any] | None = None
    ) -> TransactionResult:
        """Drive the processor handshake for an initialized transaction."""

    @abstractmethod
    def complete_checkout(self, checkout_id: str) -> str | None:
        """Turn the checkout into an order; return the order id if one was created."""
