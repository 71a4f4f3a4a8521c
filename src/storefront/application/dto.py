"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / web layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.model.checkout import CheckoutSession
from storefront.domain.model.value_objects import PostalAddress
from storefront.domain.service.pricing_projection import PricingView, project


@dataclass(frozen=True)
class PricingDTO:
    """Output: amounts formatted for display, e.g. "$4.25"."""

    subtotal: str
    tax: str
    total: str
    currency: str
    inconsistent: bool = False


@dataclass(frozen=True)
class CheckoutLineDTO:
    product_name: str
    product_description: str
    quantity: int


@dataclass(frozen=True)
class StepErrorDTO:
    step: str
    message: str
    persistent: bool = False


@dataclass(frozen=True)
class AddressDTO:
    first_name: str
    last_name: str
    street1: str
    street2: str
    city: str
    region: str
    postal_code: str
    country: str


@dataclass(frozen=True)
class CheckoutDTO:
    """Output: a checkout session as shown to the customer."""

    key: str
    checkout_id: str | None
    state: str
    payment_state: str
    lines: list[CheckoutLineDTO]
    pricing: PricingDTO
    email: str | None = None
    shipping_address: AddressDTO | None = None
    billing_address: AddressDTO | None = None
    delivery_method_id: str | None = None
    order_id: str | None = None
    error: StepErrorDTO | None = None


@dataclass(frozen=True)
class DeliveryMethodDTO:
    id: str
    name: str
    price: str


@dataclass(frozen=True)
class ProductDTO:
    """Output: the static product shown before a checkout exists."""

    id: str
    name: str
    description: str | None
    quantity: int
    base_price: str
    currency: str
    pricing: PricingDTO
    image_url: str | None = None
    image_alt: str | None = None


@dataclass(frozen=True)
class GatewayDTO:
    gateway_id: str
    amount: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransactionDTO:
    transaction_id: str
    event_type: str | None
    state: str
    action_required: bool = False
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserDTO:
    email: str


@dataclass(frozen=True)
class ProfileDTO:
    email: str
    first_name: str
    last_name: str
    default_shipping_address: AddressDTO | None = None


# --- Mapping helpers ----------------------------------------------------------


def pricing_to_dto(view: PricingView) -> PricingDTO:
    return PricingDTO(
        subtotal=str(view.subtotal),
        tax=str(view.tax),
        total=str(view.total),
        currency=view.currency,
        inconsistent=view.inconsistent,
    )


def address_to_dto(address: PostalAddress | None) -> AddressDTO | None:
    if address is None:
        return None
    return AddressDTO(
        first_name=address.first_name,
        last_name=address.last_name,
        street1=address.street1,
        street2=address.street2,
        city=address.city,
        region=address.region,
        postal_code=address.postal_code,
        country=address.country,
    )


def checkout_to_dto(session: CheckoutSession) -> CheckoutDTO:
    error = session.last_error
    return CheckoutDTO(
        key=session.key,
        checkout_id=session.id,
        state=session.state.value,
        payment_state=session.payment_state.value,
        lines=[
            CheckoutLineDTO(
                product_name=line.product_name,
                product_description=line.product_description,
                quantity=line.quantity.value,
            )
            for line in session.lines
        ],
        pricing=pricing_to_dto(project(session)),
        email=session.email,
        shipping_address=address_to_dto(session.shipping_address),
        billing_address=address_to_dto(session.billing_address),
        delivery_method_id=session.delivery_method_id,
        order_id=session.order_id,
        error=(
            StepErrorDTO(error.step.value, error.message, error.persistent)
            if error is not None
            else None
        ),
    )
