"""Domain service: Pricing View Projection.

Derives what the customer sees (subtotal, tax, total, currency) from
whatever is known at the moment: a checkout with backend pricing, a
checkout still loading, or only the static product before creation.

Tax is never read from the backend; it is ``total - subtotal`` every
time, so it cannot drift from the totals it is displayed with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.catalog import ProductVariant
from storefront.domain.model.checkout import CheckoutSession
from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class PricingView:
    subtotal: Money
    tax: Money
    total: Money
    inconsistent: bool = False

    @property
    def currency(self) -> str:
        return self.total.currency


def project(
    session: CheckoutSession | None = None,
    product: ProductVariant | None = None,
    quantity: int = 1,
) -> PricingView:
    """Project display pricing from a session, falling back to the product.

    Missing fields fall back in order: session pricing, then the static
    product price times *quantity*, then zero. If the backend reports a
    gross total below the net total, tax is clamped to zero and the view
    is flagged ``inconsistent``.
    """
    pricing = session.pricing if session is not None else None

    if pricing is not None:
        subtotal = pricing.total_net.amount
        total = pricing.total_gross.amount
        currency = pricing.currency
    elif product is not None:
        subtotal = product.base_price.amount * quantity
        total = subtotal
        currency = product.base_price.currency
    else:
        subtotal = total = Decimal("0")
        currency = DEFAULT_CURRENCY

    inconsistent = total < subtotal
    if inconsistent:
        logger.warning(
            "Gross total %s is below net total %s %s; displaying zero tax",
            total,
            subtotal,
            currency,
        )
    tax = total - subtotal
    if tax < 0:
        tax = Decimal("0")

    return PricingView(
        subtotal=Money(subtotal, currency).rounded(),
        tax=Money(tax, currency).rounded(),
        total=Money(total, currency).rounded(),
        inconsistent=inconsistent,
    )
