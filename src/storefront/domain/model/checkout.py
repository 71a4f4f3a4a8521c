"""CheckoutSession aggregate, the core of the domain.

A CheckoutSession mirrors one checkout attempt against the commerce
backend. The backend stays the source of truth; this aggregate records
what has been confirmed so far and enforces the order in which the
remaining steps may run.

Failed steps never roll back earlier confirmed state. Most failures are
recorded as ``last_error`` and leave the session where it was, so the
step can be retried by the user. Failures that end the attempt (create,
transaction processing) move the session to the absorbing FAILED state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransitionError, StepInProgressError
from storefront.domain.model.value_objects import Money, PostalAddress, Quantity


class CheckoutState(Enum):
    EMPTY = "EMPTY"
    CREATED = "CREATED"
    ADDRESS_SET = "ADDRESS_SET"
    TAX_READY = "TAX_READY"
    DELIVERY_SET = "DELIVERY_SET"
    GATEWAY_READY = "GATEWAY_READY"
    TRANSACTION_INITIALIZED = "TRANSACTION_INITIALIZED"
    PROCESSED = "PROCESSED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class PaymentState(Enum):
    NONE = "NONE"
    GATEWAY_READY = "GATEWAY_READY"
    TRANSACTION_INITIALIZED = "TRANSACTION_INITIALIZED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class CheckoutStep(Enum):
    CREATE = "create"
    SHIPPING_ADDRESS = "shipping_address"
    DELIVERY_METHOD = "delivery_method"
    BILLING_DETAILS = "billing_details"
    PAYMENT_GATEWAY = "payment_gateway"
    TRANSACTION = "transaction"
    PROCESS = "process"
    COMPLETE = "complete"


_PRICED_STATES = frozenset(
    {CheckoutState.TAX_READY, CheckoutState.DELIVERY_SET, CheckoutState.GATEWAY_READY}
)

ALLOWED_FROM: dict[CheckoutStep, frozenset[CheckoutState]] = {
    CheckoutStep.CREATE: frozenset({CheckoutState.EMPTY}),
    CheckoutStep.SHIPPING_ADDRESS: frozenset(
        {CheckoutState.CREATED, CheckoutState.ADDRESS_SET} | _PRICED_STATES
    ),
    CheckoutStep.DELIVERY_METHOD: _PRICED_STATES,
    CheckoutStep.BILLING_DETAILS: _PRICED_STATES,
    CheckoutStep.PAYMENT_GATEWAY: _PRICED_STATES,
    CheckoutStep.TRANSACTION: frozenset({CheckoutState.GATEWAY_READY}),
    CheckoutStep.PROCESS: frozenset({CheckoutState.TRANSACTION_INITIALIZED}),
    CheckoutStep.COMPLETE: frozenset({CheckoutState.PROCESSED}),
}

_PAYMENT_STEPS = frozenset(
    {CheckoutStep.PAYMENT_GATEWAY, CheckoutStep.TRANSACTION, CheckoutStep.PROCESS}
)


@dataclass(frozen=True)
class Pricing:
    """Backend-computed amounts for a checkout.

    Tax is deliberately not a field: it is always derived from
    ``total_gross - total_net`` by the pricing projection.
    """

    subtotal_net: Money
    total_net: Money
    total_gross: Money

    @property
    def currency(self) -> str:
        return self.total_gross.currency


@dataclass(frozen=True)
class CheckoutLine:
    variant_id: str
    product_name: str
    product_description: str
    quantity: Quantity


@dataclass(frozen=True)
class DeliveryMethod:
    id: str
    name: str
    price: Money


@dataclass(frozen=True)
class StepFailure:
    step: CheckoutStep
    message: str
    persistent: bool = False


@dataclass
class CheckoutSession:
    """Aggregate root for one checkout attempt.

    ``key`` is the local handle the session is stored under; ``id`` is the
    backend checkout id, set by the create step and cleared on completion.
    """

    key: str
    lines: list[CheckoutLine]
    id: str | None = None
    state: CheckoutState = CheckoutState.EMPTY
    email: str | None = None
    shipping_address: PostalAddress | None = None
    billing_address: PostalAddress | None = None
    pricing: Pricing | None = None
    delivery_method_id: str | None = None
    payment_state: PaymentState = PaymentState.NONE
    gateway_id: str | None = None
    transaction_id: str | None = None
    order_id: str | None = None
    failure: StepFailure | None = None
    last_error: StepFailure | None = None
    busy: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Step bracketing ------------------------------------------------------

    def require(self, step: CheckoutStep) -> None:
        """Raise unless *step* may run from the current state."""
        if self.state not in ALLOWED_FROM[step]:
            raise InvalidTransitionError(
                f"Cannot run step '{step.value}': checkout is {self.state.value}"
            )
        if step == CheckoutStep.PAYMENT_GATEWAY and (
            self.billing_address is None or self.email is None
        ):
            raise InvalidTransitionError(
                "Billing details must be set before the payment gateway is initialized"
            )

    def begin_step(self, step: CheckoutStep) -> None:
        if self.busy:
            raise StepInProgressError("Another checkout step is still in progress")
        self.require(step)
        self.busy = True
        self.last_error = None

    def end_step(self) -> None:
        self.busy = False

    # --- State transitions ----------------------------------------------------

    def record_created(self, checkout_id: str, pricing: Pricing | None) -> None:
        """Transition EMPTY -> CREATED."""
        self.require(CheckoutStep.CREATE)
        self.id = checkout_id
        self.pricing = pricing
        self.state = CheckoutState.CREATED

    def apply_shipping_address(
        self, address: PostalAddress, pricing: Pricing | None
    ) -> None:
        """Record a confirmed shipping address and the recomputed pricing.

        Moves to TAX_READY when the backend returned pricing, ADDRESS_SET
        otherwise. Any chosen delivery method and gateway handshake are
        dropped because both depend on the address.
        """
        self.require(CheckoutStep.SHIPPING_ADDRESS)
        self.shipping_address = address
        self.delivery_method_id = None
        self._reset_gateway()
        if pricing is not None:
            self.pricing = pricing
            self.state = CheckoutState.TAX_READY
        else:
            self.state = CheckoutState.ADDRESS_SET

    def apply_delivery_method(self, method_id: str, pricing: Pricing | None) -> None:
        """Transition to DELIVERY_SET; invalidates the gateway handshake."""
        self.require(CheckoutStep.DELIVERY_METHOD)
        self.delivery_method_id = method_id
        if pricing is not None:
            self.pricing = pricing
        self._reset_gateway()
        self.state = CheckoutState.DELIVERY_SET

    def apply_billing_details(self, email: str, address: PostalAddress) -> None:
        """Record email and billing address. Pricing is unaffected."""
        self.require(CheckoutStep.BILLING_DETAILS)
        self.email = email
        self.billing_address = address

    def mark_gateway_ready(self, gateway_id: str) -> None:
        self.require(CheckoutStep.PAYMENT_GATEWAY)
        self.gateway_id = gateway_id
        self.payment_state = PaymentState.GATEWAY_READY
        self.state = CheckoutState.GATEWAY_READY

    def mark_transaction_initialized(self, transaction_id: str) -> None:
        self.require(CheckoutStep.TRANSACTION)
        self.transaction_id = transaction_id
        self.payment_state = PaymentState.TRANSACTION_INITIALIZED
        self.state = CheckoutState.TRANSACTION_INITIALIZED

    def mark_processing(self) -> None:
        self.require(CheckoutStep.PROCESS)
        self.payment_state = PaymentState.PROCESSING

    def mark_action_required(self) -> None:
        """The processor is waiting on the customer; processing can be re-run."""
        self.require(CheckoutStep.PROCESS)
        self.payment_state = PaymentState.TRANSACTION_INITIALIZED

    def mark_processed(self) -> None:
        """Transition TRANSACTION_INITIALIZED -> PROCESSED."""
        self.require(CheckoutStep.PROCESS)
        self.state = CheckoutState.PROCESSED

    def mark_completed(self, order_id: str) -> None:
        """Transition PROCESSED -> COMPLETED.

        The backend checkout is consumed by the order, so the working id is
        cleared; another purchase needs a new session.
        """
        self.require(CheckoutStep.COMPLETE)
        self.order_id = order_id
        self.id = None
        self.payment_state = PaymentState.COMPLETED
        self.state = CheckoutState.COMPLETED

    def fail(self, step: CheckoutStep, message: str) -> None:
        """Move to the absorbing FAILED state."""
        self.failure = StepFailure(step, message)
        self.last_error = self.failure
        if step in _PAYMENT_STEPS:
            self.payment_state = PaymentState.FAILED
        self.state = CheckoutState.FAILED

    def record_error(
        self, step: CheckoutStep, message: str, persistent: bool = False
    ) -> None:
        """Remember a retryable failure without changing state."""
        self.last_error = StepFailure(step, message, persistent)

    # --- Computed properties --------------------------------------------------

    @property
    def is_finished(self) -> bool:
        return self.state in (CheckoutState.COMPLETED, CheckoutState.FAILED)

    @property
    def backend_id(self) -> str:
        if self.id is None:
            raise InvalidTransitionError("Checkout has not been created")
        return self.id

    @property
    def gateway_ref(self) -> str:
        if self.gateway_id is None:
            raise InvalidTransitionError("Payment gateway has not been initialized")
        return self.gateway_id

    @property
    def transaction_ref(self) -> str:
        if self.transaction_id is None:
            raise InvalidTransitionError("Payment transaction has not been initialized")
        return self.transaction_id

    @property
    def amount_due(self) -> Money:
        if self.pricing is None:
            raise InvalidTransitionError("Checkout has no pricing yet")
        return self.pricing.total_gross

    # --- Internal helpers -----------------------------------------------------

    def _reset_gateway(self) -> None:
        self.gateway_id = None
        if self.payment_state == PaymentState.GATEWAY_READY:
            self.payment_state = PaymentState.NONE
