"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON repositories
and the Saleor adapters but keep everything in memory. No file I/O, no
network. Every gateway call is recorded in ``calls``; a call can be made
to fail by putting an exception into ``errors`` under its method name.
"""

from __future__ import annotations

from typing import Any

from storefront.domain.exceptions import DomainError
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.gateway.content_gateway import ContentGateway
from storefront.domain.model.catalog import ImageAsset, ProductVariant
from storefront.domain.model.checkout import (
    CheckoutLine,
    CheckoutSession,
    DeliveryMethod,
    Pricing,
)
from storefront.domain.model.identity import SessionContext, UserIdentity
from storefront.domain.model.payment import GatewayConfig, TransactionResult
from storefront.domain.model.profile import Profile
from storefront.domain.model.value_objects import Money, PostalAddress
from storefront.domain.repository.checkout_repository import CheckoutRepository
from storefront.domain.repository.session_store import SessionStore

VARIANT_ID = "UHJvZHVjdFZhcmlhbnQ6MQ=="


def make_pricing(subtotal: str, total_net: str, total_gross: str) -> Pricing:
    return Pricing(
        subtotal_net=Money.of(subtotal),
        total_net=Money.of(total_net),
        total_gross=Money.of(total_gross),
    )


def make_variant(price: str = "49.99", image: ImageAsset | None = None) -> ProductVariant:
    return ProductVariant(
        id=VARIANT_ID,
        product_name="Juice",
        description="Freshly squeezed.",
        base_price=Money.of(price),
        image=image,
    )


def signed_in(email: str = "alice@example.com", token: str = "tok-alice") -> SessionContext:
    return SessionContext(token=token, identity=UserIdentity(email))


class FakeCheckoutRepository(CheckoutRepository):

    def __init__(self) -> None:
        self._store: dict[str, CheckoutSession] = {}
        self._next = 1

    def next_key(self) -> str:
        key = f"chk-{self._next}"
        self._next += 1
        return key

    def get(self, key: str) -> CheckoutSession | None:
        return self._store.get(key)

    def save(self, session: CheckoutSession) -> None:
        self._store[session.key] = session

    def discard(self, key: str) -> None:
        self._store.pop(key, None)


class FakeSessionStore(SessionStore):

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def read(self) -> str | None:
        return self.token

    def set(self, token: str) -> None:
        self.token = token

    def clear(self) -> None:
        self.token = None


class _Recording:

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.errors: dict[str, Exception] = {}

    def _call(self, name: str) -> None:
        self.calls.append(name)
        error = self.errors.get(name)
        if error is not None:
            raise error


class FakeCheckoutGateway(_Recording, CheckoutGateway):
    """A backend with one product and predictable prices.

    Creating prices the line without tax, an address adds $4.25 tax and
    the delivery method adds $10.00 shipping.
    """

    def __init__(self, variant: ProductVariant | None = None) -> None:
        super().__init__()
        self.variant: ProductVariant | None = variant or make_variant()
        self.created_pricing: Pricing | None = make_pricing("49.99", "49.99", "49.99")
        self.address_pricing: Pricing | None = make_pricing("49.99", "49.99", "54.24")
        self.delivery_pricing: Pricing | None = make_pricing("49.99", "59.99", "64.24")
        self.delivery_methods = [
            DeliveryMethod(id="ship-1", name="Standard", price=Money.of("10.00"))
        ]
        self.gateway_config = GatewayConfig(id="saleor.io.stripe", data={"publishableKey": "pk"})
        self.transaction = TransactionResult(
            id="txn-1", event_type="CHARGE_REQUEST", data={"clientSecret": "cs"}
        )
        self.processed = TransactionResult(id="txn-1", event_type="CHARGE_SUCCESS")
        self.order_id: str | None = "order-1"

        self.shipping_address: PostalAddress | None = None
        self.billing_address: PostalAddress | None = None
        self.email: str | None = None
        self.amounts: list[Money] = []
        self.payment_data: dict[str, Any] | None = None

    def get_product_variant(self, variant_id: str) -> ProductVariant | None:
        self._call("get_product_variant")
        if self.variant is None or self.variant.id != variant_id:
            return None
        return self.variant

    def create_checkout(self, lines: list[CheckoutLine]) -> tuple[str, Pricing | None]:
        self._call("create_checkout")
        return "Q2hlY2tvdXQ6MQ==", self.created_pricing

    def update_shipping_address(
        self, checkout_id: str, address: PostalAddress
    ) -> Pricing | None:
        self._call("update_shipping_address")
        self.shipping_address = address
        return self.address_pricing

    def list_delivery_methods(self, checkout_id: str) -> list[DeliveryMethod]:
        self._call("list_delivery_methods")
        return list(self.delivery_methods)

    def update_delivery_method(self, checkout_id: str, method_id: str) -> Pricing | None:
        self._call("update_delivery_method")
        return self.delivery_pricing

    def update_email(self, checkout_id: str, email: str) -> None:
        self._call("update_email")
        self.email = email

    def update_billing_address(self, checkout_id: str, address: PostalAddress) -> None:
        self._call("update_billing_address")
        self.billing_address = address

    def initialize_payment_gateway(self, checkout_id: str, amount: Money) -> GatewayConfig:
        self._call("initialize_payment_gateway")
        self.amounts.append(amount)
        return self.gateway_config

    def initialize_transaction(
        self,
        checkout_id: str,
        gateway_id: str,
        amount: Money,
        data: dict[str, Any],
    ) -> TransactionResult:
        self._call("initialize_transaction")
        self.amounts.append(amount)
        self.payment_data = data
        return self.transaction

    def process_transaction(
        self, transaction_id: str, data: dict[str, Any] | None = None
    ) -> TransactionResult:
        self._call("process_transaction")
        return self.processed

    def complete_checkout(self, checkout_id: str) -> str | None:
        self._call("complete_checkout")
        return self.order_id


class FakeAccountGateway(_Recording, AccountGateway):
    """Accounts keyed by email; the token for ``alice@example.com`` is ``tok-alice``."""

    def __init__(self) -> None:
        super().__init__()
        self.passwords: dict[str, str] = {"alice@example.com": "secret"}
        self.profiles: dict[str, Profile] = {
            "tok-alice": Profile(email="alice@example.com", first_name="Alice", last_name="Smith")
        }
        self.addresses: dict[str, PostalAddress] = {}
        self.default_shipping_address_id: str | None = None
        self.registered: list[str] = []
        self.confirmed: list[str] = []
        self.reset_requests: list[str] = []

    def create_token(self, email: str, password: str) -> str:
        self._call("create_token")
        if self.passwords.get(email) != password:
            raise DomainError("Please, enter valid credentials", field="email")
        return f"tok-{email.split('@')[0]}"

    def me(self, token: str) -> UserIdentity | None:
        self._call("me")
        profile = self.profiles.get(token)
        return UserIdentity(profile.email) if profile else None

    def get_profile(self, token: str) -> Profile | None:
        self._call("get_profile")
        return self.profiles.get(token)

    def update_name(self, token: str, first_name: str | None, last_name: str | None) -> None:
        self._call("update_name")
        profile = self.profiles[token]
        self.profiles[token] = Profile(
            email=profile.email,
            first_name=first_name if first_name is not None else profile.first_name,
            last_name=last_name if last_name is not None else profile.last_name,
            default_shipping_address_id=profile.default_shipping_address_id,
            default_shipping_address=profile.default_shipping_address,
        )

    def create_address(self, token: str, address: PostalAddress) -> str:
        self._call("create_address")
        address_id = f"addr-{len(self.addresses) + 1}"
        self.addresses[address_id] = address
        return address_id

    def update_address(self, token: str, address_id: str, address: PostalAddress) -> None:
        self._call("update_address")
        self.addresses[address_id] = address

    def set_default_shipping_address(self, token: str, address_id: str) -> None:
        self._call("set_default_shipping_address")
        self.default_shipping_address_id = address_id

    def change_password(self, token: str, old_password: str, new_password: str) -> None:
        self._call("change_password")
        email = self.profiles[token].email
        if self.passwords.get(email) != old_password:
            raise DomainError("Old password isn't valid.", field="oldPassword")
        self.passwords[email] = new_password

    def register(self, email: str, password: str, first_name: str, last_name: str) -> None:
        self._call("register")
        self.registered.append(email)

    def confirm_account(self, email: str, token: str) -> None:
        self._call("confirm_account")
        self.confirmed.append(email)

    def request_password_reset(self, email: str) -> None:
        self._call("request_password_reset")
        self.reset_requests.append(email)

    def set_password(self, email: str, token: str, password: str) -> str:
        self._call("set_password")
        self.passwords[email] = password
        return f"tok-{email.split('@')[0]}"


class FakeContentGateway(_Recording, ContentGateway):

    def __init__(self, image: ImageAsset | None = None) -> None:
        super().__init__()
        self.image = image

    def get_checkout_image(self) -> ImageAsset | None:
        self._call("get_checkout_image")
        return self.image
