"""Response models, one per backend operation.

Field names are snake_case; the camelCase wire names come from the alias
generator. Unknown fields are ignored, missing required ones fail
validation and surface as DecodeError.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SaleorModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MutationError(SaleorModel):
    field: str | None = None
    message: str | None = None
    code: str | None = None


class MutationPayload(SaleorModel):
    errors: list[MutationError] = []


class IdNode(SaleorModel):
    id: str


# --- Money --------------------------------------------------------------------


class MoneyNode(SaleorModel):
    amount: Decimal
    currency: str


class TaxedMoneyNode(SaleorModel):
    net: MoneyNode
    gross: MoneyNode


# --- Catalog ------------------------------------------------------------------


class MediaNode(SaleorModel):
    url: str
    alt: str | None = None


class ProductNode(SaleorModel):
    name: str
    description: str | None = None
    media: list[MediaNode] | None = None


class PriceNode(SaleorModel):
    net: MoneyNode


class VariantPricingNode(SaleorModel):
    price: PriceNode | None = None


class ProductVariantNode(SaleorModel):
    id: str
    pricing: VariantPricingNode | None = None
    product: ProductNode


class ProductVariantData(SaleorModel):
    product_variant: ProductVariantNode | None = None


# --- Checkout -----------------------------------------------------------------


class CheckoutNode(SaleorModel):
    id: str
    subtotal_price: TaxedMoneyNode | None = None
    total_price: TaxedMoneyNode | None = None


class CheckoutPayload(MutationPayload):
    checkout: CheckoutNode | None = None


class CheckoutCreateData(SaleorModel):
    checkout_create: CheckoutPayload


class CheckoutShippingAddressUpdateData(SaleorModel):
    checkout_shipping_address_update: CheckoutPayload


class CheckoutDeliveryMethodUpdateData(SaleorModel):
    checkout_delivery_method_update: CheckoutPayload


class CheckoutEmailUpdateData(SaleorModel):
    checkout_email_update: MutationPayload


class CheckoutBillingAddressUpdateData(SaleorModel):
    checkout_billing_address_update: MutationPayload


class ShippingMethodNode(SaleorModel):
    id: str
    name: str
    price: MoneyNode


class CheckoutShippingMethodsNode(SaleorModel):
    shipping_methods: list[ShippingMethodNode] = []


class CheckoutShippingMethodsData(SaleorModel):
    checkout: CheckoutShippingMethodsNode | None = None


class CheckoutCompletePayload(MutationPayload):
    order: IdNode | None = None


class CheckoutCompleteData(SaleorModel):
    checkout_complete: CheckoutCompletePayload


# --- Payments -----------------------------------------------------------------


class GatewayConfigNode(SaleorModel):
    id: str
    data: Any = None
    errors: list[MutationError] = []


class PaymentGatewayInitializePayload(MutationPayload):
    gateway_configs: list[GatewayConfigNode] | None = None


class PaymentGatewayInitializeData(SaleorModel):
    payment_gateway_initialize: PaymentGatewayInitializePayload


class TransactionEventNode(SaleorModel):
    type: str | None = None
    message: str | None = None


class TransactionPayload(MutationPayload):
    transaction: IdNode | None = None
    transaction_event: TransactionEventNode | None = None
    data: Any = None


class TransactionInitializeData(SaleorModel):
    transaction_initialize: TransactionPayload


class TransactionProcessData(SaleorModel):
    transaction_process: TransactionPayload


# --- Account ------------------------------------------------------------------


class TokenPayload(MutationPayload):
    token: str | None = None


class TokenCreateData(SaleorModel):
    token_create: TokenPayload


class SetPasswordData(SaleorModel):
    set_password: TokenPayload


class MeNode(SaleorModel):
    email: str


class MeData(SaleorModel):
    me: MeNode | None = None


class CountryNode(SaleorModel):
    code: str


class AddressNode(SaleorModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    street_address1: str = ""
    street_address2: str = ""
    city: str = ""
    postal_code: str = ""
    country_area: str = ""
    country: CountryNode | None = None


class ProfileNode(SaleorModel):
    email: str
    first_name: str = ""
    last_name: str = ""
    default_shipping_address: AddressNode | None = None


class ProfileData(SaleorModel):
    me: ProfileNode | None = None


class AddressPayload(MutationPayload):
    address: IdNode | None = None


class AccountUpdateData(SaleorModel):
    account_update: MutationPayload


class AccountAddressCreateData(SaleorModel):
    account_address_create: AddressPayload


class AccountAddressUpdateData(SaleorModel):
    account_address_update: AddressPayload


class AccountSetDefaultAddressData(SaleorModel):
    account_set_default_address: MutationPayload


class PasswordChangeData(SaleorModel):
    password_change: MutationPayload


class AccountRegisterData(SaleorModel):
    account_register: MutationPayload


class ConfirmAccountData(SaleorModel):
    confirm_account: MutationPayload


class RequestPasswordResetData(SaleorModel):
    request_password_reset: MutationPayload
