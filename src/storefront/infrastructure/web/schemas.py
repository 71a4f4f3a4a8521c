"""Request bodies for the storefront API.

Fields default to empty so that incomplete forms reach the application
layer and get its messages ("Please enter state", ...) instead of a
generic 422.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from storefront.domain.model.profile import PasswordChange, ProfileChangeSet
from storefront.domain.model.value_objects import AddressInput, BillingInput


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    first_name: str = ""
    last_name: str = ""


class ConfirmAccountRequest(BaseModel):
    email: str = ""
    token: str = ""


class PasswordResetRequest(BaseModel):
    email: str = ""


class PasswordResetConfirmRequest(BaseModel):
    email: str = ""
    token: str = ""
    password: str = ""
    confirmation: str = ""


class AddressRequest(BaseModel):
    full_name: str = ""
    street1: str = ""
    street2: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = "US"

    def to_input(self) -> AddressInput:
        return AddressInput(
            full_name=self.full_name,
            street1=self.street1,
            street2=self.street2,
            city=self.city,
            region=self.region,
            postal_code=self.postal_code,
            country=self.country,
        )


class BillingRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    street1: str = ""
    street2: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = "US"

    def to_input(self) -> BillingInput:
        return BillingInput(
            first_name=self.first_name,
            last_name=self.last_name,
            street1=self.street1,
            street2=self.street2,
            city=self.city,
            region=self.region,
            postal_code=self.postal_code,
            country=self.country,
        )


class DeliveryMethodRequest(BaseModel):
    delivery_method_id: str = ""


class TransactionRequest(BaseModel):
    payment_method: str = ""


class ProcessRequest(BaseModel):
    data: dict[str, Any] | None = None


class ProfileUpdateRequest(BaseModel):
    current_password: str = ""
    first_name: str | None = None
    last_name: str | None = None
    shipping_address: AddressRequest | None = None
    new_password: str | None = None
    confirm_password: str | None = None

    def to_change_set(self) -> ProfileChangeSet:
        password = None
        if self.new_password is not None or self.confirm_password is not None:
            password = PasswordChange(self.new_password or "", self.confirm_password or "")
        return ProfileChangeSet(
            current_password=self.current_password,
            first_name=self.first_name,
            last_name=self.last_name,
            shipping_address=(
                self.shipping_address.to_input() if self.shipping_address else None
            ),
            password=password,
        )
