"""Saleor-backed implementation of AccountGateway."""

from __future__ import annotations

from storefront.domain.exceptions import DomainError
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.model.identity import UserIdentity
from storefront.domain.model.profile import Profile
from storefront.domain.model.value_objects import PostalAddress
from storefront.infrastructure.saleor import operations as ops
from storefront.infrastructure.saleor import schemas
from storefront.infrastructure.saleor.checkout_gateway import (
    address_variables,
    raise_for_errors,
)
from storefront.infrastructure.saleor.graphql_client import GraphQLClient


class SaleorAccountGateway(AccountGateway):

    def __init__(self, client: GraphQLClient, channel: str, redirect_url: str) -> None:
        self._client = client
        self._channel = channel
        self._redirect_url = redirect_url

    # --- Authentication -------------------------------------------------------

    def create_token(self, email: str, password: str) -> str:
        data = self._client.execute(
            ops.TOKEN_CREATE,
            schemas.TokenCreateData,
            {"email": email, "password": password},
        )
        return self._token(data.token_create, "Login failed")

    def me(self, token: str) -> UserIdentity | None:
        data = self._client.execute(ops.ME, schemas.MeData, auth_token=token)
        if data.me is None:
            return None
        return UserIdentity(email=data.me.email)

    # --- Profile --------------------------------------------------------------

    def get_profile(self, token: str) -> Profile | None:
        data = self._client.execute(ops.PROFILE, schemas.ProfileData, auth_token=token)
        node = data.me
        if node is None:
            return None
        address = node.default_shipping_address
        return Profile(
            email=node.email,
            first_name=node.first_name,
            last_name=node.last_name,
            default_shipping_address_id=address.id if address else None,
            default_shipping_address=_stored_address(address) if address else None,
        )

    def update_name(self, token: str, first_name: str | None, last_name: str | None) -> None:
        variables: dict[str, str] = {}
        if first_name is not None:
            variables["firstName"] = first_name
        if last_name is not None:
            variables["lastName"] = last_name
        data = self._client.execute(
            ops.ACCOUNT_UPDATE, schemas.AccountUpdateData, variables, auth_token=token
        )
        raise_for_errors(data.account_update, "Name update failed")

    def create_address(self, token: str, address: PostalAddress) -> str:
        data = self._client.execute(
            ops.ACCOUNT_ADDRESS_CREATE,
            schemas.AccountAddressCreateData,
            {"input": address_variables(address)},
            auth_token=token,
        )
        payload = data.account_address_create
        raise_for_errors(payload, "Address create failed")
        if payload.address is None:
            raise DomainError("Address create failed")
        return payload.address.id

    def update_address(self, token: str, address_id: str, address: PostalAddress) -> None:
        data = self._client.execute(
            ops.ACCOUNT_ADDRESS_UPDATE,
            schemas.AccountAddressUpdateData,
            {"id": address_id, "input": address_variables(address)},
            auth_token=token,
        )
        raise_for_errors(data.account_address_update, "Address update failed")

    def set_default_shipping_address(self, token: str, address_id: str) -> None:
        data = self._client.execute(
            ops.ACCOUNT_SET_DEFAULT_ADDRESS,
            schemas.AccountSetDefaultAddressData,
            {"id": address_id},
            auth_token=token,
        )
        raise_for_errors(data.account_set_default_address, "Set default address failed")

    def change_password(self, token: str, old_password: str, new_password: str) -> None:
        data = self._client.execute(
            ops.PASSWORD_CHANGE,
            schemas.PasswordChangeData,
            {"oldPassword": old_password, "newPassword": new_password},
            auth_token=token,
        )
        raise_for_errors(data.password_change, "Password change failed")

    # --- Registration and recovery --------------------------------------------

    def register(self, email: str, password: str, first_name: str, last_name: str) -> None:
        data = self._client.execute(
            ops.ACCOUNT_REGISTER,
            schemas.AccountRegisterData,
            {
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
                "redirectUrl": self._redirect_url,
                "channel": self._channel,
            },
        )
        raise_for_errors(data.account_register, "Registration failed")

    def confirm_account(self, email: str, token: str) -> None:
        data = self._client.execute(
            ops.CONFIRM_ACCOUNT,
            schemas.ConfirmAccountData,
            {"email": email, "token": token},
        )
        raise_for_errors(data.confirm_account, "Account confirmation failed")

    def request_password_reset(self, email: str) -> None:
        data = self._client.execute(
            ops.REQUEST_PASSWORD_RESET,
            schemas.RequestPasswordResetData,
            {"email": email, "redirectUrl": self._redirect_url, "channel": self._channel},
        )
        raise_for_errors(data.request_password_reset, "Password reset request failed")

    def set_password(self, email: str, token: str, password: str) -> str:
        data = self._client.execute(
            ops.SET_PASSWORD,
            schemas.SetPasswordData,
            {"email": email, "token": token, "password": password},
        )
        return self._token(data.set_password, "Password reset failed")

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _token(payload: schemas.TokenPayload, default: str) -> str:
        raise_for_errors(payload, default)
        if not payload.token:
            raise DomainError(default)
        return payload.token


def _stored_address(node: schemas.AddressNode) -> PostalAddress:
    return PostalAddress(
        first_name=node.first_name,
        last_name=node.last_name,
        street1=node.street_address1,
        street2=node.street_address2,
        city=node.city,
        region=node.country_area,
        postal_code=node.postal_code,
        country=node.country.code if node.country else "US",
    )
