"""Application services: Show Profile and Update Profile.

Profile updates run as a sequence of independent backend mutations:

    verify current password -> name -> shipping address -> password

The current password is checked against the backend before anything is
changed, whichever fields the change-set touches. The first mutation to
fail stops the sequence and is the only failure reported. Mutations that
already went through stay applied.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from storefront.application.dto import ProfileDTO, address_to_dto
from storefront.domain.exceptions import (
    AuthExpiredError,
    DomainError,
    GatewayError,
    GraphQLError,
    InvalidCredentialsError,
    ProfileUpdateError,
    ValidationError,
)
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.model.identity import SessionContext
from storefront.domain.model.profile import Profile, ProfileChangeSet, ProfileUpdateResult
from storefront.domain.model.value_objects import PostalAddress

logger = logging.getLogger(__name__)


def load_profile(account_gateway: AccountGateway, context: SessionContext) -> Profile:
    """Fetch the profile for the context's token.

    A token the backend no longer accepts is reported as AuthExpiredError.
    """
    token = context.require_token()
    try:
        profile = account_gateway.get_profile(token)
    except GraphQLError as exc:
        logger.info("Profile read rejected: %s", exc)
        raise AuthExpiredError("Unauthorized") from exc
    if profile is None:
        raise AuthExpiredError("Unauthorized")
    return profile


class ShowProfileHandler:

    def __init__(self, account_gateway: AccountGateway) -> None:
        self._account_gateway = account_gateway

    def handle(self, context: SessionContext) -> ProfileDTO:
        profile = load_profile(self._account_gateway, context)
        return ProfileDTO(
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            default_shipping_address=address_to_dto(profile.default_shipping_address),
        )


class UpdateProfileHandler:

    def __init__(self, account_gateway: AccountGateway) -> None:
        self._account_gateway = account_gateway

    def handle(self, context: SessionContext, changes: ProfileChangeSet) -> ProfileUpdateResult:
        token = context.require_token()
        if not changes.current_password:
            raise ValidationError("Current password required")
        if changes.is_empty:
            raise ValidationError("Nothing to update")
        if changes.shipping_address is not None:
            # Malformed addresses never reach the backend.
            changes.shipping_address.validated()

        profile = load_profile(self._account_gateway, context)
        address = self._validated_address(changes, profile)

        self._verify_password(profile.email, changes.current_password)

        result = ProfileUpdateResult()
        if changes.changes_name:
            self._apply(
                "name",
                result,
                lambda: self._account_gateway.update_name(
                    token, changes.first_name, changes.last_name
                ),
            )
        if address is not None:
            self._apply(
                "shipping_address",
                result,
                lambda: self._upsert_shipping_address(token, profile, address),
            )
        if changes.password is not None:
            new_password = changes.password.new_password
            self._apply(
                "password",
                result,
                lambda: self._account_gateway.change_password(
                    token, changes.current_password, new_password
                ),
            )
        return result

    # --- Steps ----------------------------------------------------------------

    def _verify_password(self, email: str, password: str) -> None:
        try:
            self._account_gateway.create_token(email, password)
        except DomainError as exc:
            logger.info("Profile update refused for %s: %s", email, exc.message)
            raise InvalidCredentialsError() from exc

    def _upsert_shipping_address(
        self, token: str, profile: Profile, address: PostalAddress
    ) -> None:
        """Update the known default address in place, or create one and make it default."""
        if profile.default_shipping_address_id:
            self._account_gateway.update_address(
                token, profile.default_shipping_address_id, address
            )
            return
        address_id = self._account_gateway.create_address(token, address)
        self._account_gateway.set_default_shipping_address(token, address_id)

    @staticmethod
    def _apply(step: str, result: ProfileUpdateResult, mutation: Callable[[], None]) -> None:
        try:
            mutation()
        except DomainError as exc:
            raise ProfileUpdateError(step, exc.message, result.applied) from exc
        except GatewayError:
            logger.warning(
                "Profile update stopped at %s; already applied: %s",
                step,
                ", ".join(result.applied) or "nothing",
            )
            raise
        result.applied.append(step)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validated_address(
        changes: ProfileChangeSet, profile: Profile
    ) -> PostalAddress | None:
        """Validate the address locally; an empty name falls back to the account name."""
        if changes.shipping_address is None:
            return None
        address_input = changes.shipping_address
        if not address_input.full_name.strip():
            first = changes.first_name if changes.first_name is not None else profile.first_name
            last = changes.last_name if changes.last_name is not None else profile.last_name
            address_input = dataclasses.replace(address_input, full_name=f"{first} {last}")
        return address_input.validated()
