"""Integration tests for the ShowProfile and UpdateProfile use cases."""

import pytest

from storefront.application.update_profile import ShowProfileHandler, UpdateProfileHandler
from storefront.domain.exceptions import (
    AuthExpiredError,
    DomainError,
    GraphQLError,
    InvalidCredentialsError,
    ProfileUpdateError,
    TransportError,
    ValidationError,
)
from storefront.domain.model.identity import SessionContext
from storefront.domain.model.profile import PasswordChange, Profile, ProfileChangeSet
from storefront.domain.model.value_objects import AddressInput, PostalAddress
from tests.fakes import FakeAccountGateway, signed_in


def _address(full_name: str = "Alice Smith") -> AddressInput:
    return AddressInput(
        full_name=full_name,
        street1="1 Main St",
        city="Springfield",
        region="IL",
        postal_code="62701",
    )


class TestShowProfile:

    def test_show(self):
        dto = ShowProfileHandler(FakeAccountGateway()).handle(signed_in())
        assert dto.email == "alice@example.com"
        assert dto.first_name == "Alice"
        assert dto.default_shipping_address is None

    def test_without_token_unauthorized(self):
        with pytest.raises(AuthExpiredError, match="Unauthorized"):
            ShowProfileHandler(FakeAccountGateway()).handle(SessionContext.anonymous())

    def test_rejected_token_unauthorized(self):
        gateway = FakeAccountGateway()
        gateway.errors["get_profile"] = GraphQLError(["Signature has expired"])
        with pytest.raises(AuthExpiredError):
            ShowProfileHandler(gateway).handle(signed_in())


class TestUpdateProfileValidation:

    def test_current_password_required(self):
        gateway = FakeAccountGateway()
        with pytest.raises(ValidationError, match="Current password required"):
            UpdateProfileHandler(gateway).handle(
                signed_in(), ProfileChangeSet(current_password="", first_name="Al")
            )
        assert gateway.calls == []

    def test_empty_change_set_rejected(self):
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateProfileHandler(FakeAccountGateway()).handle(
                signed_in(), ProfileChangeSet(current_password="secret")
            )

    def test_invalid_address_rejected_before_backend(self):
        gateway = FakeAccountGateway()
        changes = ProfileChangeSet(
            current_password="secret",
            shipping_address=AddressInput("A B", "1 Main St", "Springfield", "IL", "1"),
        )
        with pytest.raises(ValidationError, match="ZIP code"):
            UpdateProfileHandler(gateway).handle(signed_in(), changes)
        assert gateway.calls == []

    def test_mismatched_passwords_rejected(self):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            PasswordChange("one", "two")

    def test_wrong_current_password_changes_nothing(self):
        gateway = FakeAccountGateway()
        changes = ProfileChangeSet(current_password="wrong", first_name="Al")

        with pytest.raises(InvalidCredentialsError):
            UpdateProfileHandler(gateway).handle(signed_in(), changes)

        assert "update_name" not in gateway.calls
        assert gateway.profiles["tok-alice"].first_name == "Alice"

    def test_current_password_is_not_trimmed(self):
        gateway = FakeAccountGateway()
        gateway.passwords["alice@example.com"] = " secret "

        with pytest.raises(InvalidCredentialsError):
            UpdateProfileHandler(gateway).handle(
                signed_in(), ProfileChangeSet(current_password="secret", first_name="Al")
            )
        assert "update_name" not in gateway.calls


class TestUpdateProfileSequence:

    def test_name_only(self):
        gateway = FakeAccountGateway()

        result = UpdateProfileHandler(gateway).handle(
            signed_in(), ProfileChangeSet(current_password="secret", last_name="Jones")
        )

        assert result.applied == ["name"]
        assert gateway.profiles["tok-alice"].last_name == "Jones"

    def test_new_address_is_created_and_made_default(self):
        gateway = FakeAccountGateway()

        result = UpdateProfileHandler(gateway).handle(
            signed_in(),
            ProfileChangeSet(current_password="secret", shipping_address=_address()),
        )

        assert result.applied == ["shipping_address"]
        assert gateway.calls[-2:] == ["create_address", "set_default_shipping_address"]
        assert gateway.default_shipping_address_id == "addr-1"

    def test_existing_default_address_is_updated(self):
        gateway = FakeAccountGateway()
        stored = _address().validated()
        gateway.profiles["tok-alice"] = Profile(
            email="alice@example.com",
            first_name="Alice",
            last_name="Smith",
            default_shipping_address_id="addr-9",
            default_shipping_address=stored,
        )

        UpdateProfileHandler(gateway).handle(
            signed_in(),
            ProfileChangeSet(current_password="secret", shipping_address=_address()),
        )

        assert "create_address" not in gateway.calls
        assert "addr-9" in gateway.addresses

    def test_blank_address_name_uses_account_name(self):
        gateway = FakeAccountGateway()

        UpdateProfileHandler(gateway).handle(
            signed_in(),
            ProfileChangeSet(
                current_password="secret",
                first_name="Alicia",
                shipping_address=_address(full_name=""),
            ),
        )

        address: PostalAddress = gateway.addresses["addr-1"]
        assert (address.first_name, address.last_name) == ("Alicia", "Smith")

    def test_everything_in_order(self):
        gateway = FakeAccountGateway()

        result = UpdateProfileHandler(gateway).handle(
            signed_in(),
            ProfileChangeSet(
                current_password="secret",
                first_name="Alicia",
                shipping_address=_address(),
                password=PasswordChange("better", "better"),
            ),
        )

        assert result.applied == ["name", "shipping_address", "password"]
        assert gateway.passwords["alice@example.com"] == "better"

    def test_partial_failure_reports_what_was_applied(self):
        gateway = FakeAccountGateway()
        gateway.errors["create_address"] = DomainError("Invalid postal code")

        with pytest.raises(ProfileUpdateError) as exc_info:
            UpdateProfileHandler(gateway).handle(
                signed_in(),
                ProfileChangeSet(
                    current_password="secret",
                    first_name="Alicia",
                    shipping_address=_address(),
                    password=PasswordChange("better", "better"),
                ),
            )

        assert exc_info.value.step == "shipping_address"
        assert exc_info.value.applied == ["name"]
        assert exc_info.value.message == "Invalid postal code"
        # Earlier steps stay applied, later ones never run.
        assert gateway.profiles["tok-alice"].first_name == "Alicia"
        assert "change_password" not in gateway.calls

    def test_transport_failure_propagates(self):
        gateway = FakeAccountGateway()
        gateway.errors["change_password"] = TransportError("timeout")

        with pytest.raises(TransportError):
            UpdateProfileHandler(gateway).handle(
                signed_in(),
                ProfileChangeSet(
                    current_password="secret",
                    password=PasswordChange("better", "better"),
                ),
            )

    def test_password_with_surrounding_spaces(self):
        gateway = FakeAccountGateway()
        gateway.passwords["alice@example.com"] = " secret "

        result = UpdateProfileHandler(gateway).handle(
            signed_in(),
            ProfileChangeSet(
                current_password=" secret ",
                password=PasswordChange("better", "better"),
            ),
        )

        assert result.applied == ["password"]
        assert gateway.passwords["alice@example.com"] == "better"
