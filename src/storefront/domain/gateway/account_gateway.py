"""Port for the account half of the commerce backend."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.identity import UserIdentity
from storefront.domain.model.profile import Profile
from storefront.domain.model.value_objects import PostalAddress


class AccountGateway(ABC):

    @abstractmethod
    def create_token(self, email: str, password: str) -> str:
        """Authenticate and return a bearer token."""

    @abstractmethod
    def me(self, token: str) -> UserIdentity | None:
        """Return the identity the token belongs to, or None."""

    @abstractmethod
    def get_profile(self, token: str) -> Profile | None:
        """Return the full profile for the token, or None."""

    @abstractmethod
    def update_name(self, token: str, first_name: str | None, last_name: str | None) -> None:
        """Change the account's first and/or last name."""

    @abstractmethod
    def create_address(self, token: str, address: PostalAddress) -> str:
        """Create an address book entry; return its id."""

    @abstractmethod
    def update_address(self, token: str, address_id: str, address: PostalAddress) -> None:
        """Update an existing address book entry in place."""

    @abstractmethod
    def set_default_shipping_address(self, token: str, address_id: str) -> None:
        """Mark an address as the default shipping address."""

    @abstractmethod
    def change_password(self, token: str, old_password: str, new_password: str) -> None:
        """Change the password of the signed-in account."""

    @abstractmethod
    def register(self, email: str, password: str, first_name: str, last_name: str) -> None:
        """Register a new account; a confirmation email follows."""

    @abstractmethod
    def confirm_account(self, email: str, token: str) -> None:
        """Confirm an account with the emailed token."""

    @abstractmethod
    def request_password_reset(self, email: str) -> None:
        """Send a password reset link."""

    @abstractmethod
    def set_password(self, email: str, token: str, password: str) -> str:
        """Finish a password reset; return a fresh bearer token."""
