"""Application services: account registration and confirmation."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.gateway.account_gateway import AccountGateway


class RegisterAccountHandler:

    def __init__(self, account_gateway: AccountGateway) -> None:
        self._account_gateway = account_gateway

    def handle(self, email: str, password: str, first_name: str, last_name: str) -> None:
        """Register an account; the backend emails a confirmation link.

        The backend does not reveal whether the email was already taken.
        """
        if not all(v and v.strip() for v in (email, password, first_name, last_name)):
            raise ValidationError("Email, password, first and last name are required")
        self._account_gateway.register(
            email.strip(), password, first_name.strip(), last_name.strip()
        )


class ConfirmAccountHandler:

    def __init__(self, account_gateway: AccountGateway) -> None:
        self._account_gateway = account_gateway

    def handle(self, email: str, token: str) -> None:
        if not email or not token:
            raise ValidationError("Invalid confirmation link")
        self._account_gateway.confirm_account(email.strip(), token)
