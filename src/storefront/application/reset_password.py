"""Application services: password reset request and confirmation."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.model.profile import PasswordChange
from storefront.domain.repository.session_store import SessionStore


class RequestPasswordResetHandler:

    def __init__(self, account_gateway: AccountGateway) -> None:
        self._account_gateway = account_gateway

    def handle(self, email: str) -> None:
        if not email or not email.strip():
            raise ValidationError("Email is required")
        self._account_gateway.request_password_reset(email.strip())


class ResetPasswordHandler:
    """Finish a reset from the emailed link and sign the user in."""

    def __init__(self, account_gateway: AccountGateway, session_store: SessionStore) -> None:
        self._account_gateway = account_gateway
        self._session_store = session_store

    def handle(self, email: str, token: str, password: str, confirmation: str) -> None:
        if not email or not token:
            raise ValidationError("Invalid recovery link")
        change = PasswordChange(password, confirmation)

        new_token = self._account_gateway.set_password(
            email.strip(), token, change.new_password
        )
        self._session_store.set(new_token)
