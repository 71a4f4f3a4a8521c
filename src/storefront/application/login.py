"""Application services: Login, Logout and Who-am-I.

The session token is only ever replaced or cleared as a whole.
"""

from __future__ import annotations

import logging

from storefront.application.dto import UserDTO
from storefront.domain.exceptions import (
    DomainError,
    GraphQLError,
    InvalidCredentialsError,
    ValidationError,
)
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.session_store import SessionStore

logger = logging.getLogger(__name__)


class LoginHandler:

    def __init__(self, account_gateway: AccountGateway, session_store: SessionStore) -> None:
        self._account_gateway = account_gateway
        self._session_store = session_store

    def handle(self, email: str, password: str) -> UserDTO:
        if not email or not email.strip() or not password:
            raise ValidationError("Missing email or password")

        try:
            token = self._account_gateway.create_token(email.strip(), password)
        except DomainError as exc:
            logger.info("Login rejected for %s: %s", email.strip(), exc.message)
            raise InvalidCredentialsError() from exc

        self._session_store.set(token)
        return UserDTO(email=email.strip())


class LogoutHandler:

    def __init__(self, session_store: SessionStore) -> None:
        self._session_store = session_store

    def handle(self) -> None:
        self._session_store.clear()


class WhoAmIHandler:
    """Resolve the session context for the current token.

    A stale or rejected token degrades to an anonymous context instead of
    failing the request. An unreachable backend is not a rejection and
    its error propagates.
    """

    def __init__(self, account_gateway: AccountGateway, session_store: SessionStore) -> None:
        self._account_gateway = account_gateway
        self._session_store = session_store

    def handle(self) -> SessionContext:
        token = self._session_store.read()
        if not token:
            return SessionContext.anonymous()

        try:
            identity = self._account_gateway.me(token)
        except GraphQLError as exc:
            logger.warning("Treating session as anonymous: %s", exc)
            return SessionContext.anonymous()

        if identity is None:
            return SessionContext.anonymous()
        return SessionContext(token=token, identity=identity)
