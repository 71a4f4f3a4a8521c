"""Who is behind a request.

A SessionContext is passed explicitly into every orchestration call
instead of reading ambient cookie state. The token is an opaque bearer
credential; the backend remains the source of truth for who it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import AuthExpiredError, SignInRequiredError


@dataclass(frozen=True)
class UserIdentity:
    email: str


@dataclass(frozen=True)
class SessionContext:
    token: str | None = None
    identity: UserIdentity | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.identity is not None

    def require_identity(self) -> UserIdentity:
        """Return the signed-in user or refuse the step."""
        if self.identity is None or self.token is None:
            raise SignInRequiredError("Sign in required to continue")
        return self.identity

    def require_token(self) -> str:
        if self.token is None:
            raise AuthExpiredError("Unauthorized")
        return self.token

    @staticmethod
    def anonymous() -> SessionContext:
        return SessionContext()
