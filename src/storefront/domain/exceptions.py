"""Storefront exceptions.

Every failure the orchestration can surface is a subclass of
StorefrontException so the CLI and web layers can catch them uniformly
and turn them into user-facing messages.

Three families:

- local rejections (``ValidationError``, ``InvalidTransitionError``,
  ``SignInRequiredError``, ``StepInProgressError``) raised before any
  network call,
- ``DomainError`` for expected, user-actionable failures reported by the
  commerce backend in a mutation's own ``errors`` field,
- ``GatewayError`` for transport and integration failures of the remote
  call itself.
"""

from __future__ import annotations


class StorefrontException(Exception):
    """Base class for all storefront errors."""


class ValidationError(StorefrontException):
    """Input was rejected locally, before reaching the backend."""


class EntityNotFoundError(StorefrontException):
    """A requested entity does not exist."""


class InvalidTransitionError(StorefrontException):
    """A checkout step was invoked out of order."""


class SignInRequiredError(StorefrontException):
    """The step touches personal data and the session is anonymous."""


class AuthExpiredError(StorefrontException):
    """The session token is missing, expired or no longer accepted."""


class StepInProgressError(StorefrontException):
    """Another step is already in flight for this checkout session."""


class DomainError(StorefrontException):
    """The backend rejected a mutation with a user-actionable message."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidCredentialsError(DomainError):
    """The supplied password did not authenticate."""

    def __init__(self) -> None:
        super().__init__("invalid credentials", field="password")


class CheckoutNotCompletedError(DomainError):
    """Completion returned no order even though the call succeeded."""

    def __init__(self) -> None:
        super().__init__("checkout not completed")


class ProfileUpdateError(DomainError):
    """One sub-mutation of a profile update failed.

    ``applied`` lists the sub-mutations that succeeded before the failure.
    They are not rolled back.
    """

    def __init__(self, step: str, message: str, applied: list[str]) -> None:
        super().__init__(message)
        self.step = step
        self.applied = list(applied)


class GatewayError(StorefrontException):
    """Base class for failures of the remote call itself."""


class TransportError(GatewayError):
    """Network failure, timeout, or non-2xx response without a usable body."""


class GraphQLError(GatewayError):
    """The backend returned a top-level ``errors`` list."""

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages) or "GraphQL error")
        self.messages = list(messages)


class DecodeError(GatewayError):
    """The response did not match the expected shape for the operation."""
