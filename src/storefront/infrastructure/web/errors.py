"""Maps storefront exceptions to HTTP responses.

The body is always ``{"error": ...}``; checkout step failures add the
failing ``step`` and whether the message must stay on screen
(``persistent``).
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from storefront.application.checkout_step import INTEGRATION_MESSAGE, TRY_AGAIN_MESSAGE
from storefront.domain.exceptions import (
    AuthExpiredError,
    CheckoutNotCompletedError,
    DomainError,
    EntityNotFoundError,
    GatewayError,
    InvalidCredentialsError,
    InvalidTransitionError,
    ProfileUpdateError,
    SignInRequiredError,
    StepInProgressError,
    StorefrontException,
    TransportError,
    ValidationError,
)
from storefront.domain.model.checkout import StepFailure

# First match wins, so subclasses come before their bases.
_STATUS_CODES: list[tuple[type[StorefrontException], int]] = [
    (ValidationError, 400),
    (InvalidCredentialsError, 401),
    (SignInRequiredError, 401),
    (AuthExpiredError, 401),
    (EntityNotFoundError, 404),
    (InvalidTransitionError, 409),
    (StepInProgressError, 409),
    (CheckoutNotCompletedError, 409),
    (DomainError, 400),
    (GatewayError, 502),
]


def status_code_for(exc: StorefrontException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_body(exc: StorefrontException, failure: StepFailure | None = None) -> dict[str, Any]:
    if failure is not None:
        return {
            "error": failure.message,
            "step": failure.step.value,
            "persistent": failure.persistent,
        }
    if isinstance(exc, TransportError):
        return {"error": TRY_AGAIN_MESSAGE}
    if isinstance(exc, GatewayError):
        return {"error": INTEGRATION_MESSAGE}
    if isinstance(exc, ProfileUpdateError):
        return {"error": exc.message, "step": exc.step, "applied": exc.applied}
    return {"error": str(exc)}


def error_response(
    exc: StorefrontException, failure: StepFailure | None = None
) -> JSONResponse:
    return JSONResponse(error_body(exc, failure), status_code=status_code_for(exc))


async def storefront_exception_handler(
    request: Request, exc: StorefrontException
) -> JSONResponse:
    return error_response(exc)
