"""FastAPI surface for the storefront.

The session token travels in an HTTP-only cookie; checkout sessions live
in process memory and are addressed by the key returned on creation.

Run with ``uvicorn --factory storefront.infrastructure.web.app:create_app``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from storefront.application.complete_checkout import CompleteCheckoutHandler
from storefront.application.create_checkout import CreateCheckoutHandler
from storefront.application.initialize_payment_gateway import (
    InitializePaymentGatewayHandler,
)
from storefront.application.initialize_transaction import InitializeTransactionHandler
from storefront.application.login import LoginHandler, LogoutHandler, WhoAmIHandler
from storefront.application.process_transaction import ProcessTransactionHandler
from storefront.application.register_account import (
    ConfirmAccountHandler,
    RegisterAccountHandler,
)
from storefront.application.reset_password import (
    RequestPasswordResetHandler,
    ResetPasswordHandler,
)
from storefront.application.set_billing_details import SetBillingDetailsHandler
from storefront.application.set_delivery_method import (
    ListDeliveryMethodsHandler,
    SetDeliveryMethodHandler,
)
from storefront.application.set_shipping_address import SetShippingAddressHandler
from storefront.application.show_checkout import (
    AbandonCheckoutHandler,
    ShowCheckoutHandler,
)
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_profile import ShowProfileHandler, UpdateProfileHandler
from storefront.domain.exceptions import DomainError, GatewayError, StorefrontException
from storefront.domain.gateway.account_gateway import AccountGateway
from storefront.domain.gateway.checkout_gateway import CheckoutGateway
from storefront.domain.gateway.content_gateway import ContentGateway
from storefront.domain.model.identity import SessionContext
from storefront.domain.repository.checkout_repository import CheckoutRepository
from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings, configure_logging, get_settings
from storefront.infrastructure.persistence.memory_checkout_repository import (
    InMemoryCheckoutRepository,
)
from storefront.infrastructure.web import schemas
from storefront.infrastructure.web.errors import error_response, storefront_exception_handler
from storefront.infrastructure.web.session import CookieSessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class WebServices:
    settings: Settings
    checkout_repo: CheckoutRepository
    checkout_gateway: CheckoutGateway
    account_gateway: AccountGateway
    content_gateway: ContentGateway | None = None


def default_services(settings: Settings | None = None) -> WebServices:
    return WebServices(
        settings=settings or get_settings(),
        checkout_repo=InMemoryCheckoutRepository(),
        checkout_gateway=bootstrap.checkout_gateway(),
        account_gateway=bootstrap.account_gateway(),
        content_gateway=bootstrap.content_gateway(),
    )


# --- Dependencies -------------------------------------------------------------


def get_services(request: Request) -> WebServices:
    return request.app.state.services


def get_session_store(
    request: Request,
    response: Response,
    services: WebServices = Depends(get_services),
) -> CookieSessionStore:
    return CookieSessionStore(request, response, services.settings)


def get_context(
    store: CookieSessionStore = Depends(get_session_store),
    services: WebServices = Depends(get_services),
) -> SessionContext:
    return WhoAmIHandler(services.account_gateway, store).handle()


def run_step(services: WebServices, key: str, call: Callable[[], T]) -> T | JSONResponse:
    """Run a checkout step; remote failures report the step they failed at."""
    try:
        return call()
    except (DomainError, GatewayError) as exc:
        session = services.checkout_repo.get(key)
        return error_response(exc, session.last_error if session is not None else None)


# --- Account ------------------------------------------------------------------

account_router = APIRouter()


@account_router.get("/me")
def me(context: SessionContext = Depends(get_context)) -> dict[str, Any]:
    if context.identity is None:
        return {"user": None}
    return {"user": {"email": context.identity.email}}


@account_router.post("/login")
def login(
    payload: schemas.LoginRequest,
    store: CookieSessionStore = Depends(get_session_store),
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    user = LoginHandler(services.account_gateway, store).handle(
        payload.email, payload.password
    )
    return {"ok": True, "user": {"email": user.email}}


@account_router.post("/logout")
def logout(store: CookieSessionStore = Depends(get_session_store)) -> dict[str, Any]:
    LogoutHandler(store).handle()
    return {"ok": True}


@account_router.post("/register")
def register(
    payload: schemas.RegisterRequest,
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    RegisterAccountHandler(services.account_gateway).handle(
        payload.email, payload.password, payload.first_name, payload.last_name
    )
    return {"ok": True}


@account_router.post("/register/confirm")
def confirm_account(
    payload: schemas.ConfirmAccountRequest,
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    ConfirmAccountHandler(services.account_gateway).handle(payload.email, payload.token)
    return {"ok": True}


@account_router.post("/password-reset")
def request_password_reset(
    payload: schemas.PasswordResetRequest,
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    RequestPasswordResetHandler(services.account_gateway).handle(payload.email)
    return {"ok": True}


@account_router.post("/password-reset/confirm")
def reset_password(
    payload: schemas.PasswordResetConfirmRequest,
    store: CookieSessionStore = Depends(get_session_store),
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    ResetPasswordHandler(services.account_gateway, store).handle(
        payload.email, payload.token, payload.password, payload.confirmation
    )
    return {"ok": True}


@account_router.get("/profile")
def show_profile(
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    return ShowProfileHandler(services.account_gateway).handle(context)


@account_router.post("/profile")
def update_profile(
    payload: schemas.ProfileUpdateRequest,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> dict[str, Any]:
    result = UpdateProfileHandler(services.account_gateway).handle(
        context, payload.to_change_set()
    )
    return {"ok": True, "applied": result.applied}


# --- Checkout -----------------------------------------------------------------

checkout_router = APIRouter()


@checkout_router.get("/product")
def show_product(services: WebServices = Depends(get_services)) -> Any:
    settings = services.settings
    return ShowProductHandler(
        services.checkout_gateway,
        services.content_gateway,
        settings.variant_id,
        settings.quantity,
    ).handle()


@checkout_router.post("")
def create_checkout(services: WebServices = Depends(get_services)) -> Any:
    settings = services.settings
    return CreateCheckoutHandler(
        services.checkout_repo,
        services.checkout_gateway,
        settings.variant_id,
        settings.quantity,
    ).handle()


@checkout_router.get("/{key}")
def show_checkout(key: str, services: WebServices = Depends(get_services)) -> Any:
    return ShowCheckoutHandler(services.checkout_repo).handle(key)


@checkout_router.delete("/{key}")
def abandon_checkout(key: str, services: WebServices = Depends(get_services)) -> dict[str, Any]:
    AbandonCheckoutHandler(services.checkout_repo).handle(key)
    return {"ok": True}


@checkout_router.post("/{key}/address")
def set_shipping_address(
    key: str,
    payload: schemas.AddressRequest,
    services: WebServices = Depends(get_services),
) -> Any:
    handler = SetShippingAddressHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(services, key, lambda: handler.handle(key, payload.to_input()))


@checkout_router.get("/{key}/delivery-methods")
def list_delivery_methods(key: str, services: WebServices = Depends(get_services)) -> Any:
    return ListDeliveryMethodsHandler(
        services.checkout_repo, services.checkout_gateway
    ).handle(key)


@checkout_router.post("/{key}/delivery-method")
def set_delivery_method(
    key: str,
    payload: schemas.DeliveryMethodRequest,
    services: WebServices = Depends(get_services),
) -> Any:
    handler = SetDeliveryMethodHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(services, key, lambda: handler.handle(key, payload.delivery_method_id))


@checkout_router.post("/{key}/billing")
def set_billing_details(
    key: str,
    payload: schemas.BillingRequest,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    handler = SetBillingDetailsHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(
        services, key, lambda: handler.handle(key, context, payload.to_input())
    )


@checkout_router.post("/{key}/payment-gateway")
def initialize_payment_gateway(
    key: str,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    handler = InitializePaymentGatewayHandler(
        services.checkout_repo, services.checkout_gateway
    )
    return run_step(services, key, lambda: handler.handle(key, context))


@checkout_router.post("/{key}/transaction")
def initialize_transaction(
    key: str,
    payload: schemas.TransactionRequest,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    handler = InitializeTransactionHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(
        services, key, lambda: handler.handle(key, context, payload.payment_method)
    )


@checkout_router.post("/{key}/process")
def process_transaction(
    key: str,
    payload: schemas.ProcessRequest,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    handler = ProcessTransactionHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(services, key, lambda: handler.handle(key, context, payload.data))


@checkout_router.post("/{key}/complete")
def complete_checkout(
    key: str,
    context: SessionContext = Depends(get_context),
    services: WebServices = Depends(get_services),
) -> Any:
    handler = CompleteCheckoutHandler(services.checkout_repo, services.checkout_gateway)
    return run_step(services, key, lambda: handler.handle(key, context))


# --- Application --------------------------------------------------------------


def create_app(services: WebServices | None = None) -> FastAPI:
    services = services or default_services()
    configure_logging(services.settings)

    app = FastAPI(title="Storefront API")
    app.state.services = services
    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.include_router(account_router, prefix="/api", tags=["Account"])
    app.include_router(checkout_router, prefix="/api/checkout", tags=["Checkout"])
    return app
