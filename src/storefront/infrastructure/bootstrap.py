"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.infrastructure.config import get_settings
from storefront.infrastructure.content.payload_client import PayloadContentClient
from storefront.infrastructure.persistence.json_checkout_repository import (
    JsonCheckoutRepository,
)
from storefront.infrastructure.persistence.json_session_store import JsonSessionStore
from storefront.infrastructure.saleor.account_gateway import SaleorAccountGateway
from storefront.infrastructure.saleor.checkout_gateway import SaleorCheckoutGateway
from storefront.infrastructure.saleor.graphql_client import GraphQLClient


@lru_cache
def graphql_client() -> GraphQLClient:
    settings = get_settings()
    return GraphQLClient(settings.saleor_api_url, timeout=settings.http_timeout)


def checkout_gateway() -> SaleorCheckoutGateway:
    settings = get_settings()
    return SaleorCheckoutGateway(
        graphql_client(), settings.channel, settings.payment_app_id
    )


def account_gateway() -> SaleorAccountGateway:
    settings = get_settings()
    return SaleorAccountGateway(
        graphql_client(), settings.channel, settings.account_redirect_url
    )


def content_gateway() -> PayloadContentClient | None:
    settings = get_settings()
    if not settings.content_api_url:
        return None
    return PayloadContentClient(
        settings.content_api_url,
        settings.checkout_image_slug,
        timeout=settings.http_timeout,
    )


# --- CLI state ----------------------------------------------------------------


def checkout_repository() -> JsonCheckoutRepository:
    return JsonCheckoutRepository(get_settings().data_dir / "checkouts.json")


def session_store() -> JsonSessionStore:
    return JsonSessionStore(get_settings().data_dir / "session.json")
