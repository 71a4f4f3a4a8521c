"""Single-purpose client for the commerce backend's GraphQL endpoint.

``call`` posts one query or mutation and returns the decoded ``data``
payload. ``execute`` additionally validates that payload against the
operation's response model, so callers never see a silently missing
field.

Mutation-level ``errors`` (inside ``data``) are left to the caller; only
the top-level ``errors`` list is raised here. There are no retries at
this layer.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, TypeVar

import httpx
import pydantic

from storefront.domain.exceptions import DecodeError, GraphQLError, TransportError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


class GraphQLClient:

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def call(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        try:
            response = self._http.post(
                self._url,
                json={"query": query, "variables": variables or {}},
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Commerce backend unreachable: {exc}") from exc

        try:
            # Amounts stay exact: never round-trip them through float.
            body = json.loads(response.text, parse_float=Decimal)
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise TransportError(
                f"Commerce backend returned HTTP {response.status_code} without a usable body"
            )

        errors = body.get("errors")
        if errors:
            messages = [
                str(e.get("message", e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
            logger.error("Commerce backend GraphQL errors: %s", messages)
            raise GraphQLError(messages)

        if not response.is_success:
            raise TransportError(f"Commerce backend returned HTTP {response.status_code}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise DecodeError("Commerce backend response carries no data")
        return data

    def execute(
        self,
        query: str,
        response_model: type[ModelT],
        variables: dict[str, Any] | None = None,
        auth_token: str | None = None,
    ) -> ModelT:
        data = self.call(query, variables, auth_token)
        try:
            return response_model.model_validate(data)
        except pydantic.ValidationError as exc:
            logger.error(
                "Unexpected %s response shape: %s", response_model.__name__, exc
            )
            raise DecodeError(
                f"Unexpected response shape for {response_model.__name__}"
            ) from exc

    def close(self) -> None:
        self._http.close()
