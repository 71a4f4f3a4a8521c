"""Session token carried in an HTTP-only cookie."""

from __future__ import annotations

from fastapi import Request, Response

from storefront.domain.repository.session_store import SessionStore
from storefront.infrastructure.config import Settings


class CookieSessionStore(SessionStore):
    """Reads the token from the request and writes changes to the response."""

    def __init__(self, request: Request, response: Response, settings: Settings) -> None:
        self._response = response
        self._settings = settings
        self._token = request.cookies.get(settings.session_cookie_name) or None

    def read(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token
        self._write(token)

    def clear(self) -> None:
        self._token = None
        self._write("", max_age=0)

    def _write(self, value: str, max_age: int | None = None) -> None:
        self._response.set_cookie(
            key=self._settings.session_cookie_name,
            value=value,
            max_age=max_age,
            path="/",
            secure=self._settings.is_production,
            httponly=True,
            samesite="lax",
        )
