"""Abstract store for the opaque session token.

The token is replaced wholesale on login and cleared wholesale on
logout; nothing else ever mutates it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SessionStore(ABC):

    @abstractmethod
    def read(self) -> str | None:
        """Return the current token, or None when signed out."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Replace the current token."""

    @abstractmethod
    def clear(self) -> None:
        """Drop the current token."""
