"""In-process CheckoutRepository used by the web app."""

from __future__ import annotations

import copy
import threading
import uuid

from storefront.domain.model.checkout import CheckoutSession, CheckoutStep
from storefront.domain.repository.checkout_repository import CheckoutRepository


class InMemoryCheckoutRepository(CheckoutRepository):
    """Keeps sessions for the life of the process.

    Sessions are copied in and out so a caller holding a loaded session
    never sees another request's uncommitted changes. The stored copy is
    the one that says whether a step is running.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, CheckoutSession] = {}
        self._lock = threading.RLock()

    def next_key(self) -> str:
        return uuid.uuid4().hex

    def get(self, key: str) -> CheckoutSession | None:
        with self._lock:
            session = self._sessions.get(key)
            return copy.deepcopy(session) if session is not None else None

    def save(self, session: CheckoutSession) -> None:
        with self._lock:
            self._sessions[session.key] = copy.deepcopy(session)

    def discard(self, key: str) -> None:
        with self._lock:
            self._sessions.pop(key, None)

    def claim(self, key: str, step: CheckoutStep) -> CheckoutSession | None:
        with self._lock:
            return super().claim(key, step)
