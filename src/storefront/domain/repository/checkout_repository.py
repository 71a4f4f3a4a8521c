"""Abstract repository for CheckoutSession aggregates.

Sessions only need to live as long as the client does: in process memory
for the web app, in a JSON file between CLI invocations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.checkout import CheckoutSession, CheckoutStep


class CheckoutRepository(ABC):

    @abstractmethod
    def next_key(self) -> str:
        """Generate a fresh, unique session key."""

    @abstractmethod
    def get(self, key: str) -> CheckoutSession | None:
        """Return a session by key, or None if not found."""

    @abstractmethod
    def save(self, session: CheckoutSession) -> None:
        """Persist a new or updated session."""

    @abstractmethod
    def discard(self, key: str) -> None:
        """Forget a session. Unknown keys are ignored."""

    def claim(self, key: str, step: CheckoutStep) -> CheckoutSession | None:
        """Start ``step`` on the stored session and return it.

        The running step is saved before this returns, so any other caller
        claiming the same key gets ``StepInProgressError`` until the session
        is saved again with the step ended. Repositories shared between
        threads must override this to check and save under one lock.
        Returns None if the key is unknown.
        """
        session = self.get(key)
        if session is None:
            return None
        session.begin_step(step)
        self.save(session)
        return session
