"""Error boundary shared by every checkout step.

Each step runs inside ``checkout_step``: it claims the stored session
through the repository, which refuses while another step is in flight
or when the session is in the wrong state. It then records how the step
failed and always persists the session afterwards. Errors are
re-raised so the caller can show them next to the step.

Failure policy:

- PROCESS domain failures end the attempt (FAILED state). Processing
  moves money, so it is never retried automatically.
- Every other failure is recorded on the session and leaves its state
  untouched, ready for the user to try again.
- A transport failure while completing raises a persistent banner: the
  charge may already have gone through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from storefront.domain.exceptions import (
    DomainError,
    EntityNotFoundError,
    GatewayError,
    TransportError,
)
from storefront.domain.model.checkout import CheckoutSession, CheckoutStep
from storefront.domain.repository.checkout_repository import CheckoutRepository

logger = logging.getLogger(__name__)

TERMINAL_STEPS = frozenset({CheckoutStep.PROCESS})

TRY_AGAIN_MESSAGE = "Could not reach the store. Please try again."
INTEGRATION_MESSAGE = "Something went wrong on our side. Please try again later."
VERIFY_ORDER_MESSAGE = (
    "We could not confirm your order. Please check your order status "
    "before retrying payment."
)


def load_session(repo: CheckoutRepository, key: str) -> CheckoutSession:
    session = repo.get(key)
    if session is None:
        raise EntityNotFoundError(f"Checkout session '{key}' not found")
    return session


@contextmanager
def checkout_step(
    repo: CheckoutRepository,
    key: str,
    step: CheckoutStep,
) -> Iterator[CheckoutSession]:
    session = repo.claim(key, step)
    if session is None:
        raise EntityNotFoundError(f"Checkout session '{key}' not found")
    try:
        yield session
    except TransportError as exc:
        logger.warning("Checkout %s: step %s transport failure: %s", session.key, step.value, exc)
        if step == CheckoutStep.COMPLETE:
            session.record_error(step, VERIFY_ORDER_MESSAGE, persistent=True)
        else:
            session.record_error(step, TRY_AGAIN_MESSAGE)
        raise
    except GatewayError as exc:
        logger.error("Checkout %s: step %s integration failure: %s", session.key, step.value, exc)
        session.record_error(step, INTEGRATION_MESSAGE)
        raise
    except DomainError as exc:
        logger.info("Checkout %s: step %s rejected: %s", session.key, step.value, exc.message)
        if step in TERMINAL_STEPS:
            session.fail(step, exc.message)
        else:
            session.record_error(step, exc.message)
        raise
    finally:
        session.end_step()
        repo.save(session)
