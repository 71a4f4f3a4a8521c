"""Tests for the in-process checkout repository used by the web app."""

import pytest

from storefront.domain.exceptions import InvalidTransitionError, StepInProgressError
from storefront.domain.model.checkout import (
    CheckoutLine,
    CheckoutSession,
    CheckoutState,
    CheckoutStep,
)
from storefront.domain.model.value_objects import Quantity
from storefront.infrastructure.persistence.memory_checkout_repository import (
    InMemoryCheckoutRepository,
)
from tests.fakes import VARIANT_ID, make_pricing


def _setup():
    repo = InMemoryCheckoutRepository()
    session = CheckoutSession(
        key=repo.next_key(),
        lines=[CheckoutLine(VARIANT_ID, "Juice", "Freshly squeezed.", Quantity(1))],
    )
    session.record_created("Q2hlY2tvdXQ6MQ==", make_pricing("49.99", "49.99", "49.99"))
    repo.save(session)
    return repo, session.key


class TestInMemoryCheckoutRepository:

    def test_loaded_sessions_are_copies(self):
        repo, key = _setup()

        repo.get(key).state = CheckoutState.FAILED

        assert repo.get(key).state == CheckoutState.CREATED

    def test_claim_is_stored(self):
        repo, key = _setup()

        claimed = repo.claim(key, CheckoutStep.SHIPPING_ADDRESS)

        assert claimed.busy
        assert repo.get(key).busy

    def test_second_claim_refused(self):
        repo, key = _setup()
        repo.claim(key, CheckoutStep.SHIPPING_ADDRESS)

        with pytest.raises(StepInProgressError):
            repo.claim(key, CheckoutStep.SHIPPING_ADDRESS)

    def test_saving_ended_step_releases(self):
        repo, key = _setup()
        claimed = repo.claim(key, CheckoutStep.SHIPPING_ADDRESS)
        claimed.end_step()
        repo.save(claimed)

        assert repo.claim(key, CheckoutStep.SHIPPING_ADDRESS).busy

    def test_claim_out_of_order_leaves_session_free(self):
        repo, key = _setup()

        with pytest.raises(InvalidTransitionError):
            repo.claim(key, CheckoutStep.COMPLETE)

        assert not repo.get(key).busy

    def test_claim_unknown_key(self):
        repo, _ = _setup()
        assert repo.claim("nope", CheckoutStep.SHIPPING_ADDRESS) is None
