"""Tests for the JSON-file checkout repository."""

import json

import pytest

from storefront.domain.exceptions import StepInProgressError
from storefront.domain.model.checkout import (
    CheckoutLine,
    CheckoutSession,
    CheckoutState,
    CheckoutStep,
    PaymentState,
    StepFailure,
)
from storefront.domain.model.value_objects import Money, PostalAddress, Quantity
from storefront.infrastructure.persistence.json_checkout_repository import (
    JsonCheckoutRepository,
)
from storefront.infrastructure.persistence.json_session_store import JsonSessionStore
from tests.fakes import VARIANT_ID, make_pricing


def _session(key: str) -> CheckoutSession:
    session = CheckoutSession(
        key=key,
        lines=[CheckoutLine(VARIANT_ID, "Juice", "Freshly squeezed.", Quantity(1))],
    )
    session.record_created("Q2hlY2tvdXQ6MQ==", make_pricing("49.99", "49.99", "49.99"))
    session.apply_shipping_address(
        PostalAddress("Alice", "Smith", "1 Main St", "Springfield", "IL", "62701"),
        make_pricing("49.99", "49.99", "54.24"),
    )
    session.record_error(CheckoutStep.DELIVERY_METHOD, "Try again", persistent=True)
    return session


class TestJsonCheckoutRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "checkouts.json"
        JsonCheckoutRepository(path)
        assert json.loads(path.read_text()) == {}

    def test_save_and_load(self, tmp_path):
        repo = JsonCheckoutRepository(tmp_path / "checkouts.json")
        key = repo.next_key()
        repo.save(_session(key))

        loaded = JsonCheckoutRepository(tmp_path / "checkouts.json").get(key)

        assert loaded.state == CheckoutState.TAX_READY
        assert loaded.payment_state == PaymentState.NONE
        assert loaded.shipping_address.postal_code == "62701"
        assert loaded.pricing.total_gross == Money.of("54.24")
        assert loaded.lines[0].quantity == Quantity(1)
        assert loaded.last_error == StepFailure(
            CheckoutStep.DELIVERY_METHOD, "Try again", persistent=True
        )
        assert not loaded.busy

    def test_running_step_is_visible_to_other_instances(self, tmp_path):
        path = tmp_path / "checkouts.json"
        JsonCheckoutRepository(path).save(_session("k1"))

        claimed = JsonCheckoutRepository(path).claim("k1", CheckoutStep.DELIVERY_METHOD)

        assert claimed.busy
        assert json.loads(path.read_text())["k1"]["busy"] is True
        with pytest.raises(StepInProgressError):
            JsonCheckoutRepository(path).claim("k1", CheckoutStep.DELIVERY_METHOD)

    def test_ended_step_releases_claim(self, tmp_path):
        repo = JsonCheckoutRepository(tmp_path / "checkouts.json")
        repo.save(_session("k1"))
        claimed = repo.claim("k1", CheckoutStep.DELIVERY_METHOD)

        claimed.end_step()
        repo.save(claimed)

        assert repo.claim("k1", CheckoutStep.DELIVERY_METHOD).busy

    def test_claim_unknown_key(self, tmp_path):
        repo = JsonCheckoutRepository(tmp_path / "checkouts.json")
        assert repo.claim("nope", CheckoutStep.SHIPPING_ADDRESS) is None

    def test_amounts_stored_as_strings(self, tmp_path):
        path = tmp_path / "checkouts.json"
        repo = JsonCheckoutRepository(path)
        repo.save(_session("k1"))

        raw = json.loads(path.read_text())

        assert raw["k1"]["pricing"]["total_gross"] == "54.24"

    def test_unknown_key(self, tmp_path):
        assert JsonCheckoutRepository(tmp_path / "checkouts.json").get("nope") is None

    def test_discard(self, tmp_path):
        repo = JsonCheckoutRepository(tmp_path / "checkouts.json")
        repo.save(_session("k1"))
        repo.save(_session("k2"))

        repo.discard("k1")

        assert repo.get("k1") is None
        assert repo.get("k2") is not None


class TestJsonSessionStore:

    def test_set_read_clear(self, tmp_path):
        store = JsonSessionStore(tmp_path / "session.json")
        assert store.read() is None

        store.set("tok")
        assert JsonSessionStore(tmp_path / "session.json").read() == "tok"

        store.clear()
        assert store.read() is None
        store.clear()
