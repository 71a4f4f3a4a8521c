"""JSON-file-backed implementation of CheckoutRepository."""

from __future__ import annotations

import json
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.checkout import (
    CheckoutLine,
    CheckoutSession,
    CheckoutState,
    CheckoutStep,
    PaymentState,
    Pricing,
    StepFailure,
)
from storefront.domain.model.value_objects import Money, PostalAddress, Quantity
from storefront.domain.repository.checkout_repository import CheckoutRepository


class JsonCheckoutRepository(CheckoutRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CheckoutRepository interface -----------------------------------------

    def next_key(self) -> str:
        return uuid.uuid4().hex

    def get(self, key: str) -> CheckoutSession | None:
        raw = self._load_raw().get(key)
        if raw is None:
            return None
        return self._to_domain(raw)

    def save(self, session: CheckoutSession) -> None:
        sessions = self._load_raw()
        sessions[session.key] = self._to_raw(session)
        self._persist_raw(sessions)

    def discard(self, key: str) -> None:
        sessions = self._load_raw()
        if sessions.pop(key, None) is not None:
            self._persist_raw(sessions)

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_raw(cls, session: CheckoutSession) -> dict:
        return {
            "key": session.key,
            "id": session.id,
            "state": session.state.value,
            "payment_state": session.payment_state.value,
            "email": session.email,
            "shipping_address": cls._address_to_raw(session.shipping_address),
            "billing_address": cls._address_to_raw(session.billing_address),
            "pricing": cls._pricing_to_raw(session.pricing),
            "delivery_method_id": session.delivery_method_id,
            "gateway_id": session.gateway_id,
            "transaction_id": session.transaction_id,
            "order_id": session.order_id,
            "failure": cls._failure_to_raw(session.failure),
            "last_error": cls._failure_to_raw(session.last_error),
            "busy": session.busy,
            "created_at": session.created_at.isoformat(),
            "lines": [
                {
                    "variant_id": line.variant_id,
                    "product_name": line.product_name,
                    "product_description": line.product_description,
                    "quantity": line.quantity.value,
                }
                for line in session.lines
            ],
        }

    @classmethod
    def _to_domain(cls, raw: dict) -> CheckoutSession:
        lines = [
            CheckoutLine(
                variant_id=line["variant_id"],
                product_name=line["product_name"],
                product_description=line.get("product_description", ""),
                quantity=Quantity(line["quantity"]),
            )
            for line in raw["lines"]
        ]
        return CheckoutSession(
            key=raw["key"],
            lines=lines,
            id=raw.get("id"),
            state=CheckoutState(raw["state"]),
            payment_state=PaymentState(raw.get("payment_state", "NONE")),
            email=raw.get("email"),
            shipping_address=cls._address_to_domain(raw.get("shipping_address")),
            billing_address=cls._address_to_domain(raw.get("billing_address")),
            pricing=cls._pricing_to_domain(raw.get("pricing")),
            delivery_method_id=raw.get("delivery_method_id"),
            gateway_id=raw.get("gateway_id"),
            transaction_id=raw.get("transaction_id"),
            order_id=raw.get("order_id"),
            failure=cls._failure_to_domain(raw.get("failure")),
            last_error=cls._failure_to_domain(raw.get("last_error")),
            busy=raw.get("busy", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    @staticmethod
    def _address_to_raw(address: PostalAddress | None) -> dict | None:
        if address is None:
            return None
        return {
            "first_name": address.first_name,
            "last_name": address.last_name,
            "street1": address.street1,
            "street2": address.street2,
            "city": address.city,
            "region": address.region,
            "postal_code": address.postal_code,
            "country": address.country,
        }

    @staticmethod
    def _address_to_domain(raw: dict | None) -> PostalAddress | None:
        if raw is None:
            return None
        return PostalAddress(**raw)

    @staticmethod
    def _pricing_to_raw(pricing: Pricing | None) -> dict | None:
        if pricing is None:
            return None
        return {
            "subtotal_net": str(pricing.subtotal_net.amount),
            "total_net": str(pricing.total_net.amount),
            "total_gross": str(pricing.total_gross.amount),
            "currency": pricing.currency,
        }

    @staticmethod
    def _pricing_to_domain(raw: dict | None) -> Pricing | None:
        if raw is None:
            return None
        currency = raw.get("currency", "USD")
        return Pricing(
            subtotal_net=Money(Decimal(raw["subtotal_net"]), currency),
            total_net=Money(Decimal(raw["total_net"]), currency),
            total_gross=Money(Decimal(raw["total_gross"]), currency),
        )

    @staticmethod
    def _failure_to_raw(failure: StepFailure | None) -> dict | None:
        if failure is None:
            return None
        return {
            "step": failure.step.value,
            "message": failure.message,
            "persistent": failure.persistent,
        }

    @staticmethod
    def _failure_to_domain(raw: dict | None) -> StepFailure | None:
        if raw is None:
            return None
        return StepFailure(
            step=CheckoutStep(raw["step"]),
            message=raw["message"],
            persistent=raw.get("persistent", False),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, sessions: dict[str, dict]) -> None:
        self._file_path.write_text(
            json.dumps(sessions, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
