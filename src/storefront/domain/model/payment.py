"""Payment gateway handshake results.

Both types are opaque to the checkout: the gateway configuration is
handed to the processor's client SDK, and the transaction data carries
whatever the processor needs back (client secret, 3-D Secure action).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Transaction event types reported by the backend.
SUCCESS_EVENTS = frozenset({"CHARGE_SUCCESS", "AUTHORIZATION_SUCCESS"})
ACTION_REQUIRED_EVENTS = frozenset(
    {"CHARGE_ACTION_REQUIRED", "AUTHORIZATION_ACTION_REQUIRED"}
)
FAILURE_EVENTS = frozenset({"CHARGE_FAILURE", "AUTHORIZATION_FAILURE"})


@dataclass(frozen=True)
class GatewayConfig:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransactionResult:
    id: str
    event_type: str | None = None
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.event_type in SUCCESS_EVENTS

    @property
    def action_required(self) -> bool:
        return self.event_type in ACTION_REQUIRED_EVENTS

    @property
    def failed(self) -> bool:
        return self.event_type in FAILURE_EVENTS
