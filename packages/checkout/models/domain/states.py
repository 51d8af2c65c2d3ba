"""
Checkout state machine states.

Idle -> AwaitingOrder -> AwaitingGatewayResult -> Verifying -> Activated
with Failed(kind) and Dismissed as the other terminal states. Failed and
Dismissed may start over from Idle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from packages.billing.models.schemas.payments import CreateOrderResponse


class FailureKind(str, Enum):
    ORDER_CREATION_FAILED = "order_creation_failed"
    PAYMENT_FAILED = "payment_failed"
    VERIFICATION_FAILED = "verification_failed"


class PayButtonState(str, Enum):
    UNAVAILABLE = "unavailable"
    LOADING = "loading"
    PROCESSING = "processing"
    READY = "ready"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class AwaitingOrder:
    plan_id: str


@dataclass(frozen=True)
class AwaitingGatewayResult:
    order: CreateOrderResponse


@dataclass(frozen=True)
class Verifying:
    order: CreateOrderResponse


@dataclass(frozen=True)
class Activated:
    order: CreateOrderResponse
    subscription_id: int
    payment_id: int


@dataclass(frozen=True)
class Failed:
    kind: FailureKind
    message: str = ""


@dataclass(frozen=True)
class Dismissed:
    pass


CheckoutState = Union[
    Idle, AwaitingOrder, AwaitingGatewayResult, Verifying, Activated, Failed, Dismissed
]

IN_FLIGHT_STATES = (AwaitingOrder, AwaitingGatewayResult, Verifying)
