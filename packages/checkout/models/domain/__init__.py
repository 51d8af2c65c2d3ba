"""Domain models for client-side checkout."""

from packages.checkout.models.domain.config import CheckoutConfig
from packages.checkout.models.domain.identity import IdentitySession, IdentityStatus
from packages.checkout.models.domain.checkout import (
    CheckoutOptions,
    CheckoutPrefill,
    GatewaySuccess,
    GatewayFailure,
)
from packages.checkout.models.domain.states import (
    Activated,
    AwaitingGatewayResult,
    AwaitingOrder,
    CheckoutState,
    Dismissed,
    Failed,
    FailureKind,
    Idle,
    PayButtonState,
    Verifying,
)

__all__ = [
    "CheckoutConfig",
    "IdentitySession",
    "IdentityStatus",
    "CheckoutOptions",
    "CheckoutPrefill",
    "GatewaySuccess",
    "GatewayFailure",
    "Activated",
    "AwaitingGatewayResult",
    "AwaitingOrder",
    "CheckoutState",
    "Dismissed",
    "Failed",
    "FailureKind",
    "Idle",
    "PayButtonState",
    "Verifying",
]
