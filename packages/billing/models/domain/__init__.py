"""Domain models for billing."""

from packages.billing.models.domain.enums import (
    PlanInterval,
    SubscriptionStatus,
    PaymentStatus,
)
from packages.billing.models.domain.plan import Plan
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionActivation,
)
from packages.billing.models.domain.payment import Payment, PaymentCapture
from packages.billing.models.domain.order import (
    GatewayOrder,
    PaymentProof,
    VerificationResult,
)
from packages.billing.models.domain.status import SubscriptionStatusView

__all__ = [
    # Enums
    "PlanInterval",
    "SubscriptionStatus",
    "PaymentStatus",
    # Plans
    "Plan",
    # Subscription
    "Subscription",
    "SubscriptionActivation",
    # Payments
    "Payment",
    "PaymentCapture",
    # Checkout
    "GatewayOrder",
    "PaymentProof",
    "VerificationResult",
    "SubscriptionStatusView",
]
