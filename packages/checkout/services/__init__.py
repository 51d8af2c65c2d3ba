"""Checkout services."""

from packages.checkout.services.payment_orchestrator import PaymentOrchestrator
from packages.checkout.services.subscription_status_cache import (
    SubscriptionStatusCache,
)

__all__ = ["PaymentOrchestrator", "SubscriptionStatusCache"]
