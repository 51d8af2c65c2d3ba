"""Billing services."""

from packages.billing.services.order_service import OrderService
from packages.billing.services.verification_service import VerificationService
from packages.billing.services.subscription_service import SubscriptionService

__all__ = [
    "OrderService",
    "VerificationService",
    "SubscriptionService",
]
