"""Billing repositories."""

from packages.billing.repositories.plan_repository import PlanRepository
from packages.billing.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.billing.repositories.payment_repository import PaymentRepository

__all__ = [
    "PlanRepository",
    "SubscriptionRepository",
    "PaymentRepository",
]
