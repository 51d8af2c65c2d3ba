"""Database models for billing."""

from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.database.payment import PaymentEntity

__all__ = [
    "PlanEntity",
    "SubscriptionEntity",
    "PaymentEntity",
]
