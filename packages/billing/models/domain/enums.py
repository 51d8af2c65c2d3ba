"""
Billing enums - strongly typed enumerations for plans, subscriptions and payments.
"""

from datetime import timedelta
from enum import Enum


class PlanInterval(str, Enum):
    """Billing interval of a plan."""

    MONTHLY = "monthly"
    YEARLY = "yearly"

    def period(self) -> timedelta:
        """Length of one paid period."""
        periods = {
            PlanInterval.MONTHLY: timedelta(days=30),
            PlanInterval.YEARLY: timedelta(days=365),
        }
        return periods[self]


class SubscriptionStatus(str, Enum):
    """
    Subscription status lifecycle.

    Flow: none -> active -> (cancelled | expired) -> active on renewal
    """

    NONE = "none"  # Placeholder row, never paid
    ACTIVE = "active"  # Paid and within the current period
    CANCELLED = "cancelled"  # User cancelled, no further renewals
    EXPIRED = "expired"  # Period ended without renewal

    def has_access(self) -> bool:
        """Check if this status allows paid access."""
        return self == SubscriptionStatus.ACTIVE


class PaymentStatus(str, Enum):
    """Gateway payment state as recorded in the ledger."""

    CREATED = "created"
    CAPTURED = "captured"
    FAILED = "failed"
