"""Domain model for the cached subscription status view."""

from typing import Optional
from pydantic import BaseModel

from packages.billing.models.domain.subscription import Subscription


class SubscriptionStatusView(BaseModel):
    """Whether a user is a paid subscriber. Re-derivable from the subscriptions table."""

    user_id: int
    is_paid: bool
    subscription: Optional[Subscription] = None
