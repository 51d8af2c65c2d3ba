"""
Service for reading subscription status.
"""

from datetime import datetime, timezone

from common.core.config import settings
from common.core.otel_axiom_exporter import trace_span
from common.db.context import readonly
from common.providers.caching.decorators import cache
from common.providers.caching.factory import get_cache_provider
from packages.billing.cache_keys import subscription_status_by_user_key
from packages.billing.models.domain.status import SubscriptionStatusView
from packages.billing.repositories.subscription_repository import (
    SubscriptionRepository,
)


class SubscriptionService:
    """Service for subscription status lookups."""

    def __init__(self):
        self.subscription_repo = SubscriptionRepository()

    @trace_span
    @cache(
        model_type=SubscriptionStatusView,
        ttl=settings.subscription_status_cache_ttl,
        key_generator=subscription_status_by_user_key,
    )
    @readonly
    async def get_status(self, user_id: int) -> SubscriptionStatusView:
        """Paid status for a user. Cached; verification invalidates the key."""
        subscription = await self.subscription_repo.get_by_user_id(user_id)
        is_paid = bool(
            subscription and subscription.has_access(datetime.now(timezone.utc))
        )
        return SubscriptionStatusView(
            user_id=user_id, is_paid=is_paid, subscription=subscription
        )

    async def invalidate_status(self, user_id: int) -> None:
        await get_cache_provider().delete(subscription_status_by_user_key(user_id))
