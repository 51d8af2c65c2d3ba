"""
Repository for subscription management.
"""

from typing import Optional
from sqlalchemy import select

from common.db.upsert import build_upsert
from common.repositories.base import BaseRepository
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.domain.subscription import (
    Subscription,
    SubscriptionActivation,
)
from common.core.otel_axiom_exporter import trace_span


class SubscriptionRepository(BaseRepository[SubscriptionEntity, Subscription]):
    """Repository for managing user subscriptions."""

    def __init__(self, db_session=None):
        super().__init__(SubscriptionEntity, Subscription, db_session)

    @trace_span
    async def get_by_user_id(self, user_id: int) -> Optional[Subscription]:
        """Get the current subscription for a user."""
        async with self._get_session() as session:
            result = await session.execute(
                select(SubscriptionEntity).where(SubscriptionEntity.user_id == user_id)
            )
            db_subscription = result.scalar_one_or_none()
            return self._entity_to_domain(db_subscription) if db_subscription else None

    @trace_span
    async def upsert_active(self, activation: SubscriptionActivation) -> Subscription:
        """
        Insert or renew the user's subscription row.

        Keyed on user_id, so repeated activations for the same user converge
        on a single row carrying the latest plan and period.
        """
        values = {
            "user_id": activation.user_id,
            "plan_id": activation.plan_id,
            "status": activation.status.value,
            "start_date": activation.start_date,
            "end_date": activation.end_date,
            "auto_renew": activation.auto_renew,
        }
        async with self._get_session() as session:
            stmt = build_upsert(
                session,
                SubscriptionEntity,
                values,
                conflict_columns=["user_id"],
                update_columns=["plan_id", "status", "start_date", "end_date", "auto_renew"],
            )
            result = await session.execute(stmt)
            subscription_id = result.scalar_one()

            # Bypass the identity map so the renewed columns are re-read
            refreshed = await session.execute(
                select(SubscriptionEntity)
                .where(SubscriptionEntity.id == subscription_id)
                .execution_options(populate_existing=True)
            )
            return self._entity_to_domain(refreshed.scalar_one())
