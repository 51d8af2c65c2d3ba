"""
Repository for the payment ledger.
"""

from typing import Optional
from sqlalchemy import select

from common.db.upsert import build_upsert
from common.repositories.base import BaseRepository
from packages.billing.models.database.payment import PaymentEntity
from packages.billing.models.domain.payment import Payment, PaymentCapture
from common.core.otel_axiom_exporter import trace_span


class PaymentRepository(BaseRepository[PaymentEntity, Payment]):
    """Repository for captured gateway payments."""

    def __init__(self, db_session=None):
        super().__init__(PaymentEntity, Payment, db_session)

    @trace_span
    async def get_by_gateway_payment_id(
        self, gateway_payment_id: str
    ) -> Optional[Payment]:
        async with self._get_session() as session:
            result = await session.execute(
                select(PaymentEntity).where(
                    PaymentEntity.gateway_payment_id == gateway_payment_id
                )
            )
            db_payment = result.scalar_one_or_none()
            return self._entity_to_domain(db_payment) if db_payment else None

    @trace_span
    async def upsert_captured(self, capture: PaymentCapture) -> Optional[Payment]:
        """
        Record a captured payment.

        Keyed on gateway_payment_id: a replayed verification for the same
        payment updates the existing row instead of adding a second one.
        The update only applies when the stored row belongs to the same user
        and order.

        Returns:
            The recorded payment, or None if gateway_payment_id is already
            recorded for another user or order
        """
        values = {
            "user_id": capture.user_id,
            "subscription_id": capture.subscription_id,
            "gateway_payment_id": capture.gateway_payment_id,
            "gateway_order_id": capture.gateway_order_id,
            "amount": capture.amount,
            "currency": capture.currency,
            "status": capture.status.value,
        }
        async with self._get_session() as session:
            stmt = build_upsert(
                session,
                PaymentEntity,
                values,
                conflict_columns=["gateway_payment_id"],
                update_columns=["subscription_id", "amount", "currency", "status"],
                match_columns=["user_id", "gateway_order_id"],
            )
            result = await session.execute(stmt)
            payment_id = result.scalar_one_or_none()
            if payment_id is None:
                return None

            refreshed = await session.execute(
                select(PaymentEntity)
                .where(PaymentEntity.id == payment_id)
                .execution_options(populate_existing=True)
            )
            return self._entity_to_domain(refreshed.scalar_one())
