"""
Database entity for subscriptions.
"""

from sqlalchemy import Boolean, Column, String, DateTime, ForeignKey, Index
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class SubscriptionEntity(Base):
    """
    User subscription database entity.

    One row per user: renewals update the row in place, and the payment
    ledger keeps the history.
    """

    __tablename__ = "subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    plan_id = Column(String(64), ForeignKey("plans.id"), nullable=False, index=True)

    status = Column(
        String(20), nullable=False, index=True
    )  # none, active, cancelled, expired

    # Current period
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    auto_renew = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_subscription_status_end", "status", "end_date"),)
