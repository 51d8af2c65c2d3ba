"""
Database entity for payments.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class PaymentEntity(Base):
    """
    Captured gateway payment.

    gateway_payment_id is the idempotency key: replayed verifications update
    the existing row.
    """

    __tablename__ = "payments"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subscription_id = Column(
        BigIntegerType,
        ForeignKey("subscriptions.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    gateway_payment_id = Column(String(64), nullable=False, unique=True, index=True)
    gateway_order_id = Column(String(64), nullable=False, index=True)

    amount = Column(Integer, nullable=False)  # minor units
    currency = Column(String(3), nullable=False)
    status = Column(String(20), nullable=False)  # created, captured, failed

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
