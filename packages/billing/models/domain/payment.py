"""
Domain models for payments.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from packages.billing.models.domain.enums import PaymentStatus


class Payment(BaseModel):
    """A gateway payment recorded in the ledger."""

    id: int
    user_id: int
    subscription_id: Optional[int] = None
    gateway_payment_id: str
    gateway_order_id: str
    amount: int
    currency: str
    status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentCapture(BaseModel):
    """Values written for a verified payment; keyed on gateway_payment_id."""

    user_id: int
    subscription_id: int
    gateway_payment_id: str
    gateway_order_id: str
    amount: int
    currency: str
    status: PaymentStatus = PaymentStatus.CAPTURED
