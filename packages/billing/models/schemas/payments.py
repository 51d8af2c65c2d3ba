"""
API schemas for checkout operations.

Request and response models for the order, verification and status RPCs.
Field names are camelCase on the wire.
"""

from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from packages.billing.models.domain.enums import SubscriptionStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allows population by both original name and alias
    )


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# ============================================================================
# Order Schemas
# ============================================================================


class CreateOrderRequest(CamelModel):
    """Request to create a gateway order for a plan."""

    plan_id: str
    receipt: str = Field(..., max_length=40)
    notes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("plan_id", "receipt")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _require_text(v)


class CreateOrderResponse(CamelModel):
    """Gateway order with the authoritative amount."""

    order_id: str
    amount: int = Field(..., description="Amount in minor units, from the plan")
    currency: str


# ============================================================================
# Verification Schemas
# ============================================================================


class VerifyPaymentRequest(CamelModel):
    """Proof returned by the checkout surface."""

    gateway_payment_id: str
    gateway_order_id: str
    gateway_signature: str
    plan_id: str

    @field_validator(
        "gateway_payment_id", "gateway_order_id", "gateway_signature", "plan_id"
    )
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _require_text(v)


class VerifyPaymentResponse(CamelModel):
    ok: bool = True
    subscription_id: int
    payment_id: int


# ============================================================================
# Subscription Status Schemas
# ============================================================================


class SubscriptionResponse(CamelModel):
    id: int
    plan_id: str
    status: SubscriptionStatus
    start_date: datetime
    end_date: datetime
    auto_renew: bool


class SubscriptionStatusResponse(CamelModel):
    """Paid-subscriber check for the current user."""

    is_paid: bool
    subscription: Optional[SubscriptionResponse] = None
