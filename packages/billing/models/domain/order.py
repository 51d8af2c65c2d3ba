"""
Domain models for gateway orders and checkout verification.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator


class GatewayOrder(BaseModel):
    """Payment intent created at the gateway for one checkout attempt."""

    id: str
    amount: int  # minor units, authoritative
    currency: str
    receipt: Optional[str] = None
    status: Optional[str] = None
    notes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, v: Any) -> Dict[str, str]:
        # Razorpay sends an empty list when an order has no notes
        if not v:
            return {}
        if not isinstance(v, dict):
            raise ValueError("notes must be an object")
        return {str(key): str(value) for key, value in v.items()}


class PaymentProof(BaseModel):
    """Values the checkout surface hands back on success."""

    gateway_payment_id: str
    gateway_order_id: str
    gateway_signature: str


class VerificationResult(BaseModel):
    """Ledger rows written by a successful verification."""

    subscription_id: int
    payment_id: int
