"""
Checkout surface payloads: the options used to open it and the outcomes it reports.
"""

from typing import Dict, Optional
from pydantic import BaseModel, Field


class CheckoutPrefill(BaseModel):
    name: str = ""
    email: str = ""


class CheckoutOptions(BaseModel):
    """Options for one checkout session. amount is the back-end's figure."""

    key: str
    amount: int
    currency: str
    order_id: str
    name: str
    description: str
    image: str
    prefill: CheckoutPrefill = Field(default_factory=CheckoutPrefill)
    notes: Dict[str, str] = Field(default_factory=dict)
    theme_color: str


class GatewaySuccess(BaseModel):
    """Proof delivered on the success channel."""

    gateway_payment_id: str
    gateway_order_id: str
    gateway_signature: str


class GatewayFailure(BaseModel):
    """Failure reported by the gateway (card declined, bank error, ...)."""

    code: Optional[str] = None
    description: str = "Payment failed"
    reason: Optional[str] = None
