"""Domain models for billing plans."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from packages.billing.models.domain.enums import PlanInterval


class Plan(BaseModel):
    """Immutable plan reference data. Price is in minor units."""

    id: str
    name: str
    interval: PlanInterval
    price: int = Field(..., ge=0)
    currency: str = "INR"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
