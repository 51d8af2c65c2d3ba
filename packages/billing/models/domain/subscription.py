"""
Domain models for subscriptions.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, field_validator

from packages.billing.models.domain.enums import SubscriptionStatus


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Subscription(BaseModel):
    """
    User subscription domain model.

    One current subscription per user; renewals move start_date/end_date
    forward on the same row.
    """

    id: int
    user_id: int
    plan_id: str
    status: SubscriptionStatus

    start_date: datetime
    end_date: datetime
    auto_renew: bool = True

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("start_date", "end_date", "created_at", "updated_at")
    @classmethod
    def validate_timezone(cls, v):
        return as_utc(v)

    def has_access(self, now: Optional[datetime] = None) -> bool:
        """Active and still inside the paid period."""
        now = now or datetime.now(timezone.utc)
        return self.status.has_access() and self.end_date > now


class SubscriptionActivation(BaseModel):
    """Values written by a verified payment; keyed on user_id."""

    user_id: int
    plan_id: str
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    auto_renew: bool = True
