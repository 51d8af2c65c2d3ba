"""
Database entity for plans.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from common.db.base import Base


class PlanEntity(Base):
    """
    Subscription plan reference data.

    Price is stored in minor units (paise, cents). Never mutated by checkout.
    """

    __tablename__ = "plans"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    interval = Column(String(20), nullable=False)  # monthly, yearly
    price = Column(Integer, nullable=False)  # minor units
    currency = Column(String(3), nullable=False, server_default="INR")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
