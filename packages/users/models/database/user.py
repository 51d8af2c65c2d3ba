from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class UserEntity(Base):
    """Identity created by the auth provider on first login."""

    __tablename__ = "users"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=True)
    auth_method = Column(String(50), nullable=False)  # AuthMethod enum value
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
