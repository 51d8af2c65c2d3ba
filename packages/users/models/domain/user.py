from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator


class AuthMethod(str, Enum):
    """How the identity provider authenticated the user."""

    GOOGLE = "google"
    GITHUB = "github"
    EMAIL = "email"


class User(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    auth_method: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserCreateModel(BaseModel):
    """Model for creating a new user."""

    email: EmailStr
    full_name: Optional[str] = None
    auth_method: str

    @field_validator("auth_method", mode="before")
    @classmethod
    def validate_auth_method(cls, v):
        if isinstance(v, AuthMethod):
            return v.value
        return v
