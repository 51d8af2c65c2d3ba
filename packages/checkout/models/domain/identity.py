"""Resolved identity as seen by the client."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class IdentityStatus(str, Enum):
    AUTHENTICATED = "authenticated"
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"


class IdentitySession(BaseModel):
    """
    Snapshot of the user's session.

    subject identifies the user for per-identity caching; access_token is the
    bearer token sent to the back-end.
    """

    status: IdentityStatus
    subject: Optional[str] = None
    access_token: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.status == IdentityStatus.AUTHENTICATED and bool(self.access_token)

    @classmethod
    def loading(cls) -> "IdentitySession":
        return cls(status=IdentityStatus.LOADING)

    @classmethod
    def anonymous(cls) -> "IdentitySession":
        return cls(status=IdentityStatus.UNAUTHENTICATED)
