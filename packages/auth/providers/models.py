from typing import Optional
from pydantic import BaseModel, EmailStr


class IdentityClaims(BaseModel):
    """Claims carried by a session token issued by the identity provider"""

    sub: str  # Provider's user ID
    email: EmailStr
    name: Optional[str] = None
    auth_method: Optional[str] = None
    exp: Optional[int] = None
    iat: Optional[int] = None
