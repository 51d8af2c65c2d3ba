from typing import Optional
from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """User context passed through authentication dependencies"""

    user_id: int
    email: str
    full_name: Optional[str] = None
    auth_method: str

    class Config:
        from_attributes = True
