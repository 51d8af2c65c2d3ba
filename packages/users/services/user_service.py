from typing import Optional

from packages.users.repositories.user_repository import UserRepository
from packages.users.models.domain.user import User
from common.core.otel_axiom_exporter import trace_span


class UserService:
    """Read access to identities. Users are created by the identity provider."""

    def __init__(self):
        self.user_repo = UserRepository()

    @trace_span
    async def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return await self.user_repo.get(user_id)

    @trace_span
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return await self.user_repo.get_by_email(email)
