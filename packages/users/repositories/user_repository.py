from typing import Optional
from sqlalchemy import select, func

from common.repositories.base import BaseRepository
from common.providers.caching import cache
from packages.users.models.database.user import UserEntity
from packages.users.models.domain.user import User
from packages.users.cache_keys import user_by_email_key
from common.core.otel_axiom_exporter import trace_span


class UserRepository(BaseRepository[UserEntity, User]):
    def __init__(self, db_session=None):
        super().__init__(UserEntity, User, db_session)

    @trace_span
    @cache(User, ttl=3600, key_generator=user_by_email_key)
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        async with self._get_session() as session:
            result = await session.execute(
                select(UserEntity).where(func.lower(UserEntity.email) == email.lower())
            )
            db_user = result.scalar_one_or_none()
            return self._entity_to_domain(db_user) if db_user else None
