from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar, Optional, List, Type, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from common.core.otel_axiom_exporter import trace_span
from common.db.scoped import get_session

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository mapping SQLAlchemy entities to pydantic domain models.

    Sessions:
    - Explicit: pass db_session and the caller owns its lifecycle.
    - Lazy (default): each operation uses get_session(), which joins an
      enclosing transaction() or acquires and releases its own session.

    Example:
        repo = PlanRepository()
        plan = await repo.get("plan_123")
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        db_session: Optional[AsyncSession] = None,
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self._explicit_session = db_session

    @asynccontextmanager
    async def _get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield the explicit session if one was given, else a scoped one."""
        if self._explicit_session is not None:
            yield self._explicit_session
        else:
            async with get_session() as session:
                yield session

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(self, entities: List[EntityType]) -> List[DomainModelType]:
        return [self._entity_to_domain(entity) for entity in entities]

    @trace_span
    async def get(self, id: Any) -> Optional[DomainModelType]:
        async with self._get_session() as session:
            result = await session.execute(
                select(self.entity_class).where(self.entity_class.id == id)
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def count(self) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count()).select_from(self.entity_class)
            )
            return result.scalar_one()

