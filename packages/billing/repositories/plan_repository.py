"""
Repository for plan reference data.
"""

from typing import Optional

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.billing.models.database.plan import PlanEntity
from packages.billing.models.domain.plan import Plan


class PlanRepository(BaseRepository[PlanEntity, Plan]):
    """Read access to plans. Plans are seeded and never written by checkout."""

    def __init__(self, db_session=None):
        super().__init__(PlanEntity, Plan, db_session)

    @trace_span
    async def get_by_id(self, plan_id: str) -> Optional[Plan]:
        return await self.get(plan_id)
