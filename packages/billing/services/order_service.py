"""
Service for creating gateway orders.
"""

from typing import Dict, Optional

from common.core.exceptions import PlanNotFound, ValidationError
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.billing.models.domain.order import GatewayOrder
from packages.billing.providers.payment.factory import get_payment_provider
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.repositories.plan_repository import PlanRepository

logger = get_logger(__name__)


class OrderService:
    """Creates one gateway order per checkout attempt, priced from the plan."""

    def __init__(
        self,
        plan_repo: Optional[PlanRepository] = None,
        payment_provider: Optional[PaymentProviderInterface] = None,
    ):
        self.plan_repo = plan_repo or PlanRepository()
        self.payment = payment_provider or get_payment_provider()

    @trace_span
    async def create_order(
        self,
        user: AuthenticatedUser,
        plan_id: str,
        receipt: str,
        notes: Optional[Dict[str, str]] = None,
    ) -> GatewayOrder:
        """
        Create a gateway order for a plan.

        The amount and currency always come from the stored plan; the client
        only names the plan.

        Raises:
            ValidationError: Blank plan id
            PlanNotFound: Unknown plan
            GatewayUnavailable: Gateway refused or could not be reached
        """
        plan_id = (plan_id or "").strip()
        if not plan_id:
            raise ValidationError("Plan id is required")

        plan = await self.plan_repo.get_by_id(plan_id)
        if not plan:
            raise PlanNotFound(plan_id)

        order_notes = {str(k): str(v) for k, v in (notes or {}).items()}
        order_notes["plan_id"] = plan.id
        order_notes["user_id"] = str(user.user_id)

        order = await self.payment.create_order(
            amount=plan.price,
            currency=plan.currency,
            receipt=receipt,
            notes=order_notes,
        )

        logger.info(
            f"Created order {order.id} for user {user.user_id}",
            extra={
                "order_id": order.id,
                "user_id": user.user_id,
                "plan_id": plan.id,
                "amount": order.amount,
            },
        )
        return order
