"""
Service for verifying checkout results and committing the billing ledger.
"""

from datetime import datetime, timezone
from typing import Optional

from common.core.exceptions import (
    PersistenceError,
    PlanNotFound,
    ValidationError,
    VerificationFailed,
)
from common.core.otel_axiom_exporter import trace_span, get_logger, log_span_event
from common.db.scoped import transaction
from common.providers.caching.factory import get_cache_provider
from packages.billing.cache_keys import subscription_status_by_user_key
from packages.billing.models.domain.order import PaymentProof, VerificationResult
from packages.billing.models.domain.payment import PaymentCapture
from packages.billing.models.domain.subscription import SubscriptionActivation
from packages.billing.providers.payment.factory import get_payment_provider
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.repositories.payment_repository import PaymentRepository
from packages.billing.repositories.plan_repository import PlanRepository
from packages.billing.repositories.subscription_repository import (
    SubscriptionRepository,
)

logger = get_logger(__name__)


class VerificationService:
    """
    Authenticates a gateway checkout result and activates the subscription.

    The signature and the gateway's record of the order are checked before
    anything is written. On a match the subscription and the payment are
    upserted in one transaction, keyed on user_id and gateway_payment_id, so
    replays by the same user converge on the same rows.
    """

    def __init__(
        self,
        payment_provider: Optional[PaymentProviderInterface] = None,
        plan_repo: Optional[PlanRepository] = None,
        subscription_repo: Optional[SubscriptionRepository] = None,
        payment_repo: Optional[PaymentRepository] = None,
    ):
        self.payment = payment_provider or get_payment_provider()
        self.plan_repo = plan_repo or PlanRepository()
        self.subscription_repo = subscription_repo or SubscriptionRepository()
        self.payment_repo = payment_repo or PaymentRepository()

    @trace_span
    async def verify(
        self, user_id: int, proof: PaymentProof, plan_id: str
    ) -> VerificationResult:
        """
        Verify a checkout result and commit the ledger.

        The signature only covers the order and payment ids, so the order is
        fetched from the gateway and must belong to this user and this plan,
        at the plan's price.

        Raises:
            ValidationError: Blank plan id
            GatewayUnavailable: Gateway not configured or unreachable
            VerificationFailed: Signature mismatch, or the order does not
                match the caller, the plan or its price
            PlanNotFound: Unknown plan
            PersistenceError: Ledger commit failed; nothing was written
        """
        plan_id = (plan_id or "").strip()
        if not plan_id:
            raise ValidationError("Plan id is required")

        if not self.payment.verify_payment_signature(proof):
            self._reject("signature_mismatch", user_id, proof)
            raise VerificationFailed("Invalid payment signature")

        plan = await self.plan_repo.get_by_id(plan_id)
        if not plan:
            raise PlanNotFound(plan_id)

        order = await self.payment.fetch_order(proof.gateway_order_id)
        if order is None:
            self._reject("unknown_order", user_id, proof)
            raise VerificationFailed("Unknown payment order")
        if order.notes.get("user_id") != str(user_id):
            self._reject("order_owner_mismatch", user_id, proof)
            raise VerificationFailed("Payment order does not belong to this account")
        if (
            order.notes.get("plan_id") != plan.id
            or order.amount != plan.price
            or order.currency.upper() != plan.currency.upper()
        ):
            self._reject("order_plan_mismatch", user_id, proof)
            raise VerificationFailed("Payment order does not match the plan")

        now = datetime.now(timezone.utc)
        try:
            async with transaction():
                subscription = await self.subscription_repo.upsert_active(
                    SubscriptionActivation(
                        user_id=user_id,
                        plan_id=plan.id,
                        start_date=now,
                        end_date=now + plan.interval.period(),
                    )
                )
                payment = await self.payment_repo.upsert_captured(
                    PaymentCapture(
                        user_id=user_id,
                        subscription_id=subscription.id,
                        gateway_payment_id=proof.gateway_payment_id,
                        gateway_order_id=order.id,
                        amount=order.amount,
                        currency=order.currency,
                    )
                )
                if payment is None:
                    # Rolls back the subscription upsert as well
                    self._reject("payment_already_recorded", user_id, proof)
                    raise VerificationFailed("Payment is already recorded elsewhere")
        except VerificationFailed:
            raise
        except Exception as e:
            logger.error(
                f"Failed to commit payment {proof.gateway_payment_id}: {e}",
                extra={"user_id": user_id, "plan_id": plan.id},
            )
            raise PersistenceError("Failed to record payment") from e

        await get_cache_provider().delete(subscription_status_by_user_key(user_id))

        logger.info(
            f"Activated subscription {subscription.id} for user {user_id}",
            extra={
                "subscription_id": subscription.id,
                "payment_id": payment.id,
                "user_id": user_id,
                "plan_id": plan.id,
                "end_date": subscription.end_date.isoformat(),
            },
        )
        return VerificationResult(subscription_id=subscription.id, payment_id=payment.id)

    def _reject(self, reason: str, user_id: int, proof: PaymentProof) -> None:
        """Log a rejected checkout result as a possible tamper attempt."""
        logger.warning(
            f"Payment verification rejected: {reason}",
            extra={
                "reason": reason,
                "user_id": user_id,
                "gateway_order_id": proof.gateway_order_id,
                "gateway_payment_id": proof.gateway_payment_id,
            },
        )
        log_span_event(
            f"payment.{reason}",
            {"user_id": user_id, "gateway_order_id": proof.gateway_order_id},
        )
