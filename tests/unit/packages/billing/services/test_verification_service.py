"""
Unit tests for VerificationService.

Runs against the test database; only the gateway is mocked.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import AsyncMock
from sqlalchemy import select, func

from common.core.exceptions import (
    GatewayUnavailable,
    PersistenceError,
    PlanNotFound,
    VerificationFailed,
)
from common.providers.caching.factory import get_cache_provider
from packages.billing.cache_keys import subscription_status_by_user_key
from packages.billing.models.database.payment import PaymentEntity
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.models.domain.enums import PaymentStatus, SubscriptionStatus
from packages.billing.models.domain.order import PaymentProof
from packages.billing.repositories.payment_repository import PaymentRepository
from packages.billing.repositories.subscription_repository import (
    SubscriptionRepository,
)
from packages.billing.services.order_service import OrderService
from packages.billing.services.verification_service import VerificationService


async def count_rows(test_db, entity_class) -> int:
    result = await test_db.execute(select(func.count()).select_from(entity_class))
    return result.scalar_one()


@pytest.fixture
def make_proof(sign_checkout):
    def _make(order_id="order_TEST123456", payment_id="pay_TEST000001", signature=None):
        return PaymentProof(
            gateway_order_id=order_id,
            gateway_payment_id=payment_id,
            gateway_signature=signature or sign_checkout(order_id, payment_id),
        )

    return _make


@pytest.fixture
def paid_proof(make_proof, register_order, test_user):
    """Proof for an order the gateway holds for the given plan and user."""

    def _make(plan, payment_id="pay_TEST000001", order_id="order_TEST123456", user_id=None):
        register_order(user_id or test_user.user_id, plan, order_id=order_id)
        return make_proof(order_id=order_id, payment_id=payment_id)

    return _make


@pytest.mark.asyncio
class TestVerificationService:
    async def test_verify_activates_subscription_and_records_payment(
        self, test_db, test_user, sample_plan, paid_proof
    ):
        service = VerificationService()

        result = await service.verify(
            test_user.user_id, paid_proof(sample_plan), sample_plan.id
        )

        subscription = await SubscriptionRepository().get_by_user_id(test_user.user_id)
        assert subscription.id == result.subscription_id
        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.plan_id == sample_plan.id
        period = subscription.end_date - subscription.start_date
        assert period == timedelta(days=365)

        payment = await PaymentRepository().get_by_gateway_payment_id("pay_TEST000001")
        assert payment.id == result.payment_id
        assert payment.status == PaymentStatus.CAPTURED
        assert payment.amount == 100
        assert payment.currency == "INR"
        assert payment.subscription_id == subscription.id
        assert payment.gateway_order_id == "order_TEST123456"

    async def test_order_created_then_verified(
        self, test_user, monthly_plan, make_proof
    ):
        order = await OrderService().create_order(test_user, monthly_plan.id, "opensox_1")

        await VerificationService().verify(
            test_user.user_id, make_proof(order_id=order.id), monthly_plan.id
        )

        subscription = await SubscriptionRepository().get_by_user_id(test_user.user_id)
        payment = await PaymentRepository().get_by_gateway_payment_id("pay_TEST000001")
        assert subscription.plan_id == monthly_plan.id
        assert payment.amount == 49900

    async def test_tampered_signature_writes_nothing(
        self, test_db, test_user, sample_plan, make_proof, register_order, sign_checkout
    ):
        register_order(test_user.user_id, sample_plan)
        service = VerificationService()
        proof = make_proof(signature=sign_checkout("order_OTHER", "pay_TEST000001"))

        with pytest.raises(VerificationFailed):
            await service.verify(test_user.user_id, proof, sample_plan.id)

        assert await count_rows(test_db, SubscriptionEntity) == 0
        assert await count_rows(test_db, PaymentEntity) == 0

    async def test_tampered_signature_leaves_existing_rows_unchanged(
        self, test_db, test_user, sample_subscription, make_proof
    ):
        service = VerificationService()
        before = await SubscriptionRepository().get_by_user_id(test_user.user_id)

        with pytest.raises(VerificationFailed):
            await service.verify(
                test_user.user_id, make_proof(signature="0" * 64), sample_subscription.plan_id
            )

        after = await SubscriptionRepository().get_by_user_id(test_user.user_id)
        assert after.end_date == before.end_date
        assert await count_rows(test_db, PaymentEntity) == 0

    async def test_other_users_proof_is_rejected(
        self, test_db, test_user, other_user_entity, sample_plan, paid_proof
    ):
        service = VerificationService()
        proof = paid_proof(sample_plan)
        first = await service.verify(test_user.user_id, proof, sample_plan.id)

        with pytest.raises(VerificationFailed):
            await service.verify(other_user_entity.id, proof, sample_plan.id)

        assert await count_rows(test_db, SubscriptionEntity) == 1
        assert await SubscriptionRepository().get_by_user_id(other_user_entity.id) is None
        payment = await PaymentRepository().get_by_gateway_payment_id("pay_TEST000001")
        assert payment.user_id == test_user.user_id
        assert payment.subscription_id == first.subscription_id

    async def test_payment_recorded_for_another_user_rolls_back(
        self, test_db, test_user, other_user_entity, sample_plan, paid_proof
    ):
        """Test a payment id already owned elsewhere leaves no subscription behind."""
        service = VerificationService()
        await service.verify(
            test_user.user_id, paid_proof(sample_plan, order_id="order_A"), sample_plan.id
        )
        # Same payment id, presented with an order the other user owns
        proof = paid_proof(sample_plan, order_id="order_B", user_id=other_user_entity.id)

        with pytest.raises(VerificationFailed):
            await service.verify(other_user_entity.id, proof, sample_plan.id)

        assert await SubscriptionRepository().get_by_user_id(other_user_entity.id) is None
        assert await count_rows(test_db, PaymentEntity) == 1
        payment = await PaymentRepository().get_by_gateway_payment_id("pay_TEST000001")
        assert payment.user_id == test_user.user_id
        assert payment.gateway_order_id == "order_A"

    async def test_plan_swap_is_rejected(
        self, test_db, test_user, sample_plan, monthly_plan, make_proof
    ):
        order = await OrderService().create_order(test_user, monthly_plan.id, "opensox_1")

        with pytest.raises(VerificationFailed):
            await VerificationService().verify(
                test_user.user_id, make_proof(order_id=order.id), sample_plan.id
            )

        assert await count_rows(test_db, SubscriptionEntity) == 0
        assert await count_rows(test_db, PaymentEntity) == 0

    @pytest.mark.parametrize(
        "field,value",
        [("amount", 1), ("currency", "USD"), ("plan_id", "plan_other")],
    )
    async def test_order_not_matching_plan_is_rejected(
        self, test_db, test_user, sample_plan, make_proof, register_order, field, value
    ):
        overrides = {field: value}
        if field == "plan_id":
            overrides = {"notes": {"plan_id": value, "user_id": str(test_user.user_id)}}
        register_order(test_user.user_id, sample_plan, **overrides)

        with pytest.raises(VerificationFailed):
            await VerificationService().verify(
                test_user.user_id, make_proof(), sample_plan.id
            )

        assert await count_rows(test_db, SubscriptionEntity) == 0

    async def test_unknown_order_is_rejected(
        self, test_db, test_user, sample_plan, make_proof
    ):
        with pytest.raises(VerificationFailed):
            await VerificationService().verify(
                test_user.user_id, make_proof(), sample_plan.id
            )

        assert await count_rows(test_db, PaymentEntity) == 0

    async def test_two_verifications_same_user_one_subscription(
        self, test_db, test_user, sample_plan, paid_proof
    ):
        service = VerificationService()

        first = await service.verify(
            test_user.user_id, paid_proof(sample_plan, payment_id="pay_1"), sample_plan.id
        )
        second = await service.verify(
            test_user.user_id, paid_proof(sample_plan, payment_id="pay_2"), sample_plan.id
        )

        assert first.subscription_id == second.subscription_id
        assert await count_rows(test_db, SubscriptionEntity) == 1
        assert await count_rows(test_db, PaymentEntity) == 2

    async def test_replayed_payment_id_one_payment(
        self, test_db, test_user, sample_plan, paid_proof
    ):
        service = VerificationService()
        proof = paid_proof(sample_plan)

        first = await service.verify(test_user.user_id, proof, sample_plan.id)
        second = await service.verify(test_user.user_id, proof, sample_plan.id)

        assert first.payment_id == second.payment_id
        assert await count_rows(test_db, PaymentEntity) == 1

    async def test_unknown_plan_writes_nothing(self, test_db, test_user, make_proof):
        service = VerificationService()

        with pytest.raises(PlanNotFound):
            await service.verify(test_user.user_id, make_proof(), "plan_missing")

        assert await count_rows(test_db, SubscriptionEntity) == 0

    async def test_persistence_failure_rolls_back_subscription(
        self, test_db, test_user, sample_plan, paid_proof
    ):
        """Test a failed payment write leaves no subscription behind."""
        payment_repo = PaymentRepository()
        payment_repo.upsert_captured = AsyncMock(side_effect=RuntimeError("disk full"))
        service = VerificationService(payment_repo=payment_repo)

        with pytest.raises(PersistenceError):
            await service.verify(test_user.user_id, paid_proof(sample_plan), sample_plan.id)

        assert await count_rows(test_db, SubscriptionEntity) == 0
        assert await count_rows(test_db, PaymentEntity) == 0

    async def test_unconfigured_gateway(
        self, test_user, sample_plan, make_proof, mock_payment_provider
    ):
        mock_payment_provider.verify_payment_signature.side_effect = GatewayUnavailable(
            "Payment gateway is not configured"
        )
        service = VerificationService()

        with pytest.raises(GatewayUnavailable):
            await service.verify(test_user.user_id, make_proof(), sample_plan.id)

    async def test_verify_invalidates_status_cache(
        self, test_user, sample_plan, paid_proof
    ):
        key = subscription_status_by_user_key(test_user.user_id)
        cache = get_cache_provider()
        await cache.set(key, {"user_id": test_user.user_id, "is_paid": False}, 300)

        await VerificationService().verify(
            test_user.user_id, paid_proof(sample_plan), sample_plan.id
        )

        assert await cache.get(key) is None

    async def test_monthly_plan_period(self, test_user, monthly_plan, paid_proof):
        before = datetime.now(timezone.utc)

        await VerificationService().verify(
            test_user.user_id, paid_proof(monthly_plan), monthly_plan.id
        )

        subscription = await SubscriptionRepository().get_by_user_id(test_user.user_id)
        assert subscription.end_date - subscription.start_date == timedelta(days=30)
        assert subscription.start_date >= before - timedelta(seconds=1)
