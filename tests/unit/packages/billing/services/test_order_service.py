"""
Unit tests for OrderService.
"""

import pytest

from common.core.exceptions import GatewayUnavailable, PlanNotFound, ValidationError
from packages.billing.services.order_service import OrderService


@pytest.mark.asyncio
class TestOrderService:
    async def test_create_order_uses_plan_price(
        self, test_user, sample_plan, mock_payment_provider
    ):
        """Test the order amount comes from the stored plan."""
        service = OrderService()

        order = await service.create_order(
            user=test_user,
            plan_id=sample_plan.id,
            receipt="opensox_1700000000000",
            notes={"plan": "Opensox Pro"},
        )

        assert order.id == "order_TEST123456"
        mock_payment_provider.create_order.assert_awaited_once()
        kwargs = mock_payment_provider.create_order.await_args.kwargs
        assert kwargs["amount"] == 100
        assert kwargs["currency"] == "INR"
        assert kwargs["receipt"] == "opensox_1700000000000"
        assert kwargs["notes"] == {
            "plan": "Opensox Pro",
            "plan_id": sample_plan.id,
            "user_id": str(test_user.user_id),
        }

    async def test_create_order_strips_plan_id(
        self, test_user, sample_plan, mock_payment_provider
    ):
        service = OrderService()

        await service.create_order(test_user, f"  {sample_plan.id} ", "opensox_1")

        kwargs = mock_payment_provider.create_order.await_args.kwargs
        assert kwargs["notes"]["plan_id"] == sample_plan.id

    @pytest.mark.parametrize("plan_id", ["", "   ", "\t\n"])
    async def test_blank_plan_id_never_reaches_gateway(
        self, test_user, mock_payment_provider, plan_id
    ):
        service = OrderService()

        with pytest.raises(ValidationError):
            await service.create_order(test_user, plan_id, "opensox_1")

        mock_payment_provider.create_order.assert_not_called()

    async def test_unknown_plan(self, test_user, mock_payment_provider):
        service = OrderService()

        with pytest.raises(PlanNotFound) as exc_info:
            await service.create_order(test_user, "plan_missing", "opensox_1")

        assert exc_info.value.plan_id == "plan_missing"
        mock_payment_provider.create_order.assert_not_called()

    async def test_gateway_unavailable_propagates(
        self, test_user, sample_plan, mock_payment_provider
    ):
        mock_payment_provider.create_order.side_effect = GatewayUnavailable("down")
        service = OrderService()

        with pytest.raises(GatewayUnavailable):
            await service.create_order(test_user, sample_plan.id, "opensox_1")
