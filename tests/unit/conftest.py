import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from packages.billing.models.domain.order import GatewayOrder


@pytest.fixture
def gateway_orders():
    """Orders known to the mocked gateway, by id."""
    return {}


@pytest.fixture
def mock_payment_provider(sign_checkout, gateway_orders):
    """Create a mock payment gateway that accepts correctly signed proofs."""

    def create_order(amount, currency, receipt, notes):
        order = GatewayOrder(
            id="order_TEST123456",
            amount=amount,
            currency=currency,
            receipt=receipt,
            status="created",
            notes=notes,
        )
        gateway_orders[order.id] = order
        return order

    provider = AsyncMock()
    provider.create_order = AsyncMock(side_effect=create_order)
    provider.fetch_order = AsyncMock(side_effect=gateway_orders.get)
    provider.verify_payment_signature = MagicMock(
        side_effect=lambda proof: proof.gateway_signature
        == sign_checkout(proof.gateway_order_id, proof.gateway_payment_id)
    )
    provider.health_check = AsyncMock(return_value=True)
    return provider


@pytest.fixture
def register_order(gateway_orders):
    """Record an order at the mocked gateway as OrderService would create it."""

    def _register(user_id, plan, order_id="order_TEST123456", **overrides):
        values = {
            "id": order_id,
            "amount": plan.price,
            "currency": plan.currency,
            "status": "paid",
            "notes": {"plan": plan.name, "plan_id": plan.id, "user_id": str(user_id)},
        }
        values.update(overrides)
        gateway_orders[order_id] = GatewayOrder(**values)
        return gateway_orders[order_id]

    return _register


@pytest.fixture(autouse=True)
def mock_get_payment_provider(mock_payment_provider):
    """Automatically mock get_payment_provider for all unit tests."""
    with patch(
        "packages.billing.services.order_service.get_payment_provider",
        return_value=mock_payment_provider,
    ), patch(
        "packages.billing.services.verification_service.get_payment_provider",
        return_value=mock_payment_provider,
    ), patch(
        "api.v1.routes.health.get_payment_provider",
        return_value=mock_payment_provider,
    ):
        yield


@pytest.fixture
def mock_span():
    """Create a mock span instance for testing telemetry."""
    span = MagicMock()
    span.__enter__ = MagicMock(return_value=span)
    span.__exit__ = MagicMock(return_value=None)
    span.__aenter__ = AsyncMock(return_value=span)
    span.__aexit__ = AsyncMock(return_value=None)
    return span


@pytest.fixture
def mock_start_span(mock_span):
    """Create a mock start_span function that returns mock_span."""
    with patch(
        "common.core.otel_axiom_exporter.axiom_tracer.start_as_current_span",
        return_value=mock_span,
    ) as mock:
        yield mock
