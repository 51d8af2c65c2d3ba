import pytest
from unittest.mock import AsyncMock, MagicMock

from packages.billing.models.schemas.payments import (
    CreateOrderResponse,
    SubscriptionStatusResponse,
    VerifyPaymentResponse,
)
from packages.checkout.clients.payments_client import PaymentsClient
from packages.checkout.models.domain.config import CheckoutConfig
from packages.checkout.models.domain.identity import IdentitySession, IdentityStatus
from packages.checkout.providers.gateway.interface import CheckoutSurfaceInterface
from packages.checkout.providers.identity.static_identity import StaticIdentityProvider
from packages.checkout.providers.navigation.interface import (
    NavigatorInterface,
    NotifierInterface,
)
from packages.checkout.providers.telemetry.interface import TelemetrySinkInterface
from packages.checkout.providers.telemetry.tracker import AnalyticsTracker
from packages.checkout.services.payment_orchestrator import PaymentOrchestrator
from packages.checkout.services.subscription_status_cache import (
    SubscriptionStatusCache,
)

PLAN_ID = "385b8215-d70f-473e-81c9-68a673c0d2fc-test"


class FakeCheckoutSurface(CheckoutSurfaceInterface):
    """Records opened sessions; tests fire the outcome through the handlers."""

    def __init__(self):
        self.opened = []
        self.handlers = None
        self.open_error = None

    async def open(self, options, handlers):
        if self.open_error is not None:
            raise self.open_error
        self.opened.append(options)
        self.handlers = handlers


class RecordingSink(TelemetrySinkInterface):
    def __init__(self):
        self.events = []
        self.ready = True

    def is_ready(self):
        return self.ready

    def capture(self, event, properties):
        self.events.append((event, properties))

    def names(self):
        return [event for event, _ in self.events]


@pytest.fixture
def checkout_config():
    return CheckoutConfig(
        api_base_url="http://test/api/v1",
        gateway_key_id="rzp_test_key",
        cache_refresh_timeout_ms=50,
    )


@pytest.fixture
def authenticated_identity():
    return IdentitySession(
        status=IdentityStatus.AUTHENTICATED,
        subject="test@example.com",
        access_token="session-token",
        name="Test User",
        email="test@example.com",
    )


@pytest.fixture
def identity_provider(authenticated_identity):
    return StaticIdentityProvider(authenticated_identity)


@pytest.fixture
def order():
    return CreateOrderResponse(order_id="order_TEST123456", amount=100, currency="INR")


@pytest.fixture
def mock_payments_client(order):
    client = AsyncMock(spec=PaymentsClient)
    client.create_order = AsyncMock(return_value=order)
    client.verify_payment = AsyncMock(
        return_value=VerifyPaymentResponse(ok=True, subscription_id=1, payment_id=10)
    )
    client.get_subscription_status = AsyncMock(
        return_value=SubscriptionStatusResponse(is_paid=True)
    )
    return client


@pytest.fixture
def status_cache(mock_payments_client):
    return SubscriptionStatusCache(mock_payments_client)


@pytest.fixture
def surface():
    return FakeCheckoutSurface()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def navigator():
    return MagicMock(spec=NavigatorInterface)


@pytest.fixture
def notifier():
    return MagicMock(spec=NotifierInterface)


@pytest.fixture
def make_orchestrator(
    checkout_config,
    identity_provider,
    mock_payments_client,
    surface,
    status_cache,
    navigator,
    notifier,
    sink,
):
    def _make(plan_id=PLAN_ID, config=None, **kwargs):
        return PaymentOrchestrator(
            plan_id=plan_id,
            config=config or checkout_config,
            identity_provider=identity_provider,
            payments_client=mock_payments_client,
            surface=surface,
            status_cache=status_cache,
            navigator=navigator,
            notifier=notifier,
            tracker=AnalyticsTracker(sink),
            **kwargs,
        )

    return _make


@pytest.fixture
def orchestrator(make_orchestrator):
    return make_orchestrator()
