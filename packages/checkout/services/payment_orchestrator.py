"""
Checkout orchestrator.

Finite-state machine behind one pay control. It sequences order creation,
the gateway checkout surface and verification, and after activation
redirects at once while refreshing the subscription cache in the background.
"""

import asyncio
import time
from collections import deque
from typing import Deque, Optional
from urllib.parse import quote

from common.core.exceptions import CacheRefreshTimeout
from common.core.otel_axiom_exporter import trace_span, get_logger
from common.core.race import first_settled, spawn_background
from packages.checkout.clients.payments_client import PaymentsClient
from packages.checkout.models.domain.checkout import (
    CheckoutOptions,
    CheckoutPrefill,
    GatewayFailure,
    GatewaySuccess,
)
from packages.checkout.models.domain.config import CheckoutConfig
from packages.checkout.models.domain.identity import IdentitySession, IdentityStatus
from packages.checkout.models.domain.states import (
    IN_FLIGHT_STATES,
    Activated,
    AwaitingGatewayResult,
    AwaitingOrder,
    CheckoutState,
    Dismissed,
    Failed,
    FailureKind,
    Idle,
    PayButtonState,
    Verifying,
)
from packages.checkout.providers.gateway.bridge import GatewayClientBridge
from packages.checkout.providers.gateway.interface import CheckoutSurfaceInterface
from packages.checkout.providers.identity.interface import IdentityProviderInterface
from packages.checkout.providers.navigation.interface import (
    NavigatorInterface,
    NotifierInterface,
)
from packages.checkout.providers.telemetry.tracker import AnalyticsTracker
from packages.checkout.services.subscription_status_cache import (
    SubscriptionStatusCache,
)

logger = get_logger(__name__)

UNAVAILABLE_MESSAGE = "Payment is currently unavailable. Please contact support."
PAYMENT_FAILED_MESSAGE = "Payment failed. Please try again."
VERIFICATION_FAILED_MESSAGE = "Payment verification failed. Please contact support."

# Transitions kept for inspection; older entries are dropped
HISTORY_LIMIT = 50

BUTTON_LABELS = {
    PayButtonState.UNAVAILABLE: "Unavailable",
    PayButtonState.LOADING: "Loading...",
    PayButtonState.PROCESSING: "Processing...",
}


def _error_message(error: Exception) -> str:
    return str(error) or type(error).__name__


class PaymentOrchestrator:
    """
    One checkout attempt at a time for a single plan.

    Usage:
        orchestrator = PaymentOrchestrator(plan_id, config=CheckoutConfig.from_settings(), ...)
        await orchestrator.trigger()  # outcome arrives via the surface callbacks
    """

    def __init__(
        self,
        plan_id: str,
        config: CheckoutConfig,
        identity_provider: IdentityProviderInterface,
        payments_client: PaymentsClient,
        surface: CheckoutSurfaceInterface,
        status_cache: SubscriptionStatusCache,
        navigator: NavigatorInterface,
        notifier: NotifierInterface,
        tracker: AnalyticsTracker,
        plan_name: Optional[str] = None,
        description: Optional[str] = None,
        button_text: Optional[str] = None,
        button_location: str = "payment_flow",
        callback_url: Optional[str] = None,
    ):
        self.plan_id = plan_id or ""
        self.config = config
        self.identity_provider = identity_provider
        self.payments_client = payments_client
        self.status_cache = status_cache
        self.navigator = navigator
        self.notifier = notifier
        self.tracker = tracker
        self.plan_name = plan_name or config.display_name
        self.description = description or config.description
        self.button_text = button_text or config.button_text
        self.button_location = button_location
        self.callback_url = callback_url

        self.bridge = GatewayClientBridge(
            surface,
            on_success=self.on_gateway_success,
            on_failure=self.on_gateway_failure,
            on_dismiss=self.on_gateway_dismissed,
        )

        self.state: CheckoutState = Idle()
        self.history: Deque[CheckoutState] = deque([self.state], maxlen=HISTORY_LIMIT)
        self.refresh_task: Optional[asyncio.Task] = None
        self._identity: Optional[IdentitySession] = None

    # ------------------------------------------------------------------
    # Pay control
    # ------------------------------------------------------------------

    @property
    def plan_id_valid(self) -> bool:
        return bool(self.plan_id.strip())

    @property
    def in_flight(self) -> bool:
        return isinstance(self.state, IN_FLIGHT_STATES)

    def button_state(self, identity: Optional[IdentitySession] = None) -> PayButtonState:
        if not self.plan_id_valid or not self.config.gateway_available:
            return PayButtonState.UNAVAILABLE
        if identity is not None and identity.status == IdentityStatus.LOADING:
            return PayButtonState.LOADING
        if self.in_flight:
            return PayButtonState.PROCESSING
        return PayButtonState.READY

    def button_label(self, identity: Optional[IdentitySession] = None) -> str:
        state = self.button_state(identity)
        return BUTTON_LABELS.get(state, self.button_text)

    def is_disabled(self, identity: Optional[IdentitySession] = None) -> bool:
        return self.button_state(identity) != PayButtonState.READY

    def login_redirect_url(self) -> str:
        target = self.callback_url or self.config.fallback_path
        return f"{self.config.login_path}?callbackUrl={quote(target, safe='')}"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _transition(self, new_state: CheckoutState) -> None:
        logger.info(
            f"Checkout {type(self.state).__name__} -> {type(new_state).__name__}",
            extra={"plan_id": self.plan_id, "checkout_state": type(new_state).__name__},
        )
        self.state = new_state
        self.history.append(new_state)

    @trace_span
    async def trigger(self) -> None:
        """User pressed the pay control."""
        if self.in_flight:
            logger.debug("Checkout already in progress, ignoring trigger")
            return

        identity = await self.identity_provider.get_session()
        self.tracker.track_invest_button_click(
            self.button_location, identity.is_authenticated, self.plan_id
        )

        # Another trigger may have started while the session resolved
        if self.in_flight:
            return

        if not self.plan_id_valid or not self.config.gateway_available:
            if not self.config.gateway_available:
                logger.error("Gateway public key is not configured")
            self.notifier.alert(UNAVAILABLE_MESSAGE)
            return

        if identity.status == IdentityStatus.LOADING:
            return

        if not identity.is_authenticated:
            self.navigator.push(self.login_redirect_url())
            return

        self._identity = identity
        self._transition(AwaitingOrder(plan_id=self.plan_id))

        try:
            order = await self.payments_client.create_order(
                identity,
                plan_id=self.plan_id,
                receipt=f"{self.config.receipt_prefix}_{int(time.time() * 1000)}",
                notes={"plan": self.plan_name},
            )
        except Exception as e:
            self._fail_order_creation(e)
            return

        self._transition(AwaitingGatewayResult(order=order))
        self.tracker.track_payment_initiated(self.plan_id, order.amount)

        options = CheckoutOptions(
            key=self.config.gateway_key_id,
            amount=order.amount,
            currency=order.currency,
            order_id=order.order_id,
            name=self.plan_name,
            description=self.description,
            image=self.config.image_url,
            prefill=CheckoutPrefill(
                name=identity.name or "", email=identity.email or ""
            ),
            notes={"plan": self.plan_name, "plan_id": self.plan_id},
            theme_color=self.config.theme_color,
        )
        try:
            await self.bridge.initiate(options)
        except Exception as e:
            self._fail_order_creation(e)

    def _fail_order_creation(self, error: Exception) -> None:
        logger.warning(f"Failed to create order: {error}")
        self.tracker.track_payment_failed(
            self.plan_id,
            FailureKind.ORDER_CREATION_FAILED.value,
            _error_message(error),
        )
        self._transition(
            Failed(kind=FailureKind.ORDER_CREATION_FAILED, message=str(error))
        )
        self.navigator.push(self.login_redirect_url())

    @trace_span
    async def on_gateway_success(self, result: GatewaySuccess) -> None:
        if not isinstance(self.state, AwaitingGatewayResult):
            logger.warning(
                f"Gateway success in state {type(self.state).__name__}, ignoring"
            )
            return

        order = self.state.order
        self._transition(Verifying(order=order))

        try:
            verification = await self.payments_client.verify_payment(
                self._identity, result, self.plan_id
            )
        except Exception as e:
            logger.error(f"Verification failed: {e}")
            self.tracker.track_payment_failed(
                self.plan_id,
                FailureKind.VERIFICATION_FAILED.value,
                _error_message(e),
            )
            self._transition(
                Failed(kind=FailureKind.VERIFICATION_FAILED, message=str(e))
            )
            self.notifier.alert(VERIFICATION_FAILED_MESSAGE)
            return

        self._transition(
            Activated(
                order=order,
                subscription_id=verification.subscription_id,
                payment_id=verification.payment_id,
            )
        )
        self.tracker.track_payment_completed(self.plan_id, result.gateway_order_id)
        self.tracker.track_subscription_started(self.plan_id)

        self.refresh_task = spawn_background(
            self._refresh_subscription_status(self._identity),
            name="subscription-status-refresh",
        )
        self.navigator.push(self.config.confirmation_path)

    @trace_span
    async def on_gateway_failure(self, failure: GatewayFailure) -> None:
        if not isinstance(self.state, AwaitingGatewayResult):
            logger.warning(
                f"Gateway failure in state {type(self.state).__name__}, ignoring"
            )
            return

        logger.error(f"Payment failed: {failure.description}")
        self.tracker.track_payment_failed(
            self.plan_id, FailureKind.PAYMENT_FAILED.value, failure.description
        )
        self._transition(
            Failed(kind=FailureKind.PAYMENT_FAILED, message=failure.description)
        )
        self.notifier.alert(PAYMENT_FAILED_MESSAGE)

    @trace_span
    async def on_gateway_dismissed(self) -> None:
        if not isinstance(self.state, AwaitingGatewayResult):
            logger.warning(
                f"Gateway dismissal in state {type(self.state).__name__}, ignoring"
            )
            return

        self._transition(Dismissed())
        self._transition(Idle())

    async def _refresh_subscription_status(self, identity: IdentitySession) -> None:
        """Invalidate, then refetch raced against the timeout. Never raises."""
        timeout_ms = self.config.cache_refresh_timeout_ms
        try:
            await self.status_cache.invalidate(identity)
            outcome = await first_settled(
                self.status_cache.refresh(identity), timeout=timeout_ms / 1000
            )
        except Exception as e:
            logger.warning(f"Subscription cache refresh failed (non-fatal): {e}")
            return

        if outcome.timed_out:
            logger.warning(
                f"Subscription cache refresh failed (non-fatal): {CacheRefreshTimeout(timeout_ms)}"
            )
        elif outcome.error is not None:
            logger.warning(
                f"Subscription cache refresh failed (non-fatal): {outcome.error}"
            )
