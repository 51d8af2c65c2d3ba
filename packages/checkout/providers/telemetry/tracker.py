"""
Analytics tracking for the checkout flow.

Events carry no PII: amounts are rounded, order ids truncated and error
messages capped. Sink errors are logged and dropped.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional

from common.core.otel_axiom_exporter import get_logger
from packages.checkout.providers.telemetry.interface import TelemetrySinkInterface

logger = get_logger(__name__)

MAX_ERROR_MESSAGE_LENGTH = 100


class AnalyticsEvent(str, Enum):
    INVEST_BUTTON_CLICKED = "invest_button_clicked"
    PAYMENT_INITIATED = "payment_initiated"
    PAYMENT_COMPLETED = "payment_completed"
    PAYMENT_FAILED = "payment_failed"
    SUBSCRIPTION_STARTED = "subscription_started"


def sanitize_amount(amount: float) -> int:
    """Round to the nearest 10, halves up. 999 -> 1000, 1234 -> 1230."""
    return int(math.floor(amount / 10 + 0.5) * 10)


def truncate_id(value: Optional[str]) -> Optional[str]:
    """Keep the last 4 characters. "order_ABC123XYZ" -> "...3XYZ"."""
    if not value or len(value) <= 4:
        return value
    return f"...{value[-4:]}"


class AnalyticsTracker:
    """Typed helpers over a telemetry sink."""

    def __init__(self, sink: TelemetrySinkInterface):
        self.sink = sink

    def track(self, event: AnalyticsEvent, properties: Dict[str, Any]) -> None:
        try:
            if not self.sink.is_ready():
                logger.debug(f"Telemetry sink not ready, event skipped: {event.value}")
                return
            self.sink.capture(event.value, properties)
        except Exception as e:
            logger.warning(f"Failed to track event {event.value}: {e}")

    def track_invest_button_click(
        self, button_location: str, is_authenticated: bool, plan_id: Optional[str]
    ) -> None:
        properties: Dict[str, Any] = {
            "button_location": button_location,
            "is_authenticated": is_authenticated,
        }
        if plan_id:
            properties["plan_id"] = plan_id
        self.track(AnalyticsEvent.INVEST_BUTTON_CLICKED, properties)

    def track_payment_initiated(self, plan_id: str, amount: int) -> None:
        self.track(
            AnalyticsEvent.PAYMENT_INITIATED,
            {"plan_id": plan_id, "amount": sanitize_amount(amount)},
        )

    def track_payment_completed(self, plan_id: str, gateway_order_id: str) -> None:
        self.track(
            AnalyticsEvent.PAYMENT_COMPLETED,
            {"plan_id": plan_id, "gateway_order_id": truncate_id(gateway_order_id)},
        )

    def track_payment_failed(
        self, plan_id: str, error_type: str, error_message: Optional[str] = None
    ) -> None:
        properties: Dict[str, Any] = {"plan_id": plan_id, "error_type": error_type}
        if error_message:
            properties["error_message"] = error_message[:MAX_ERROR_MESSAGE_LENGTH]
        self.track(AnalyticsEvent.PAYMENT_FAILED, properties)

    def track_subscription_started(self, plan_id: str) -> None:
        self.track(AnalyticsEvent.SUBSCRIPTION_STARTED, {"plan_id": plan_id})
