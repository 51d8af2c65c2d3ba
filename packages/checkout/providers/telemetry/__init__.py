"""Telemetry providers - best-effort analytics for the checkout flow."""

from packages.checkout.providers.telemetry.interface import TelemetrySinkInterface
from packages.checkout.providers.telemetry.factory import get_telemetry_sink
from packages.checkout.providers.telemetry.tracker import (
    AnalyticsEvent,
    AnalyticsTracker,
    sanitize_amount,
    truncate_id,
)

__all__ = [
    "TelemetrySinkInterface",
    "get_telemetry_sink",
    "AnalyticsEvent",
    "AnalyticsTracker",
    "sanitize_amount",
    "truncate_id",
]
