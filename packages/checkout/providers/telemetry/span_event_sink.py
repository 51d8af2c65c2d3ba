"""Telemetry sink that records analytics events as span events and log lines."""

from typing import Any, Dict

from common.core.otel_axiom_exporter import log_span_event
from packages.checkout.providers.telemetry.interface import TelemetrySinkInterface


class SpanEventTelemetrySink(TelemetrySinkInterface):
    def is_ready(self) -> bool:
        return True

    def capture(self, event: str, properties: Dict[str, Any]) -> None:
        log_span_event(f"analytics.{event}", dict(properties))
