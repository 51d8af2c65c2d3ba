"""
Factory for getting the telemetry sink.
"""

from typing import Optional

from packages.checkout.providers.telemetry.interface import TelemetrySinkInterface
from packages.checkout.providers.telemetry.span_event_sink import (
    SpanEventTelemetrySink,
)

_telemetry_sink: Optional[TelemetrySinkInterface] = None


def get_telemetry_sink() -> TelemetrySinkInterface:
    global _telemetry_sink
    if _telemetry_sink is None:
        _telemetry_sink = SpanEventTelemetrySink()
    return _telemetry_sink
