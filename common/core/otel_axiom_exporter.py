from typing import Any, Dict, Optional
import functools
import asyncio
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from common.core.config import settings

# Configure logging at module level
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,
)


# Global flag to ensure initialization only happens once
_initialized = False
axiom_tracer = trace.get_tracer(settings.otel_service_name)
propagator = TraceContextTextMapPropagator()


def _initialize_telemetry():
    """Initialize telemetry once and only once."""
    global _initialized, axiom_tracer

    if _initialized:
        return

    resource = Resource(
        attributes={
            SERVICE_NAME: settings.otel_service_name,
            SERVICE_VERSION: settings.otel_service_version,
        }
    )

    provider = TracerProvider(resource=resource)
    if settings.axiom_token:
        otlp_trace_exporter = OTLPSpanExporter(
            endpoint="https://api.axiom.co/v1/traces",
            headers={
                "Authorization": f"Bearer {settings.axiom_token}",
                "X-Axiom-Dataset": settings.axiom_dataset,
            },
        )
        provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
    else:
        logging.getLogger(__name__).info(
            "Axiom token not configured, spans are recorded but not exported"
        )
    trace.set_tracer_provider(provider)
    axiom_tracer = trace.get_tracer(settings.otel_service_name)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    if not _initialized:
        _initialize_telemetry()
    return logging.getLogger(name)


# Custom decorator for automatic span naming
def trace_span(func):
    """Decorator that automatically creates a span with the function name."""

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        span_name = func.__name__
        if args and hasattr(args[0], "__class__"):
            # If it's a method, include class name
            span_name = f"{args[0].__class__.__name__}.{func.__name__}"

        with axiom_tracer.start_as_current_span(span_name):
            return func(*args, **kwargs)

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        span_name = func.__name__
        if args and hasattr(args[0], "__class__"):
            span_name = f"{args[0].__class__.__name__}.{func.__name__}"

        with axiom_tracer.start_as_current_span(span_name):
            return await func(*args, **kwargs)

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    else:
        return sync_wrapper


def inject_trace_context() -> Dict[str, str]:
    """
    Inject current trace context into headers for propagation.
    Used by outbound HTTP clients so back-end spans join the caller's trace.
    """
    headers: Dict[str, str] = {}
    propagator.inject(headers)
    return headers


def log_span_event(message: str, attributes: Optional[Dict[str, Any]] = None):
    """
    Log a message as an event in the current span.
    This will make the log appear in the trace view in Axiom.
    """
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        current_span.add_event(message, attributes=attributes or {})

    logger = get_logger(__name__)
    logger.info(message, extra=attributes)
