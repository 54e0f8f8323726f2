"""Observability - OpenTelemetry tracing for the Flow endpoint."""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from src.config.settings import Settings
from src.utils.logger import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "flow-booking-endpoint"

# Matched against the request URL; the liveness route is not worth a span
EXCLUDED_URLS = "/health"


def setup_tracing(settings: Settings) -> TracerProvider | None:
    """Install a global tracer provider exporting over OTLP/HTTP.

    Args:
        settings: Application settings.

    Returns:
        The installed provider, to be shut down on exit, or None when
        tracing is disabled.
    """
    if not settings.enable_tracing:
        logger.info("tracing_disabled")
        return None

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": SERVICE_NAME,
                "deployment.environment": settings.app_env,
            }
        )
    )
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint))
    )
    trace.set_tracer_provider(provider)

    logger.info("tracing_configured", otlp_endpoint=settings.otlp_endpoint)
    return provider


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush pending spans and stop the exporter."""
    if provider is None:
        return
    provider.shutdown()
    logger.info("tracing_shutdown")


def instrument_fastapi(app: FastAPI, settings: Settings) -> None:
    """Create a server span per request, except for the liveness route."""
    if not settings.enable_tracing:
        return
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


def get_current_trace_id() -> str | None:
    """Get the current trace ID as 32 hex chars, or None outside a recorded span."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return trace.format_trace_id(span_context.trace_id)
