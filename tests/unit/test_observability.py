"""Unit Tests - Tracing helpers and per-request log context."""

import structlog
from opentelemetry.sdk.trace import TracerProvider

from src.config.settings import Settings
from src.services.observability import (
    get_current_trace_id,
    setup_tracing,
    shutdown_tracing,
)
from src.utils.logger import bind_request_context


class TestTracing:
    """Tests for tracer setup and trace id lookup."""

    def test_disabled_tracing_installs_nothing(self) -> None:
        settings = Settings(_env_file=None, enable_tracing=False)

        assert setup_tracing(settings) is None
        shutdown_tracing(None)

    def test_no_trace_id_outside_a_span(self) -> None:
        assert get_current_trace_id() is None

    def test_trace_id_is_32_hex_chars_inside_a_span(self) -> None:
        tracer = TracerProvider().get_tracer(__name__)

        with tracer.start_as_current_span("flow_request") as span:
            trace_id = get_current_trace_id()

        assert trace_id == format(span.get_span_context().trace_id, "032x")
        assert len(trace_id) == 32


class TestRequestContext:
    """Tests for binding log context per request."""

    def teardown_method(self) -> None:
        structlog.contextvars.clear_contextvars()

    def test_none_values_are_left_out(self) -> None:
        bind_request_context(trace_id="abc", flow_token=None)

        assert structlog.contextvars.get_contextvars() == {"trace_id": "abc"}

    def test_previous_request_context_is_replaced(self) -> None:
        bind_request_context(trace_id="first", flow_token="token-1")
        bind_request_context(trace_id="second")

        assert structlog.contextvars.get_contextvars() == {"trace_id": "second"}
