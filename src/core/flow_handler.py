"""Flow Request Handler - Orchestrates one encrypted Flow endpoint call.

signature check -> decrypt -> state machine -> encrypt. Failures become a
bare status code: crypto failures share one reserved code and are never
distinguished to the caller; state machine and store errors are a plain 500.
"""

from dataclasses import dataclass
from typing import Any

from opentelemetry.trace import Span

from src.config.settings import Settings
from src.contracts.flow_envelope import EncryptedEnvelope, EncryptedResponse
from src.core.dependencies import AppointmentStore, FlowDependencies
from src.core.errors import EnvelopeInvalid, ServerMisconfigured, SignatureInvalid
from src.core.fsm import get_next_screen
from src.crypto.errors import FlowCryptoError
from src.crypto.flow_encryption import decrypt_request, encrypt_response
from src.crypto.keys import load_cached_private_key
from src.crypto.signature import validate_flow_signature
from src.services.observability import get_current_trace_id, get_tracer
from src.utils.logger import bind_request_context, get_logger

logger = get_logger(__name__)
tracer = get_tracer(__name__)

HTTP_OK = 200
HTTP_INTERNAL_ERROR = 500


@dataclass(frozen=True)
class FlowHandlerResult:
    """Status code and optional JSON body for the transport."""

    status_code: int
    body: dict[str, Any] | None = None


class FlowRequestHandler:
    """Handles encrypted Flow endpoint requests."""

    def __init__(self, settings: Settings, store: AppointmentStore) -> None:
        self.settings = settings
        self.store = store

    async def handle(
        self,
        raw_body: bytes,
        signature_header: str | None,
    ) -> FlowHandlerResult:
        """Process one request.

        Args:
            raw_body: Exact request body bytes.
            signature_header: Value of x-hub-signature-256, if any.

        Returns:
            Either 200 with the encrypted response or a bare error status.
        """
        with tracer.start_as_current_span("flow_endpoint") as span:
            bind_request_context(trace_id=get_current_trace_id())
            try:
                encrypted = await self._process(raw_body, signature_header, span)
            except Exception as e:
                result = FlowHandlerResult(self.status_for_error(e))
                self._log_failure(e, result.status_code)
                if result.status_code == HTTP_INTERNAL_ERROR:
                    span.record_exception(e)
            else:
                result = FlowHandlerResult(
                    HTTP_OK,
                    EncryptedResponse(encrypted_response=encrypted).model_dump(),
                )

            span.set_attribute("http.status_code", result.status_code)
            return result

    def status_for_error(self, error: Exception) -> int:
        """Map a failure to the status code returned to the platform."""
        if isinstance(error, SignatureInvalid):
            return self.settings.signature_invalid_status_code
        if isinstance(error, FlowCryptoError):
            return self.settings.crypto_error_status_code
        return HTTP_INTERNAL_ERROR

    async def _process(
        self,
        raw_body: bytes,
        signature_header: str | None,
        span: Span,
    ) -> str:
        settings = self.settings

        if not settings.has_private_key:
            raise ServerMisconfigured("Private key is missing")

        if not validate_flow_signature(raw_body, signature_header, settings.app_secret):
            raise SignatureInvalid("Request signature did not match")

        envelope = EncryptedEnvelope.from_raw(raw_body)
        private_key = load_cached_private_key(settings.private_key, settings.passphrase)
        request, context = decrypt_request(envelope, private_key)

        trace_id = get_current_trace_id()
        bind_request_context(trace_id=trace_id, flow_token=request.flow_token)
        span.set_attribute("flow.action", request.action or "")
        span.set_attribute("flow.screen", request.screen or "")

        response = await get_next_screen(
            request, FlowDependencies(store=self.store, trace_id=trace_id)
        )

        logger.info(
            "flow_request_processed",
            action=request.action,
            screen=request.screen,
        )
        return encrypt_response(response, context)

    def _log_failure(self, error: Exception, status_code: int) -> None:
        cause = error.__cause__
        context = {
            "status_code": status_code,
            "error_type": type(error).__name__,
            "error": str(error),
            "cause_type": type(cause).__name__ if cause else None,
        }
        if isinstance(error, (SignatureInvalid, EnvelopeInvalid, FlowCryptoError)):
            logger.warning("flow_request_rejected", **context)
        else:
            logger.error("flow_processing_failed", **context)
