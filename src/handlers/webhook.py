"""Webhook Handler - Encrypted WhatsApp Flow data endpoint."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from src.config.settings import get_settings
from src.core.flow_handler import FlowRequestHandler
from src.crypto.constants import SIGNATURE_HEADER
from src.services.supabase import get_appointment_store

router = APIRouter(tags=["flow"])


def get_flow_handler() -> FlowRequestHandler:
    """Build the handler from settings and the shared appointment store."""
    return FlowRequestHandler(get_settings(), get_appointment_store())


@router.post("/")
async def flow_endpoint(
    request: Request,
    handler: FlowRequestHandler = Depends(get_flow_handler),
) -> Response:
    """WhatsApp Flow data endpoint.

    Reads the raw body (the signature covers the exact bytes), delegates to
    the Flow handler and returns either the encrypted response or a bare
    status code.

    Args:
        request: Incoming request.
        handler: Flow request handler.

    Returns:
        200 with {"encrypted_response": ...}, or an empty error response.
    """
    raw_body = await request.body()
    result = await handler.handle(raw_body, request.headers.get(SIGNATURE_HEADER))

    if result.body is None:
        return Response(status_code=result.status_code)
    return JSONResponse(content=result.body, status_code=result.status_code)
