"""Appointments Handler - Listing and store health check."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.core.dependencies import AppointmentStore
from src.core.errors import PersistenceFailure
from src.services.supabase import get_appointment_store
from src.utils.logger import get_logger

router = APIRouter(tags=["appointments"])
logger = get_logger(__name__)


@router.get("/appointments", response_model=None)
async def list_appointments(
    store: AppointmentStore = Depends(get_appointment_store),
) -> list[dict[str, Any]] | JSONResponse:
    """List stored appointments verbatim.

    Returns:
        Appointment rows, or 500 if the store fails.
    """
    try:
        return await store.list_appointments()
    except PersistenceFailure as e:
        logger.error("appointments_list_failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )


@router.post("/health", response_model=None)
async def health_check(
    request: Request,
    store: AppointmentStore = Depends(get_appointment_store),
) -> dict | JSONResponse:
    """Health check with a liveness probe against the store.

    Args:
        request: Raw request; only a {"action": "ping"} body is accepted.
        store: Appointment store.

    Returns:
        {"data": {"status": "active"}}, 400 for any other body, 500 if the
        store is down.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict) or payload.get("action") != "ping":
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    try:
        await store.ping()
    except PersistenceFailure as e:
        logger.error("health_check_failed", error=str(e))
        return JSONResponse(status_code=500, content={"status": "unhealthy"})

    return {"data": {"status": "active"}}
