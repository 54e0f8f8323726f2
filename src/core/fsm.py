"""Flow State Machine - Next-screen logic for the appointment Flow.

The endpoint keeps no session state. The client holds it and sends the
current action, screen, data and flow_token with every request.

| action        | screen   | effect                      | response            |
|---------------|----------|-----------------------------|---------------------|
| ping          | -        | -                           | {data: {status}}    |
| any           | -        | data.error present: log     | {data: {acknowledged}} |
| INIT          | -        | -                           | SCHEDULE screen     |
| data_exchange | SCHEDULE | persist appointment         | SUCCESS screen      |
| data_exchange | other    | -                           | UnhandledScreen     |
| other         | -        | -                           | UnhandledRequest    |
"""

from typing import Any

from src.contracts.appointment import Appointment
from src.contracts.flow_request import DecryptedRequest, FlowAction, FlowScreen
from src.core.dependencies import FlowDependencies
from src.core.errors import UnhandledRequest, UnhandledScreen
from src.core.templates import (
    ERROR_ACK_RESPONSE,
    PING_RESPONSE,
    build_success_response,
    format_confirmation_message,
    get_screen_response,
    resolve_time_slot_label,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)


async def get_next_screen(
    request: DecryptedRequest,
    deps: FlowDependencies,
) -> dict[str, Any]:
    """Compute the response for a decrypted Flow request.

    Args:
        request: Decrypted request.
        deps: Injected collaborators.

    Returns:
        Response object to encrypt and send back.

    Raises:
        UnhandledScreen: data_exchange for an unknown screen.
        UnhandledRequest: Unknown action.
        PersistenceFailure: Appointment could not be stored.
    """
    if request.action == FlowAction.PING:
        return {"data": dict(PING_RESPONSE)}

    if request.has_client_error:
        logger.warning(
            "client_error_received",
            screen=request.screen,
            error=request.data.get("error"),
            error_message=request.data.get("error_message"),
        )
        return {"data": dict(ERROR_ACK_RESPONSE)}

    if request.action == FlowAction.INIT:
        return get_screen_response(FlowScreen.SCHEDULE)

    if request.action == FlowAction.DATA_EXCHANGE:
        if request.screen == FlowScreen.SCHEDULE:
            return await _schedule_appointment(request, deps)

        logger.error("unhandled_screen", screen=request.screen)
        raise UnhandledScreen(request.screen)

    logger.error("unhandled_request", action=request.action, screen=request.screen)
    raise UnhandledRequest(request.action)


async def _schedule_appointment(
    request: DecryptedRequest,
    deps: FlowDependencies,
) -> dict[str, Any]:
    """Persist the SCHEDULE submission and build the SUCCESS screen."""
    data = request.data
    time_label = resolve_time_slot_label(data.get("appointment_time"))

    appointment = Appointment.model_validate(
        {
            "appointment_type": data.get("appointment_type"),
            "gender": data.get("gender"),
            "appointment_date": data.get("appointment_date"),
            "appointment_time": time_label,
            "notes": data.get("notes"),
        }
    )

    # No retry: a second insert could duplicate the row
    await deps.store.insert_appointment(appointment)

    logger.info(
        "appointment_saved",
        flow_token=request.flow_token,
        appointment_type=appointment.appointment_type.value,
        appointment_date=appointment.appointment_date.isoformat(),
        appointment_time=appointment.appointment_time,
        trace_id=deps.trace_id,
    )

    message = format_confirmation_message(
        appointment_type=appointment.appointment_type.value,
        appointment_date=appointment.appointment_date.isoformat(),
        appointment_time=appointment.appointment_time,
    )
    return build_success_response(request.flow_token, message)
