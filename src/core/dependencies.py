"""Flow dependencies.

Collaborators injected into the conversation state machine, so tests can
swap the appointment store for a fake.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from src.contracts.appointment import Appointment


class AppointmentStore(Protocol):
    """Persistence collaborator for appointments."""

    async def insert_appointment(self, appointment: Appointment) -> dict[str, Any]: ...

    async def list_appointments(self) -> list[dict[str, Any]]: ...

    async def ping(self) -> None: ...


@dataclass
class FlowDependencies:
    """Dependencies available while handling one Flow request.

    Attributes:
        store: Appointment store.
        trace_id: Trace ID for observability.
    """

    store: AppointmentStore
    trace_id: str | None = None
