"""Screen Templates - Static screen payloads and confirmation messages.

Templates are built once at import time as frozen models inside a read-only
mapping. Per-request responses are fresh dicts dumped from them, so the
templates themselves are never modified.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.contracts.appointment import AppointmentType
from src.contracts.flow_request import FlowScreen


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ScreenOption(_Frozen):
    """Dropdown/radio option shown on a screen."""

    id: str
    title: str


class ScheduleScreenData(_Frozen):
    appointment_type: tuple[ScreenOption, ...]
    gender: tuple[ScreenOption, ...]
    appointment_time: tuple[ScreenOption, ...]


class ConfirmationParams(_Frozen):
    flow_token: str | None
    appointment_confirmed: bool
    message: str


class ExtensionMessageResponse(_Frozen):
    params: ConfirmationParams


class SuccessScreenData(_Frozen):
    extension_message_response: ExtensionMessageResponse


class ScreenResponse(_Frozen):
    """Screen name plus the data the client renders it with."""

    screen: FlowScreen
    data: ScheduleScreenData | SuccessScreenData

    def render(self) -> dict[str, Any]:
        """Dump to a new JSON-ready dict."""
        return self.model_dump(mode="json", exclude_none=True)


APPOINTMENT_TYPE_OPTIONS: tuple[ScreenOption, ...] = (
    ScreenOption(id="online", title="Online"),
    ScreenOption(id="offline", title="In-Store"),
)

GENDER_OPTIONS: tuple[ScreenOption, ...] = (
    ScreenOption(id="male", title="Male"),
    ScreenOption(id="female", title="Female"),
    ScreenOption(id="unisex", title="Unisex"),
)

TIME_SLOTS: tuple[ScreenOption, ...] = (
    ScreenOption(id="slot_00_01", title="12:00 AM - 01:00 AM"),
    ScreenOption(id="slot_03_04", title="03:00 AM - 04:00 AM"),
    ScreenOption(id="slot_06_07", title="06:00 AM - 07:00 AM"),
    ScreenOption(id="slot_09_10", title="09:00 AM - 10:00 AM"),
    ScreenOption(id="slot_12_13", title="12:00 PM - 01:00 PM"),
    ScreenOption(id="slot_15_16", title="03:00 PM - 04:00 PM"),
    ScreenOption(id="slot_18_19", title="06:00 PM - 07:00 PM"),
    ScreenOption(id="slot_21_22", title="09:00 PM - 10:00 PM"),
)

SCREEN_RESPONSES: Mapping[FlowScreen, ScreenResponse] = MappingProxyType(
    {
        FlowScreen.SCHEDULE: ScreenResponse(
            screen=FlowScreen.SCHEDULE,
            data=ScheduleScreenData(
                appointment_type=APPOINTMENT_TYPE_OPTIONS,
                gender=GENDER_OPTIONS,
                appointment_time=TIME_SLOTS,
            ),
        ),
        FlowScreen.SUCCESS: ScreenResponse(
            screen=FlowScreen.SUCCESS,
            data=SuccessScreenData(
                extension_message_response=ExtensionMessageResponse(
                    params=ConfirmationParams(
                        flow_token="flows-builder-db50c614",
                        appointment_confirmed=True,
                        message="",
                    )
                )
            ),
        ),
    }
)

_TIME_SLOT_LABELS: Mapping[str, str] = MappingProxyType(
    {slot.id: slot.title for slot in TIME_SLOTS}
)

MESSAGE_TEMPLATES: Mapping[str, str] = MappingProxyType(
    {
        "appointment_confirmed": (
            "Your {appointment_type} appointment has been scheduled for "
            "{appointment_date} at {appointment_time}. {location_text}"
        ),
        "location_online": "We'll send you the meeting link before the appointment.",
        "location_offline": "We look forward to seeing you at our store!",
    }
)

# Bare acknowledgment shapes
PING_RESPONSE: Mapping[str, Any] = MappingProxyType({"status": "active"})
ERROR_ACK_RESPONSE: Mapping[str, Any] = MappingProxyType({"acknowledged": True})


def get_screen_response(screen: FlowScreen) -> dict[str, Any]:
    """Get a fresh copy of a screen template.

    Args:
        screen: Screen to render.

    Returns:
        New dict with the screen name and its data.
    """
    return SCREEN_RESPONSES[screen].render()


def build_success_response(flow_token: str | None, message: str) -> dict[str, Any]:
    """Specialize the SUCCESS template for one confirmation.

    Args:
        flow_token: Flow token echoed back to the client.
        message: Confirmation message.

    Returns:
        New dict for the SUCCESS screen.
    """
    template = SCREEN_RESPONSES[FlowScreen.SUCCESS]
    params = ConfirmationParams(
        flow_token=flow_token,
        appointment_confirmed=True,
        message=message,
    )
    specialized = template.model_copy(
        update={
            "data": SuccessScreenData(
                extension_message_response=ExtensionMessageResponse(params=params)
            )
        }
    )
    return specialized.render()


def resolve_time_slot_label(slot_id: Any) -> str | None:
    """Get the human-readable label of a slot id, or the raw id if unknown."""
    if slot_id is None:
        return None
    return _TIME_SLOT_LABELS.get(str(slot_id), str(slot_id))


def format_confirmation_message(
    appointment_type: str,
    appointment_date: str,
    appointment_time: str,
) -> str:
    """Build the confirmation message shown on the SUCCESS screen.

    Args:
        appointment_type: Type as submitted by the client (online/offline).
        appointment_date: Date as submitted by the client.
        appointment_time: Resolved time slot label.

    Returns:
        Confirmation message.
    """
    location_key = (
        "location_online"
        if appointment_type == AppointmentType.ONLINE.value
        else "location_offline"
    )
    return MESSAGE_TEMPLATES["appointment_confirmed"].format(
        appointment_type=appointment_type,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        location_text=MESSAGE_TEMPLATES[location_key],
    )
