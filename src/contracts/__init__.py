"""Contracts package - Pydantic schemas for data validation."""

from src.contracts.appointment import (
    DEFAULT_NOTES,
    Appointment,
    AppointmentType,
    Gender,
)
from src.contracts.flow_envelope import EncryptedEnvelope, EncryptedResponse
from src.contracts.flow_request import DecryptedRequest, FlowAction, FlowScreen

__all__ = [
    "Appointment",
    "AppointmentType",
    "Gender",
    "DEFAULT_NOTES",
    "EncryptedEnvelope",
    "EncryptedResponse",
    "DecryptedRequest",
    "FlowAction",
    "FlowScreen",
]
