"""Services package - External service integrations."""

from src.services.supabase import AppointmentStore, get_appointment_store

__all__ = [
    "AppointmentStore",
    "get_appointment_store",
]
