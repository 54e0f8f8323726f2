"""Appointment Contract - Models for appointment persistence."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NOTES = "No additional notes provided."


class AppointmentType(str, Enum):
    """Tipos de atendimento oferecidos."""

    ONLINE = "online"
    OFFLINE = "offline"


class Gender(str, Enum):
    """Opções de gênero exibidas na tela SCHEDULE."""

    MALE = "male"
    FEMALE = "female"
    UNISEX = "unisex"


class Appointment(BaseModel):
    """Schema de agendamento criado pelo fluxo SCHEDULE."""

    appointment_type: AppointmentType = Field(
        ...,
        description="Online ou presencial",
    )
    gender: Gender = Field(
        ...,
        description="Gênero selecionado",
    )
    appointment_date: date = Field(
        ...,
        description="Data do agendamento",
    )
    appointment_time: str = Field(
        ...,
        min_length=1,
        description="Rótulo legível do horário (ex: 09:00 AM - 10:00 AM)",
    )
    notes: str = Field(
        DEFAULT_NOTES,
        description="Observações do cliente",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Data de criação",
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "appointment_type": "online",
                "gender": "male",
                "appointment_date": "2025-01-10",
                "appointment_time": "09:00 AM - 10:00 AM",
                "notes": "No additional notes provided.",
                "created_at": "2025-01-02T10:00:00Z",
            }
        },
    )

    @field_validator("notes", mode="before")
    @classmethod
    def default_notes(cls, v: Any) -> Any:
        """Fall back to the default text when notes are absent or blank."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_NOTES
        return v

    def to_row(self) -> dict[str, Any]:
        """Row for the appointments table; id and created_at are database defaults."""
        return self.model_dump(mode="json", exclude={"created_at"})
