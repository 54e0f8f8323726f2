"""Flow Request Contract - Decrypted payload sent by the Flow client."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlowAction(str, Enum):
    """Actions the Flow client can send."""

    PING = "ping"
    INIT = "INIT"
    DATA_EXCHANGE = "data_exchange"


class FlowScreen(str, Enum):
    """Screens served by this endpoint."""

    SCHEDULE = "SCHEDULE"
    SUCCESS = "SUCCESS"


class DecryptedRequest(BaseModel):
    """Plaintext request after hybrid decryption.

    The client carries the conversation state: every request is
    self-describing through action, screen, data and flow_token.
    """

    action: str | None = Field(
        None,
        description="ping, INIT, data_exchange or anything the client sends",
    )
    screen: str | None = Field(
        None,
        description="Screen the client is currently on",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Screen data submitted by the client",
    )
    flow_token: str | None = Field(
        None,
        description="Opaque token identifying the Flow session",
    )
    version: str | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "version": "3.0",
                "action": "data_exchange",
                "screen": "SCHEDULE",
                "flow_token": "flows-builder-db50c614",
                "data": {
                    "appointment_type": "online",
                    "gender": "male",
                    "appointment_date": "2025-01-10",
                    "appointment_time": "slot_09_10",
                },
            }
        },
    )

    @field_validator("screen", "flow_token", "version", mode="before")
    @classmethod
    def stringify_scalar(cls, v: Any) -> Any:
        """Accept numeric identifiers such as a bare 3.0 version."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("data", mode="before")
    @classmethod
    def default_data(cls, v: Any) -> Any:
        """Treat a null data block as empty."""
        return {} if v is None else v

    @property
    def has_client_error(self) -> bool:
        """Check if the client is reporting an error instead of submitting data."""
        return bool(self.data.get("error"))
