"""Flow Envelope Contract - Encrypted request/response bodies of the Flow endpoint."""

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.core.errors import EnvelopeInvalid


class EncryptedEnvelope(BaseModel):
    """Encrypted body posted by the platform to the Flow endpoint.

    Fields arrive base64-encoded and are stored decoded. All three must be
    present and non-empty; anything else is a protocol error.
    """

    encrypted_flow_data: bytes = Field(
        ...,
        description="AES-GCM ciphertext with the 16-byte tag appended",
    )
    encrypted_aes_key: bytes = Field(
        ...,
        description="AES key wrapped with RSA-OAEP (SHA-256)",
    )
    initial_vector: bytes = Field(
        ...,
        description="Nonce used for the request direction",
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator(
        "encrypted_flow_data", "encrypted_aes_key", "initial_vector", mode="before"
    )
    @classmethod
    def decode_base64(cls, v: Any) -> bytes:
        """Decode a base64 field, rejecting empty or non-string values."""
        if not isinstance(v, str) or not v:
            raise ValueError("expected a non-empty base64 string")
        try:
            decoded = base64.b64decode(v, validate=True)
        except binascii.Error as e:
            raise ValueError("invalid base64") from e
        if not decoded:
            raise ValueError("decoded value is empty")
        return decoded

    @classmethod
    def from_raw(cls, raw_body: bytes) -> "EncryptedEnvelope":
        """Parse the raw HTTP body.

        Raises:
            EnvelopeInvalid: If the body is not a JSON object carrying the
                three envelope fields.
        """
        try:
            payload = json.loads(raw_body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise EnvelopeInvalid("request body is not valid JSON") from e

        if not isinstance(payload, dict):
            raise EnvelopeInvalid("request body is not a JSON object")

        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise EnvelopeInvalid(
                f"invalid envelope fields: {', '.join(missing)}"
            ) from e


class EncryptedResponse(BaseModel):
    """Successful Flow endpoint response body."""

    encrypted_response: str = Field(
        ...,
        min_length=1,
        description="base64(AES-GCM ciphertext || tag) under the flipped nonce",
    )
