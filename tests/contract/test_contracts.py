"""Contract Tests - Validate Pydantic schemas."""

import base64
import json
from datetime import date

import pytest
from pydantic import ValidationError

from src.contracts.appointment import DEFAULT_NOTES, Appointment, AppointmentType
from src.contracts.flow_envelope import EncryptedEnvelope
from src.contracts.flow_request import DecryptedRequest, FlowAction
from src.core.errors import EnvelopeInvalid


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode()


class TestEncryptedEnvelopeContract:
    """Tests for EncryptedEnvelope schema."""

    def test_valid_envelope_is_decoded(self) -> None:
        raw = json.dumps(
            {
                "encrypted_flow_data": _b64(b"ciphertext-and-tag"),
                "encrypted_aes_key": _b64(b"wrapped"),
                "initial_vector": _b64(b"\x01" * 16),
                "unrelated": "ignored",
            }
        ).encode()

        envelope = EncryptedEnvelope.from_raw(raw)

        assert envelope.encrypted_flow_data == b"ciphertext-and-tag"
        assert envelope.encrypted_aes_key == b"wrapped"
        assert envelope.initial_vector == b"\x01" * 16

    @pytest.mark.parametrize(
        "missing", ["encrypted_flow_data", "encrypted_aes_key", "initial_vector"]
    )
    def test_missing_field_is_protocol_error(self, missing: str) -> None:
        body = {
            "encrypted_flow_data": _b64(b"a"),
            "encrypted_aes_key": _b64(b"b"),
            "initial_vector": _b64(b"c"),
        }
        del body[missing]

        with pytest.raises(EnvelopeInvalid) as exc_info:
            EncryptedEnvelope.from_raw(json.dumps(body).encode())

        assert missing in str(exc_info.value)

    @pytest.mark.parametrize("value", ["", None, 123, "not base64!"])
    def test_unusable_field_value_is_protocol_error(self, value) -> None:
        body = {
            "encrypted_flow_data": value,
            "encrypted_aes_key": _b64(b"b"),
            "initial_vector": _b64(b"c"),
        }

        with pytest.raises(EnvelopeInvalid):
            EncryptedEnvelope.from_raw(json.dumps(body).encode())

    @pytest.mark.parametrize("raw", [b"", b"\xff\xfe", b"null", b'"string"'])
    def test_non_object_body_is_protocol_error(self, raw: bytes) -> None:
        with pytest.raises(EnvelopeInvalid):
            EncryptedEnvelope.from_raw(raw)


class TestDecryptedRequestContract:
    """Tests for DecryptedRequest schema."""

    def test_minimal_request(self) -> None:
        request = DecryptedRequest.model_validate({"action": "ping"})

        assert request.action == FlowAction.PING
        assert request.screen is None
        assert request.data == {}
        assert request.flow_token is None

    def test_null_data_is_empty(self) -> None:
        request = DecryptedRequest.model_validate({"action": "INIT", "data": None})

        assert request.data == {}
        assert not request.has_client_error

    def test_client_error_detected(self) -> None:
        request = DecryptedRequest.model_validate(
            {"action": "data_exchange", "data": {"error": "timeout"}}
        )

        assert request.has_client_error

    def test_unknown_action_is_kept(self) -> None:
        request = DecryptedRequest.model_validate({"action": "BACK"})

        assert request.action == "BACK"

    def test_request_is_immutable(self) -> None:
        request = DecryptedRequest.model_validate({"action": "ping"})

        with pytest.raises(ValidationError):
            request.action = "INIT"  # type: ignore[misc]

    def test_numeric_identifiers_become_strings(self) -> None:
        request = DecryptedRequest.model_validate(
            {"action": "INIT", "version": 3.0, "flow_token": 42, "screen": 7}
        )

        assert request.version == "3.0"
        assert request.flow_token == "42"
        assert request.screen == "7"

    def test_boolean_identifier_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DecryptedRequest.model_validate({"action": "INIT", "flow_token": True})


class TestAppointmentContract:
    """Tests for Appointment schema."""

    def test_valid_appointment(self) -> None:
        appointment = Appointment.model_validate(
            {
                "appointment_type": "online",
                "gender": "female",
                "appointment_date": "2025-01-10",
                "appointment_time": "09:00 AM - 10:00 AM",
            }
        )

        assert appointment.appointment_type == AppointmentType.ONLINE
        assert appointment.appointment_date == date(2025, 1, 10)
        assert appointment.notes == DEFAULT_NOTES
        assert appointment.created_at.tzinfo is not None

    @pytest.mark.parametrize("notes", [None, "", "   "])
    def test_blank_notes_get_default(self, notes) -> None:
        appointment = Appointment.model_validate(
            {
                "appointment_type": "offline",
                "gender": "male",
                "appointment_date": "2025-01-10",
                "appointment_time": "slot_x",
                "notes": notes,
            }
        )

        assert appointment.notes == DEFAULT_NOTES

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("appointment_type", "hybrid"),
            ("gender", "other"),
            ("appointment_date", "10/01/2025"),
            ("appointment_time", ""),
        ],
    )
    def test_invalid_fields_fail(self, field: str, value: str) -> None:
        data = {
            "appointment_type": "online",
            "gender": "male",
            "appointment_date": "2025-01-10",
            "appointment_time": "09:00 AM - 10:00 AM",
        }
        data[field] = value

        with pytest.raises(ValidationError) as exc_info:
            Appointment.model_validate(data)

        assert field in str(exc_info.value)

    def test_row_excludes_database_defaults(self) -> None:
        appointment = Appointment.model_validate(
            {
                "appointment_type": "online",
                "gender": "male",
                "appointment_date": "2025-01-10",
                "appointment_time": "09:00 AM - 10:00 AM",
            }
        )

        row = appointment.to_row()

        assert "created_at" not in row
        assert "id" not in row
        assert row["appointment_date"] == "2025-01-10"
