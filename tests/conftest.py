"""Pytest Configuration - Shared fixtures for tests."""

import base64
import hashlib
import hmac
import json
import os
from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["APP_ENV"] = "development"
os.environ["ENABLE_TRACING"] = "false"

from src.config.settings import Settings  # noqa: E402

APP_SECRET = "test-app-secret"
KEY_PASSPHRASE = "test-passphrase"


class FlowPlatformClient:
    """Builds requests and reads responses the way the WhatsApp platform does.

    Uses AESGCM (one-shot AEAD API) as a reference implementation, separate
    from the streaming Cipher API used by the endpoint.
    """

    def __init__(self, public_key: rsa.RSAPublicKey, app_secret: str = APP_SECRET):
        self.public_key = public_key
        self.app_secret = app_secret

    def wrap_key(self, aes_key: bytes) -> bytes:
        return self.public_key.encrypt(
            aes_key,
            padding.OAEP(
                mgf=padding.MGF1(algorithm=hashes.SHA256()),
                algorithm=hashes.SHA256(),
                label=None,
            ),
        )

    def encrypt_request(
        self,
        payload: dict[str, Any] | bytes,
        aes_key: bytes | None = None,
        iv: bytes | None = None,
    ) -> tuple[dict[str, str], bytes, bytes]:
        """Encrypt a request payload.

        Returns:
            Tuple of (JSON body, aes_key, iv).
        """
        aes_key = aes_key or os.urandom(16)
        iv = iv or os.urandom(16)
        plaintext = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        ciphertext = AESGCM(aes_key).encrypt(iv, plaintext, None)
        body = {
            "encrypted_flow_data": base64.b64encode(ciphertext).decode(),
            "encrypted_aes_key": base64.b64encode(self.wrap_key(aes_key)).decode(),
            "initial_vector": base64.b64encode(iv).decode(),
        }
        return body, aes_key, iv

    def decrypt_response(self, encrypted_response: str, aes_key: bytes, iv: bytes) -> Any:
        flipped = bytes(b ^ 0xFF for b in iv)
        plaintext = AESGCM(aes_key).decrypt(
            flipped, base64.b64decode(encrypted_response), None
        )
        return json.loads(plaintext)

    def sign(self, raw_body: bytes) -> str:
        digest = hmac.new(self.app_secret.encode(), raw_body, hashlib.sha256).hexdigest()
        return f"sha256={digest}"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Endpoint RSA key pair (generated once per session)."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """Unencrypted PEM of the endpoint key."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def encrypted_private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    """Passphrase-protected PEM of the endpoint key."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.BestAvailableEncryption(
            KEY_PASSPHRASE.encode()
        ),
    ).decode()


@pytest.fixture(scope="session")
def platform(rsa_private_key: rsa.RSAPrivateKey) -> FlowPlatformClient:
    """Client side of the Flow protocol."""
    return FlowPlatformClient(rsa_private_key.public_key())


@pytest.fixture
def mock_store() -> MagicMock:
    """Appointment store fake."""
    store = MagicMock()
    store.insert_appointment = AsyncMock(return_value={"id": 1})
    store.list_appointments = AsyncMock(return_value=[])
    store.ping = AsyncMock(return_value=None)
    return store


@pytest.fixture
def flow_settings(private_key_pem: str) -> Settings:
    """Settings with a private key and app secret, ignoring any .env file."""
    return Settings(
        _env_file=None,
        private_key=private_key_pem,
        app_secret=APP_SECRET,
        enable_tracing=False,
    )


@pytest.fixture
def schedule_data() -> dict:
    """Valid SCHEDULE screen submission."""
    return {
        "appointment_type": "online",
        "appointment_date": "2025-01-10",
        "appointment_time": "slot_09_10",
        "gender": "male",
    }


@pytest.fixture
async def async_client(
    flow_settings: Settings,
    mock_store: MagicMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI app."""
    from src.core.flow_handler import FlowRequestHandler
    from src.handlers.webhook import get_flow_handler
    from src.main import app
    from src.services.supabase import get_appointment_store

    app.dependency_overrides[get_flow_handler] = lambda: FlowRequestHandler(
        flow_settings, mock_store
    )
    app.dependency_overrides[get_appointment_store] = lambda: mock_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
