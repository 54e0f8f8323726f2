"""Crypto package - RSA/AES encryption for the WhatsApp Flow endpoint."""

from src.crypto.constants import AES_KEY_SIZE, SIGNATURE_HEADER, TAG_SIZE
from src.crypto.errors import (
    AuthenticationFailed,
    FlowCryptoError,
    KeyUnwrapFailed,
    PayloadMalformed,
)
from src.crypto.flow_encryption import (
    SymmetricContext,
    decrypt_request,
    encrypt_response,
)
from src.crypto.keys import decrypt_aes_key, load_cached_private_key, load_private_key
from src.crypto.payload import decrypt_flow_data, encrypt_flow_response, flip_iv
from src.crypto.signature import validate_flow_signature

__all__ = [
    "AES_KEY_SIZE",
    "SIGNATURE_HEADER",
    "TAG_SIZE",
    "AuthenticationFailed",
    "FlowCryptoError",
    "KeyUnwrapFailed",
    "PayloadMalformed",
    "SymmetricContext",
    "decrypt_aes_key",
    "decrypt_flow_data",
    "decrypt_request",
    "encrypt_flow_response",
    "encrypt_response",
    "flip_iv",
    "load_cached_private_key",
    "load_private_key",
    "validate_flow_signature",
]
