"""Hybrid encryption of Flow endpoint requests and responses.

Requests carry an AES-128 key wrapped with RSA-OAEP and a payload encrypted
with AES-128-GCM. Responses are encrypted with the same key under the
bit-flipped request IV.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import ValidationError

from src.contracts.flow_envelope import EncryptedEnvelope
from src.contracts.flow_request import DecryptedRequest
from src.crypto.errors import PayloadMalformed
from src.crypto.keys import decrypt_aes_key
from src.crypto.payload import decrypt_flow_data, encrypt_flow_response, flip_iv


@dataclass(frozen=True, slots=True)
class SymmetricContext:
    """AES key and request IV of a single request.

    Only valid for encrypting the response of the request it came from.
    """

    aes_key: bytes = field(repr=False)
    request_iv: bytes

    @property
    def response_iv(self) -> bytes:
        return flip_iv(self.request_iv)


def decrypt_request(
    envelope: EncryptedEnvelope,
    private_key: rsa.RSAPrivateKey,
) -> tuple[DecryptedRequest, SymmetricContext]:
    """Decrypt a Flow request.

    Args:
        envelope: Decoded request envelope.
        private_key: Endpoint RSA private key.

    Returns:
        Tuple of (decrypted request, symmetric context for the response).

    Raises:
        KeyUnwrapFailed: AES key could not be unwrapped.
        AuthenticationFailed: Payload did not authenticate.
        PayloadMalformed: Plaintext is not a Flow request document.
    """
    aes_key = decrypt_aes_key(private_key, envelope.encrypted_aes_key)
    plaintext = decrypt_flow_data(
        envelope.encrypted_flow_data, aes_key, envelope.initial_vector
    )

    try:
        document = json.loads(plaintext)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadMalformed("Decrypted payload is not valid JSON") from e

    if not isinstance(document, dict):
        raise PayloadMalformed("Decrypted payload is not a JSON object")

    try:
        request = DecryptedRequest.model_validate(document)
    except ValidationError as e:
        raise PayloadMalformed() from e

    return request, SymmetricContext(aes_key=aes_key, request_iv=envelope.initial_vector)


def encrypt_response(response: Mapping[str, Any], context: SymmetricContext) -> str:
    """Encrypt a response for the request the context was derived from.

    Args:
        response: JSON-serializable response object.
        context: Symmetric context returned by decrypt_request.

    Returns:
        base64-encoded ciphertext with the tag appended.
    """
    plaintext = json.dumps(response, separators=(",", ":")).encode("utf-8")
    return encrypt_flow_response(plaintext, context.aes_key, context.response_iv)
