"""AES-128-GCM payload encryption for the Flow endpoint."""

import base64

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from src.crypto.constants import MAX_IV_SIZE, MIN_IV_SIZE, TAG_SIZE
from src.crypto.errors import AuthenticationFailed


def flip_iv(iv: bytes) -> bytes:
    """Complement every bit of the request IV to get the response IV.

    Every bit flips, so the result never equals the input and the response
    never reuses the request nonce under the same key.
    """
    return bytes(b ^ 0xFF for b in iv)


def decrypt_flow_data(encrypted_flow_data: bytes, aes_key: bytes, iv: bytes) -> bytes:
    """Authenticated-decrypt the request payload.

    Args:
        encrypted_flow_data: Ciphertext with the GCM tag appended.
        aes_key: Unwrapped AES-128 key.
        iv: Request nonce.

    Returns:
        Authenticated plaintext.

    Raises:
        AuthenticationFailed: Wrong key, tampered ciphertext or tag, or an
            unusable nonce. The causes are not distinguished.
    """
    if len(encrypted_flow_data) < TAG_SIZE or not MIN_IV_SIZE <= len(iv) <= MAX_IV_SIZE:
        raise AuthenticationFailed()

    ciphertext = encrypted_flow_data[:-TAG_SIZE]
    tag = encrypted_flow_data[-TAG_SIZE:]

    decryptor = Cipher(algorithms.AES(aes_key), modes.GCM(iv, tag)).decryptor()
    try:
        return decryptor.update(ciphertext) + decryptor.finalize()
    except InvalidTag as e:
        raise AuthenticationFailed() from e


def encrypt_flow_response(plaintext: bytes, aes_key: bytes, response_iv: bytes) -> str:
    """Encrypt a response payload.

    Args:
        plaintext: Serialized response.
        aes_key: Same AES key the request was encrypted with.
        response_iv: Response nonce, see flip_iv.

    Returns:
        base64(ciphertext || tag).
    """
    encryptor = Cipher(algorithms.AES(aes_key), modes.GCM(response_iv)).encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return base64.b64encode(ciphertext + encryptor.tag).decode("ascii")
