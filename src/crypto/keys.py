"""RSA key handling for the Flow endpoint."""

from functools import lru_cache

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from src.core.errors import ServerMisconfigured
from src.crypto.constants import AES_KEY_SIZE
from src.crypto.errors import KeyUnwrapFailed

_OAEP = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA256()),
    algorithm=hashes.SHA256(),
    label=None,
)


def load_private_key(pem: str, passphrase: str | None = None) -> rsa.RSAPrivateKey:
    """Load the endpoint's RSA private key.

    The passphrase is ignored for unencrypted keys.

    Args:
        pem: PEM-encoded private key.
        passphrase: Passphrase for encrypted keys.

    Returns:
        RSA private key.

    Raises:
        ServerMisconfigured: If the key is missing, unreadable, not RSA, or
            the passphrase is wrong.
    """
    if not pem:
        raise ServerMisconfigured("Private key is missing")

    password = passphrase.encode("utf-8") if passphrase else None
    data = pem.encode("utf-8")

    try:
        try:
            key = serialization.load_pem_private_key(data, password=password)
        except TypeError:
            if password is None:
                raise
            key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ServerMisconfigured("Private key could not be loaded") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise ServerMisconfigured("Private key is not an RSA key")
    return key


@lru_cache(maxsize=4)
def load_cached_private_key(pem: str, passphrase: str | None = None) -> rsa.RSAPrivateKey:
    """Load the private key once per (pem, passphrase) pair.

    Failures are not cached, so a fixed configuration is picked up on the
    next request.
    """
    return load_private_key(pem, passphrase)


def decrypt_aes_key(private_key: rsa.RSAPrivateKey, encrypted_aes_key: bytes) -> bytes:
    """Unwrap the per-request AES key with RSA-OAEP (SHA-256, MGF1-SHA-256).

    Raises:
        KeyUnwrapFailed: On any failure, without distinguishing the cause.
    """
    try:
        aes_key = private_key.decrypt(encrypted_aes_key, _OAEP)
    except ValueError as e:
        raise KeyUnwrapFailed() from e

    if len(aes_key) != AES_KEY_SIZE:
        raise KeyUnwrapFailed()
    return aes_key
