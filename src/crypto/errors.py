"""Crypto errors for the Flow endpoint.

Every subclass is reported to the client with the same reserved status code
and no body. The class only exists for server-side logs.
"""


class FlowCryptoError(Exception):
    """Request could not be decrypted."""

    default_message = "Failed to decrypt the request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class KeyUnwrapFailed(FlowCryptoError):
    """RSA-OAEP unwrap of the AES key failed."""

    default_message = "Failed to unwrap the AES key"


class AuthenticationFailed(FlowCryptoError):
    """AES-GCM tag did not verify."""

    default_message = "Failed to authenticate the request payload"


class PayloadMalformed(FlowCryptoError):
    """Authenticated plaintext is not a valid Flow request document."""

    default_message = "Decrypted payload is not a valid Flow request"
