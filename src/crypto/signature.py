"""Request signature validation (x-hub-signature-256)."""

import hashlib
import hmac

from src.crypto.constants import SIGNATURE_PREFIX
from src.utils.logger import get_logger

logger = get_logger(__name__)


def validate_flow_signature(
    raw_body: bytes,
    signature_header: str | None,
    app_secret: str | None,
) -> bool:
    """Validate the HMAC-SHA256 signature of the raw request body.

    Without an app secret the check is skipped and always passes, which is
    only meant for local development. A missing header always fails.

    Args:
        raw_body: Exact bytes received.
        signature_header: Header value in the form ``sha256=<hex>``.
        app_secret: Shared app secret.

    Returns:
        True if the signature matches (or no secret is configured).
    """
    if not app_secret:
        logger.warning(
            "signature_validation_skipped",
            reason="app_secret_not_configured",
        )
        return True

    if not signature_header:
        logger.warning("signature_header_missing")
        return False

    received = signature_header.removeprefix(SIGNATURE_PREFIX).encode("utf-8")
    expected = (
        hmac.new(app_secret.encode("utf-8"), raw_body, hashlib.sha256)
        .hexdigest()
        .encode("ascii")
    )

    if len(received) != len(expected):
        return False
    return hmac.compare_digest(expected, received)
