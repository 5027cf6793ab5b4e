import hashlib
import hmac

import structlog

logger = structlog.get_logger(__name__)

SIGNATURE_PREFIX = "sha256="


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Return the `sha256=<hex>` signature GitHub sends for `raw_body`."""
    mac = hmac.new(secret.encode(), msg=raw_body, digestmod=hashlib.sha256)
    return f"{SIGNATURE_PREFIX}{mac.hexdigest()}"


def verify_signature(raw_body: bytes, signature_header: str | None, secret: str) -> bool:
    """
    Verify the 'X-Hub-Signature-256' header of a webhook delivery.

    The HMAC is computed over the raw request body exactly as received. Hashing
    re-serialized JSON would not reproduce the bytes GitHub signed.

    Args:
        raw_body: The unparsed request body.
        signature_header: The header value, e.g. ``sha256=<hex>``. May be missing.
        secret: The webhook secret shared with GitHub.

    Returns:
        True only if the header matches the expected signature exactly.
        Missing or malformed headers return False instead of raising.
    """
    if not secret:
        logger.error("webhook_secret_not_configured")
        return False

    if not isinstance(signature_header, str) or not signature_header:
        logger.warning("signature_header_missing")
        return False

    if not signature_header.isascii() or not signature_header.startswith(SIGNATURE_PREFIX):
        logger.warning("signature_header_malformed")
        return False

    expected_signature = compute_signature(raw_body, secret)

    # Securely compare the signatures
    if not hmac.compare_digest(signature_header, expected_signature):
        logger.warning("signature_mismatch")
        return False

    logger.debug("signature_verified")
    return True
