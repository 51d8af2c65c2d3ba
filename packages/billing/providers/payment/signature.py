"""Checkout signatures: HMAC-SHA256 over "<order_id>|<payment_id>"."""

import hashlib
import hmac


def compute_checkout_signature(secret: str, order_id: str, payment_id: str) -> str:
    """Hex signature the gateway attaches to a successful checkout."""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def signature_matches(
    secret: str, order_id: str, payment_id: str, signature: str
) -> bool:
    """Constant-time comparison of a supplied signature with the expected one."""
    expected = compute_checkout_signature(secret, order_id, payment_id)
    return hmac.compare_digest(expected, signature.strip())
