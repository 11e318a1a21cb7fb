"""Webhook and admin-key verification."""

import base64
import hashlib
import hmac
from typing import Optional


def compute_webhook_hmac(body: bytes, secret: str) -> str:
    """Base64 HMAC-SHA256 of the raw body, as Shopify sends it."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def verify_webhook_hmac(body: bytes, supplied_hmac: Optional[str], secret: str) -> bool:
    """Check the X-Shopify-Hmac-Sha256 header against the raw body.

    An empty secret disables verification and always passes.
    """
    if not secret:
        return True
    if not supplied_hmac:
        return False
    try:
        return hmac.compare_digest(
            compute_webhook_hmac(body, secret).encode("utf-8"),
            supplied_hmac.strip().encode("utf-8")
        )
    except (TypeError, UnicodeEncodeError):
        return False


def verify_admin_key(supplied_key: Optional[str], admin_key: str) -> bool:
    """Constant-time admin key check; an empty configured key allows all."""
    if not admin_key:
        return True
    if not supplied_key:
        return False
    return hmac.compare_digest(
        supplied_key.encode("utf-8"),
        admin_key.encode("utf-8")
    )
