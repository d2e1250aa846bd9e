# hubspot_sync/services/signature.py
import hashlib
import hmac

from ..exceptions import InvalidSignature, MissingSignature, SecretNotConfigured


def _to_bytes(value: bytes | str) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(body: bytes | str, secret: str) -> str:
    """Hex HMAC-SHA256 of the raw body, keyed with the app client secret."""
    return hmac.new(_to_bytes(secret), _to_bytes(body), hashlib.sha256).hexdigest()


def verify_signature(body: bytes | str, signature: str, secret: str) -> bool:
    """
    Constant-time check of ``signature`` against the HMAC of ``body``.
    ``body`` must be the bytes exactly as received; a re-serialized JSON
    document is not guaranteed to hash the same.
    """
    if not signature or not secret:
        return False
    expected = compute_signature(body, secret)
    return hmac.compare_digest(_to_bytes(signature.strip()), expected.encode("ascii"))


def check_request_signature(body: bytes, signature: str | None, secret: str | None) -> None:
    """Raise the matching WebhookAuthError unless the request is signed by HubSpot."""
    if not signature:
        raise MissingSignature()
    if not secret:
        raise SecretNotConfigured()
    if not verify_signature(body, signature, secret):
        raise InvalidSignature()
