"""Security and verification helpers."""

from __future__ import annotations

import hashlib
import hmac
from typing import Mapping
from urllib.parse import urlparse

SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "set-cookie",
    "x-xsrf-token",
}

WEBHOOK_SIGNATURE_HEADER = "X-Sonar-Webhook-HMAC-SHA256"


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_base_url(url: str, *, allow_http: bool = False) -> None:
    """Validate the server URL to avoid scheme abuse and plaintext credentials."""
    if "\x00" in url:
        raise ValueError("Invalid base_url")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("base_url must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported base_url scheme: {parsed.scheme}")
    if parsed.query or parsed.fragment:
        raise ValueError("base_url must not carry a query string or fragment")
    if parsed.scheme == "http" and not allow_http:
        allowed = {"localhost", "127.0.0.1", "::1"}
        host = (parsed.hostname or "").lower()
        if host not in allowed:
            raise ValueError("Non-HTTPS base_url is not allowed without allow_http=True")


def verify_webhook_signature(payload: bytes | str, signature: str | None, secret: str | None) -> bool:
    """Check the ``X-Sonar-Webhook-HMAC-SHA256`` header of a webhook delivery.

    SonarQube signs the raw request body with HMAC-SHA256 keyed by the webhook
    secret and sends the lowercase hex digest. A ``sha256=`` prefix is also
    accepted.
    """
    if not secret or not signature:
        return False
    normalized = signature.strip()
    if normalized.lower().startswith("sha256="):
        normalized = normalized[len("sha256=") :].strip()
    if not normalized:
        return False

    message = payload.encode() if isinstance(payload, str) else payload
    expected = hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, normalized.lower())
