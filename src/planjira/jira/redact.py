"""Credential redaction for error messages."""

from __future__ import annotations

from urllib.parse import quote

REDACTED = "[REDACTED]"


def redact_auth(text: str, secret: str | None) -> str:
    """Replace *secret* and its URL-encoded form in *text* with ``[REDACTED]``.

    Plain substring replacement; Base64 characters are matched literally.
    """
    if not secret:
        return text
    result = text.replace(secret, REDACTED)
    encoded = quote(secret, safe="")
    if encoded != secret:
        result = result.replace(encoded, REDACTED)
    return result
