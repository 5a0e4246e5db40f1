"""Input sanitization for inspection form data and response security headers."""

from __future__ import annotations

import re
from typing import Any

MAX_TEXT_LENGTH = 1000

_SCRIPT_TAG_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.I)
_HTML_TAG_RE = re.compile(r"<[^>]*>")
_ANGLE_BRACKETS_RE = re.compile(r"[<>]")
_PROCEDURE_NUMBER_RE = re.compile(r"[a-zA-Z0-9\-]{1,50}")

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
}


def sanitize_string(value: Any) -> Any:
    """Strip markup from a string and cap its length; non-strings pass through."""
    if not isinstance(value, str):
        return value
    cleaned = _SCRIPT_TAG_RE.sub("", value.strip())
    cleaned = _HTML_TAG_RE.sub("", cleaned)
    cleaned = _ANGLE_BRACKETS_RE.sub("", cleaned)
    return cleaned[:MAX_TEXT_LENGTH]


def sanitize_object(value: Any) -> Any:
    """Recursively sanitize keys and string values of JSON-like data."""
    if isinstance(value, dict):
        return {sanitize_string(key): sanitize_object(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize_object(item) for item in value]
    return sanitize_string(value)


def validate_procedure_number(value: Any) -> str | None:
    if not value or not isinstance(value, str):
        return None
    sanitized = sanitize_string(value)
    return sanitized if _PROCEDURE_NUMBER_RE.fullmatch(sanitized) else None
