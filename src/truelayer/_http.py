"""Small HTTP-related constants shared across the SDK.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

from functools import cache
from importlib.metadata import PackageNotFoundError, version
import platform

AUTHORIZATION = "Authorization"
IDEMPOTENCY_KEY = "Idempotency-Key"
TL_SIGNATURE = "Tl-Signature"
USER_AGENT = "User-Agent"
CONTENT_TYPE = "Content-Type"

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

DISTRIBUTION_NAME = "truelayer-python"

# Never written to HTTP trace logs.
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {"authorization", "tl-signature", "cookie", "set-cookie"}
)


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return a copy of *headers* safe for logging."""
    return {
        name: ("[REDACTED]" if name.lower() in SENSITIVE_HEADERS else value)
        for name, value in headers.items()
    }


@cache
def sdk_version() -> str:
    """Installed distribution version, or a placeholder from a source tree."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


@cache
def user_agent() -> str:
    """User-Agent sent with every request."""
    return f"{DISTRIBUTION_NAME}/{sdk_version()} python/{platform.python_version()}"
