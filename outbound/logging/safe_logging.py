"""Safe logging helpers that keep API keys out of log output."""

from __future__ import annotations

from collections.abc import Mapping

_SENSITIVE_HEADERS = {"authorization", "x-api-key", "cookie", "set-cookie"}


def token_presence(label: str, token: str | None) -> str:
    """Describe whether a token was configured without logging its value."""
    return f"{label}={'present' if token else 'absent'}"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with credential-bearing values masked."""
    redacted = {}
    for name, value in headers.items():
        if name.lower() in _SENSITIVE_HEADERS:
            scheme, _, credential = value.partition(" ")
            redacted[name] = f"{scheme} ***" if credential else "***"
        else:
            redacted[name] = value
    return redacted
