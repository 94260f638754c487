"""Shared utilities for FastAPI routes."""

from collections.abc import Mapping

from fastapi import Request

MAX_OUTPUT_TOKENS = 1024
SENSITIVE_HEADERS = {"x-api-key", "authorization"}


def clamp_max_tokens(max_tokens):
    """Clamp max_tokens to prevent excessive output."""
    if max_tokens is None:
        return None
    return min(max_tokens, MAX_OUTPUT_TOKENS)


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")
