"""Redaction of credentials before requests are echoed to debug output."""

from collections.abc import Mapping

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` with credential-bearing values replaced.

    Header names are matched case-insensitively. The original mapping is
    never mutated.

    Args:
        headers: Request or response headers.

    Returns:
        A new dict with sensitive values replaced by "[REDACTED]".
    """
    return {
        name: REDACTED_VALUE if name.lower() in REDACT_HEADERS else value
        for name, value in headers.items()
    }


def format_headers(headers: Mapping[str, str]) -> str:
    """Render redacted headers on one line for debug output."""
    redacted = redact_headers(headers)
    return ", ".join(f"{name}: {value}" for name, value in redacted.items())
