"""Redaction of sensitive header values in debug output."""

from collections.abc import Iterable

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Redact sensitive header values.

    Creates a new list - the input is never mutated. Header names are matched
    case-insensitively and kept as given.

    Args:
        headers: (name, value) pairs, e.g. from httpx.Headers.multi_items().

    Returns:
        A new list with sensitive values replaced by "[REDACTED]".
    """
    return [
        (name, REDACTED_VALUE if name.lower() in REDACT_HEADERS else value)
        for name, value in headers
    ]


def format_headers(headers: Iterable[tuple[str, str]]) -> str:
    """Render headers on a single line for the debug log, redacted."""
    return ", ".join(f"{name}: {value}" for name, value in redact_headers(headers))
