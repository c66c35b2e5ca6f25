"""Helpers for safe debug logging.

Biocache query strings may carry an ``apiKey`` or the user's ``email`` for
download tracking, and search responses can be very large. This module
masks those parameters and truncates long values before they reach DEBUG
logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_PARAMS: frozenset[str] = frozenset(
    {
        "apikey",
        "api_key",
        "email",
        "authorization",
        "cookie",
    }
)


def redact_query(query: str) -> str:
    """Mask sensitive parameters of an ``&``-separated query string."""
    parts: list[str] = []
    for param in query.split("&"):
        key, sep, _value = param.partition("=")
        if sep and key.lower() in _SENSITIVE_PARAMS:
            parts.append(f"{key}=<redacted>")
        else:
            parts.append(param)
    return "&".join(parts)


def redact_url(url: str) -> str:
    base, sep, query = url.partition("?")
    if not sep:
        return url
    return f"{base}?{redact_query(query)}"


def redact_for_log(value: Any, *, max_string: int = 512, max_items: int = 20, _depth: int = 0) -> Any:
    """Return a redacted, size-bounded copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_PARAMS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = [
            redact_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in value[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more>")
        return items

    return repr(value)
