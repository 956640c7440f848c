"""RFC 3339 timestamp helpers.

Wire timestamps have second precision and use ``Z`` for UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as an RFC 3339 string.

    Naive datetimes are treated as UTC. Sub-second precision is dropped,
    so a parsed value equals the input only when its microseconds are 0.

    Args:
        value: Timestamp to format.

    Returns:
        String such as ``2024-05-01T09:30:00Z`` or ``...+09:00``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if text.endswith("+00:00"):
        return text[: -len("+00:00")] + "Z"
    return text


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 string into an aware datetime.

    Raises:
        ValueError: If the text is not a valid timestamp.
    """
    normalized = text.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp '{text}' has no UTC offset")
    return parsed
