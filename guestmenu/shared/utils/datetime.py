"""
UTC datetime utilities for consistent timezone handling.

Firestore timestamps come back timezone-aware; everything written by this
service is timezone-aware UTC as well.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    Naive values are assumed to be UTC; aware values are converted.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def coerce_timestamp(value: object) -> datetime | None:
    """
    Read a timestamp the way clients store them.

    Accepts a datetime, an ISO-8601 string, or epoch milliseconds (what the
    browser SDK's Date.now() produces). Anything else yields None.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    if isinstance(value, str) and value:
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None
