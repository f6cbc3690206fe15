"""Shared utilities: datetime helpers."""

from guestmenu.shared.utils.datetime import coerce_timestamp, ensure_utc, utc_now

__all__ = [
    "coerce_timestamp",
    "ensure_utc",
    "utc_now",
]
