"""Timestamp helpers for run bookkeeping and message headers."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def format_for_display(dt: Optional[datetime] = None) -> str:
    """Format a timestamp for email subjects and chat headers.

    Example:
        >>> format_for_display(datetime(2025, 11, 4, 9, 5, tzinfo=timezone.utc))
        '2025-11-04 09:05 UTC'
    """
    dt = dt or utc_now()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def format_date(dt: Optional[datetime] = None) -> str:
    """Format the date part only, e.g. ``2025-11-04``."""
    dt = dt or utc_now()
    return dt.strftime("%Y-%m-%d")
