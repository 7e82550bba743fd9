"""Utility functions for posting identity, text parsing and timestamps."""

from .identity import canonicalize_url, compute_identity, fallback_key
from .text import collapse_whitespace, parse_experience_years, parse_salary
from .timestamps import format_date, format_for_display, utc_now

__all__ = [
    # Identity
    "canonicalize_url",
    "compute_identity",
    "fallback_key",
    # Text
    "collapse_whitespace",
    "parse_experience_years",
    "parse_salary",
    # Timestamps
    "utc_now",
    "format_for_display",
    "format_date",
]
