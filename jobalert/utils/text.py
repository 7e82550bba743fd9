"""Text helpers for scraped content and best-effort number parsing."""

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")

# First integer followed by an optional "+" (or a range like "2-5") and "year(s)"
_YEARS_PATTERN = re.compile(
    r"(\d+)\s*\+?\s*(?:(?:-|–|to)\s*\d+\s*)?years?\b", re.IGNORECASE
)

# Currency symbols and codes removed before looking for digits
_CURRENCY_PATTERN = re.compile(r"[₹$€£¥]|\b(?:inr|usd|rs\.?)", re.IGNORECASE)
_SALARY_DIGITS = re.compile(r"(\d{3,})")


def collapse_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace to single spaces and strip the ends."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def parse_experience_years(text: Optional[str]) -> Optional[int]:
    """Parse the minimum years of experience from free text.

    Returns None when no "<n> year(s)" phrase is present.

    Examples:
        >>> parse_experience_years("3+ years")
        3
        >>> parse_experience_years("2-5 Years")
        2
        >>> parse_experience_years("flexible") is None
        True
    """
    if not text:
        return None
    match = _YEARS_PATTERN.search(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_salary(text: Optional[str]) -> Optional[int]:
    """Parse the first salary figure from free text.

    Currency markers and thousands separators are removed, then the first
    run of at least three digits is taken.

    Examples:
        >>> parse_salary("₹45,000")
        45000
        >>> parse_salary("competitive") is None
        True
    """
    if not text:
        return None
    stripped = _CURRENCY_PATTERN.sub("", text).replace(",", "")
    match = _SALARY_DIGITS.search(stripped)
    if match is None:
        return None
    return int(match.group(1))
