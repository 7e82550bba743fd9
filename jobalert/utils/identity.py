"""Posting identity derivation.

A posting is identified by its canonical URL when the board exposes one,
otherwise by a normalized ``title|company`` key. The same identity is used
for in-run deduplication and for the cross-run notification ledger, so the
derivation must be deterministic across harvests.
"""

import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Query parameters that vary between harvests of the same posting
TRACKING_PARAM_PREFIXES = ("utm_",)
TRACKING_PARAMS = {"ref", "refid", "trackingid", "trk", "from", "src"}


def canonicalize_url(url: str) -> str:
    """Normalize a posting URL.

    Lowercases scheme and host, drops the fragment and tracking query
    parameters, and removes a trailing slash from the path. Remaining query
    parameters keep their original order because some boards (Indeed's
    ``jk``) carry the posting id there.

    Example:
        >>> canonicalize_url("HTTPS://Cutshort.io/job/abc/?utm_source=x#top")
        'https://cutshort.io/job/abc'
    """
    parts = urlsplit(url.strip())
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key.lower() not in TRACKING_PARAMS
        and not key.lower().startswith(TRACKING_PARAM_PREFIXES)
    ]
    path = parts.path.rstrip("/") if parts.path != "/" else ""
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), path, urlencode(query), "")
    )


def fallback_key(title: str, company: str) -> str:
    """Identity for postings without a link: normalized ``title|company``."""
    return f"{_normalize(title)}|{_normalize(company)}"


def compute_identity(url: Optional[str], title: str, company: str) -> str:
    """Compute the deduplication identity of a posting."""
    if url and url.strip():
        return canonicalize_url(url)
    return fallback_key(title, company)


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip().lower()
