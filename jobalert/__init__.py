"""Job alert: harvest job boards, filter postings and notify new matches."""

__version__ = "1.0.0"
