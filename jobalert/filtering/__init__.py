"""Posting filter applying keyword, experience and salary predicates."""

from .engine import PostingFilter, filter_postings
from .models import FilterDecision

__all__ = ["PostingFilter", "FilterDecision", "filter_postings"]
