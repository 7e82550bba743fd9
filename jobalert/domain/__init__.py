"""Domain models for the job alert pipeline."""

from .models import FilterCriteria, Posting

__all__ = ["Posting", "FilterCriteria"]
