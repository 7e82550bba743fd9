"""Harvesting and merging of postings from all configured sources."""

from .aggregator import aggregate, harvest

__all__ = ["harvest", "aggregate"]
