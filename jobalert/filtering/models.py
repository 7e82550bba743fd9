"""Result types for the posting filter."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FilterDecision:
    """Outcome of evaluating one posting against FilterCriteria.

    Attributes:
        passed: True if every predicate holds
        reason: Name of the first failing predicate ("keyword", "experience",
            "salary"), or None when passed
        experience_years: Parsed years, or None if absent/unparseable
        salary: Parsed salary figure, or None if absent/unparseable
    """

    passed: bool
    reason: Optional[str] = None
    experience_years: Optional[int] = None
    salary: Optional[int] = None
