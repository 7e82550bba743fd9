"""Keyword, experience and salary filtering of harvested postings.

The filter is a conjunction of three independent predicates:
1. Keyword: any criteria keyword is a case-insensitive substring of
   ``title + " " + snippet + " " + company``
2. Experience: a parsed "<n> year(s)" figure below min_experience rejects
3. Salary: a parsed salary figure below salary_min rejects
Missing or unparseable experience/salary text never rejects.
"""

import logging
from typing import Iterable, List, Optional

from jobalert.domain.models import FilterCriteria, Posting
from jobalert.utils.text import parse_experience_years, parse_salary

from .models import FilterDecision

logger = logging.getLogger(__name__)


class PostingFilter:
    """Evaluates postings against one run's FilterCriteria."""

    def __init__(self, criteria: FilterCriteria, logger_instance: Optional[logging.Logger] = None):
        self.criteria = criteria
        self.logger = logger_instance or logger

    def evaluate(self, posting: Posting) -> FilterDecision:
        """Evaluate a single posting. Pure: the posting is not modified."""
        experience = parse_experience_years(posting.experience_text)
        salary = parse_salary(posting.salary_text)

        reason = None
        if not self.criteria.matches_keywords(posting.searchable_text):
            reason = "keyword"
        elif experience is not None and experience < self.criteria.min_experience:
            reason = "experience"
        elif salary is not None and salary < self.criteria.salary_min:
            reason = "salary"

        if reason is not None:
            self.logger.debug(
                f"Posting rejected: {posting.identity}",
                extra={
                    "identity": posting.identity,
                    "reason": reason,
                    "experience_years": experience,
                    "salary": salary,
                },
            )

        return FilterDecision(
            passed=reason is None,
            reason=reason,
            experience_years=experience,
            salary=salary,
        )

    def apply(self, postings: Iterable[Posting]) -> List[Posting]:
        """Postings that pass every predicate, in input order."""
        return [posting for posting in postings if self.evaluate(posting).passed]


def filter_postings(postings: Iterable[Posting], criteria: FilterCriteria) -> List[Posting]:
    """Return the order-preserving subset of postings matching criteria."""
    return PostingFilter(criteria).apply(postings)
