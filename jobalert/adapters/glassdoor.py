"""Glassdoor (India) results page adapter."""

from typing import Iterable
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class GlassdoorAdapter(BaseAdapter):
    """Adapter for Glassdoor job search.

    Glassdoor frequently answers automated requests with 403; that surfaces
    as an AdapterHTTPError inside fetch() and the board contributes nothing
    to the run.
    """

    SOURCE_NAME = "Glassdoor"
    BASE_URL = "https://www.glassdoor.co.in"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        query = urlencode(
            {"sc.keyword": " ".join(criteria.keywords), "locKeyword": criteria.location}
        )
        return f"{self.BASE_URL}/Job/jobs.htm?{query}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        for card in soup.select(".jl"):
            posting = self._build_posting(
                title=self._text(card, ".jobLink"),
                # Glassdoor's own class name is misspelled
                company=self._text(card, ".jobEmpolyerName"),
                link=self._href(card, "a"),
                snippet=self._text(card, ".jobDescriptionContent"),
                salary_text=self._text(card, ".salaryEstimate"),
            )
            if posting is not None:
                yield posting
