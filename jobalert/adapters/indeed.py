"""Indeed (India) results page adapter."""

from typing import Iterable
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class IndeedAdapter(BaseAdapter):
    """Adapter for Indeed search results.

    Page details:
        URL: https://in.indeed.com/jobs?q=<keywords>&l=<location>
        Cards: ``.result`` (older markup) or ``.job_seen_beacon``
        Links: relative ``/rc/clk?jk=...`` or ``/viewjob?jk=...``
        Salary: shown on some cards in ``.salary-snippet-container``
    """

    SOURCE_NAME = "Indeed"
    BASE_URL = "https://in.indeed.com"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        query = urlencode({"q": " ".join(criteria.keywords), "l": criteria.location})
        return f"{self.BASE_URL}/jobs?{query}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        cards = soup.select(".result") or soup.select(".job_seen_beacon")
        for card in cards:
            posting = self._build_posting(
                title=self._text(card, "h2.jobTitle") or self._text(card, "h2"),
                company=self._text(card, ".companyName")
                or self._text(card, "[data-testid=company-name]"),
                link=self._href(card, "h2 a") or self._href(card, "a"),
                snippet=self._text(card, ".job-snippet"),
                salary_text=self._text(card, ".salary-snippet-container")
                or self._text(card, ".salary-snippet"),
            )
            if posting is not None:
                yield posting
