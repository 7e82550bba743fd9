"""LinkedIn public job search adapter."""

from typing import Iterable
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class LinkedInAdapter(BaseAdapter):
    """Adapter for the logged-out LinkedIn job search page.

    Two card layouts are recognised: the legacy ``li.result-card`` and the
    current ``div.base-card``. LinkedIn links carry tracking parameters,
    which identity canonicalization strips.
    """

    SOURCE_NAME = "LinkedIn"
    BASE_URL = "https://www.linkedin.com"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        query = urlencode(
            {"keywords": " ".join(criteria.keywords), "location": criteria.location}
        )
        return f"{self.BASE_URL}/jobs/search?{query}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        for card in soup.select("li.result-card"):
            posting = self._build_posting(
                title=self._text(card, "h3"),
                company=self._text(card, "h4"),
                link=self._href(card, "a"),
                snippet=self._text(card, ".result-card__snippet"),
            )
            if posting is not None:
                yield posting

        for card in soup.select("div.base-card"):
            posting = self._build_posting(
                title=self._text(card, "h3.base-search-card__title"),
                company=self._text(card, "h4.base-search-card__subtitle"),
                link=self._href(card, "a.base-card__full-link") or self._href(card, "a"),
                snippet=self._text(card, ".job-search-card__location"),
            )
            if posting is not None:
                yield posting
