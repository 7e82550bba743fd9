"""Cutshort results page adapter."""

from typing import Iterable
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class CutshortAdapter(BaseAdapter):
    """Adapter for Cutshort search results (``.job-card`` cards, relative links)."""

    SOURCE_NAME = "Cutshort"
    BASE_URL = "https://cutshort.io"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        query = urlencode(
            {"keywords": " ".join(criteria.keywords), "locations": criteria.location}
        )
        return f"{self.BASE_URL}/search?{query}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        for card in soup.select(".job-card"):
            posting = self._build_posting(
                title=self._text(card, ".job-title"),
                company=self._text(card, ".company-name"),
                link=self._href(card, "a"),
                snippet=self._text(card, ".job-desc"),
                experience_text=self._text(card, ".experience"),
                salary_text=self._text(card, ".salary"),
            )
            if posting is not None:
                yield posting
