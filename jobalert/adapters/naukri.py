"""Naukri results page adapter."""

from typing import Iterable

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class NaukriAdapter(BaseAdapter):
    """Adapter for Naukri search results.

    Naukri encodes the search in the path
    (``/<keywords>-jobs-in-<location>``) and shows experience and salary
    ranges on every card, which makes it the main source of those fields.
    """

    SOURCE_NAME = "Naukri"
    BASE_URL = "https://www.naukri.com"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        path = self._slug(" ".join(criteria.keywords)) + "-jobs"
        if criteria.location:
            path += f"-in-{self._slug(criteria.location)}"
        return f"{self.BASE_URL}/{path}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        for card in soup.select("article.jobTuple"):
            posting = self._build_posting(
                title=self._text(card, "a.title"),
                company=self._text(card, "a.subTitle"),
                link=self._href(card, "a.title"),
                snippet=self._text(card, ".job-desc"),
                experience_text=self._text(card, ".experience"),
                salary_text=self._text(card, ".salary"),
            )
            if posting is not None:
                yield posting
