"""Monster (foundit) India results page adapter."""

from typing import Iterable

from bs4 import BeautifulSoup

from jobalert.domain.models import FilterCriteria, Posting

from .base import BaseAdapter


class MonsterAdapter(BaseAdapter):
    SOURCE_NAME = "Monster"
    BASE_URL = "https://www.monsterindia.com"

    def build_search_url(self, criteria: FilterCriteria) -> str:
        path = self._slug(" ".join(criteria.keywords)) + "-jobs"
        if criteria.location:
            path += f"-in-{self._slug(criteria.location)}"
        return f"{self.BASE_URL}/search/{path}"

    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        for card in soup.select("section.card-content"):
            posting = self._build_posting(
                title=self._text(card, "h3.medium"),
                company=self._text(card, "div.company"),
                link=self._href(card, "h3.medium a") or self._href(card, "a"),
                snippet=self._text(card, ".job-description"),
                experience_text=self._text(card, ".exp"),
                salary_text=self._text(card, ".package"),
            )
            if posting is not None:
                yield posting
