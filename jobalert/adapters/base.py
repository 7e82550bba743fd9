"""Base adapter class with shared functionality for all job board adapters.

This module provides the abstract base class every board adapter implements,
along with shared HTTP fetching, HTML parsing helpers and the keyword
prefilter applied before postings leave an adapter.
"""

import time
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from urllib.parse import quote, urljoin

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag
from pydantic import ValidationError

from jobalert.domain.models import FilterCriteria, Posting
from jobalert.logging import get_logger
from jobalert.utils.text import collapse_whitespace

from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; JobAlert/1.0)"


class BaseAdapter(ABC):
    """Base class for all job board adapters.

    Subclasses describe how to reach one board (``build_search_url``) and how
    to map its result cards into postings (``parse_postings``). The public
    ``fetch`` method wraps both with error isolation: it never raises, and a
    failing board yields an empty list.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
        max_postings: Maximum postings to return per board (0 = unlimited)
    """

    SOURCE_NAME = ""
    BASE_URL = ""

    def __init__(
        self,
        timeout: int = 20,
        user_agent: str = DEFAULT_USER_AGENT,
        max_postings: int = 50,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize adapter with HTTP settings.

        Raises:
            AdapterConfigurationError: If timeout is outside 1-300 seconds or
                user_agent is empty
        """
        if not 1 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 1 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self.max_postings = max_postings

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @property
    def name(self) -> str:
        return self.SOURCE_NAME or type(self).__name__

    def fetch(self, criteria: FilterCriteria) -> List[Posting]:
        """Harvest postings matching at least one keyword.

        Never raises: network, HTTP and parse failures are logged and turned
        into an empty list.

        Args:
            criteria: Filter criteria supplying keywords and location

        Returns:
            Postings from this board whose title, snippet or company contains
            a keyword, in page order
        """
        started = time.monotonic()
        try:
            url = self.build_search_url(criteria)
            soup = self._fetch_page(url)
            candidates = list(self.parse_postings(soup))
        except AdapterError as e:
            logger.warning(
                f"{self.name} failed: {e}",
                extra={
                    "event": "source.fetch.failed",
                    "source": self.name,
                    "error_type": type(e).__name__,
                },
            )
            return []
        except Exception as e:
            logger.error(
                f"{self.name} failed with unexpected error: {e}",
                extra={
                    "event": "source.fetch.failed",
                    "source": self.name,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            return []

        postings = [p for p in candidates if criteria.matches_keywords(p.searchable_text)]
        postings = self._truncate(postings)

        logger.info(
            f"Fetched {len(postings)} postings from {self.name}",
            extra={
                "event": "source.fetch.succeeded",
                "source": self.name,
                "parsed": len(candidates),
                "kept": len(postings),
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return postings

    @abstractmethod
    def build_search_url(self, criteria: FilterCriteria) -> str:
        """Build the single results page URL for the criteria."""

    @abstractmethod
    def parse_postings(self, soup: BeautifulSoup) -> Iterable[Posting]:
        """Map result cards on the page to postings.

        Implementations should call ``_build_posting`` per card so malformed
        cards are skipped rather than failing the whole page.
        """

    def _fetch_page(self, url: str) -> BeautifulSoup:
        """GET a results page and parse it.

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On an empty body
        """
        logger.debug(
            f"HTTP GET {url}",
            extra={"event": "source.fetch.request", "source": self.name, "url": url},
        )
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            raise AdapterHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )
        if not response.text or not response.text.strip():
            raise AdapterResponseError(f"Empty response body from {url}")

        return BeautifulSoup(response.text, "html.parser")

    def _build_posting(
        self,
        title: str,
        company: str,
        link: Optional[str],
        snippet: str = "",
        experience_text: Optional[str] = None,
        salary_text: Optional[str] = None,
    ) -> Optional[Posting]:
        """Create a posting from card fields, or None if the card is incomplete.

        Cards without a title, company or link are dropped.
        """
        if not title or not company or not link:
            return None
        try:
            return Posting(
                title=title,
                company=company,
                source=self.name,
                url=self._absolute_url(link),
                snippet=snippet,
                experience_text=experience_text,
                salary_text=salary_text,
            )
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {self.name} card",
                extra={"event": "source.card.skipped", "source": self.name, "error": str(e)},
            )
            return None

    def _absolute_url(self, link: str) -> str:
        return urljoin(self.BASE_URL, link.strip())

    @staticmethod
    def _text(card: Tag, selector: str) -> str:
        """Whitespace-collapsed text of the first element matching selector."""
        element = card.select_one(selector)
        return collapse_whitespace(element.get_text(" ")) if element else ""

    @staticmethod
    def _href(card: Tag, selector: str = "a") -> Optional[str]:
        element = card.select_one(selector)
        if element is None:
            return None
        href = element.get("href")
        return href.strip() if isinstance(href, str) and href.strip() else None

    @staticmethod
    def _slug(value: str) -> str:
        """Path-safe slug: ``"React Native"`` -> ``"react-native"``."""
        return quote("-".join(value.lower().split()), safe="-")

    def _truncate(self, postings: List[Posting]) -> List[Posting]:
        if self.max_postings > 0 and len(postings) > self.max_postings:
            logger.warning(
                "Truncating postings to max_postings limit",
                extra={"source": self.name, "total": len(postings), "max": self.max_postings},
            )
            return postings[: self.max_postings]
        return postings
