"""Core domain models for harvested postings and filter criteria.

This module defines the data structures shared by every pipeline stage:
- Posting: one job listing produced by a source adapter
- FilterCriteria: the immutable per-run filter configuration
"""

from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from jobalert.utils.identity import compute_identity
from jobalert.utils.text import collapse_whitespace


class Posting(BaseModel):
    """A harvested job listing.

    The identity is computed once at construction: the canonical URL when
    the source exposes one, otherwise a key derived from title and company.
    It is the only part of a posting that outlives a pipeline run.
    """

    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Hiring company")
    source: str = Field(..., description="Name of the job board the posting came from")
    url: Optional[str] = Field(None, description="Canonical link to the posting")
    snippet: str = Field("", description="Short description shown on the results page")
    experience_text: Optional[str] = Field(
        None, description="Raw experience requirement text, if the board shows one"
    )
    salary_text: Optional[str] = Field(
        None, description="Raw salary text, if the board shows one"
    )
    identity: str = Field("", description="Deduplication key (URL or title+company)")

    @field_validator("title", "company", "source")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Collapse whitespace and reject empty values."""
        cleaned = collapse_whitespace(v)
        if not cleaned:
            raise ValueError("Field cannot be empty or whitespace-only")
        return cleaned

    @field_validator("snippet")
    @classmethod
    def clean_snippet(cls, v: Optional[str]) -> str:
        return collapse_whitespace(v or "")

    @field_validator("url", "experience_text", "salary_text")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank optional text as absent."""
        if v is None:
            return None
        cleaned = collapse_whitespace(v)
        return cleaned or None

    @model_validator(mode="after")
    def assign_identity(self):
        if not self.identity:
            self.identity = compute_identity(self.url, self.title, self.company)
        return self

    @property
    def searchable_text(self) -> str:
        """Text the keyword predicate runs against."""
        return f"{self.title} {self.snippet} {self.company}"

    model_config = {"json_schema_extra": {"example": {
        "title": "Frontend Developer (React)",
        "company": "Example Tech",
        "source": "Indeed",
        "url": "https://in.indeed.com/viewjob?jk=abc123",
        "snippet": "Build React and Tailwind interfaces for our dashboard.",
        "experience_text": "2-4 years",
        "salary_text": "₹6,00,000 - ₹9,00,000 a year",
        "identity": "https://in.indeed.com/viewjob?jk=abc123",
    }}}


class FilterCriteria(BaseModel):
    """Immutable filter configuration for one pipeline run."""

    keywords: Tuple[str, ...] = Field(
        ..., min_length=1, description="Any keyword must appear in the posting text"
    )
    location: str = Field("", description="Location used to build source search URLs")
    min_experience: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("min_experience", "min_experience_years"),
        description="Reject postings asking for fewer years than this",
    )
    salary_min: int = Field(
        0, ge=0, description="Reject postings whose parsed salary is below this floor"
    )

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Strip, lowercase and deduplicate keywords, keeping their order."""
        normalized = []
        for keyword in v:
            stripped = keyword.strip().lower()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        if not normalized:
            raise ValueError("At least one non-empty keyword is required")
        return tuple(normalized)

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: str) -> str:
        return v.strip()

    def matches_keywords(self, text: str) -> bool:
        """Case-insensitive substring match of any keyword against text."""
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)

    model_config = {"frozen": True}
