"""Type-safe Pydantic models for Exa SDK search responses."""

from pydantic import BaseModel


class ExaSearchResult(BaseModel):
    """A single search result with its page text."""

    url: str
    title: str | None = None
    text: str | None = None
    score: float | None = None
    published_date: str | None = None


class ExaSearchResponse(BaseModel):
    """Response from a search-and-contents call."""

    query: str
    results: list[ExaSearchResult]
