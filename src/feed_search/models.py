from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NewsArticle(BaseModel):
    """A news article returned by AI web search, already sanitized."""

    title: str = Field(..., description="Headline, at most 200 characters plus a truncation marker")
    summary: str = Field(..., description="Short summary of the article")
    relevance: str = Field(..., description="Why the article matches the query")
    category: str = Field("World", description="Topic category reported by the provider")
    url: str | None = Field(None, description="Article URL, when the provider gave one")
    published_date: str | None = Field(None, description="Publication date (ISO 8601)")
    source: str | None = Field(None, description="Name of the news outlet")


class SearchHistoryEntry(BaseModel):
    """An append-only record of one completed search."""

    user_id: str = Field(..., description="Identity of the caller who searched")
    query: str = Field(..., description="The trimmed query as submitted")
    kind: str = Field(..., description="What was searched: news, posts or users")
    results: list[dict[str, Any]] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
