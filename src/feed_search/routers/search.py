"""Search router – semantic entity search, AI news search and history.

POST /search/news
    AI web search for news articles about a query.

POST /search/posts, POST /search/users
    Rank stored posts or users by embedding similarity to a query.

GET /search/history
    The caller's past searches, newest first.

POST /search/analyze, POST /search/suggestions
    Chat-completion helpers for post authors.
"""

import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from ..errors import SearchError
from ..lib.assistant import analyze_content, generate_content_suggestions
from ..lib.embedding_client import EmbeddingClient
from ..lib.history import list_history
from ..lib.news import NewsAggregator
from ..lib.search import SearchOrchestrator
from ..models import NewsArticle, SearchHistoryEntry
from ..security import CallerId, verify_api_key

router = APIRouter(
    prefix="/search", tags=["search"], dependencies=[Depends(verify_api_key)]
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class NewsSearchRequest(BaseModel):
    query: str = Field(..., description="What to search the news for")


class EntitySearchRequest(BaseModel):
    query: str = Field(..., description="Free-text search query")
    limit: int = Field(10, ge=1, le=100, description="Maximum number of results")
    threshold: float = Field(
        0.7, ge=0, le=1, description="Minimum cosine similarity for a result"
    )


class NewsSearchResponse(BaseModel):
    query: str
    count: int
    results: list[NewsArticle]


class EntitySearchResponse(BaseModel):
    """Ranked entities; each result is the stored document plus ``similarity``."""

    query: str
    count: int
    results: list[dict[str, Any]]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class HistoryResponse(BaseModel):
    results: list[SearchHistoryEntry]
    pagination: Pagination


class AnalyzeRequest(BaseModel):
    content: str


class AnalyzeResponse(BaseModel):
    analysis: str


class SuggestionsRequest(BaseModel):
    topic: str


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_ai_client(request: Request):
    """The shared ``AsyncOpenAI`` client, or ``None`` when not configured."""
    return getattr(request.app.state, "openai", None)


def get_orchestrator(request: Request) -> SearchOrchestrator:
    client = get_ai_client(request)
    return SearchOrchestrator(
        request.app.state.es,
        EmbeddingClient(client),
        NewsAggregator(client),
    )


def _http_error(exc: Exception, what: str) -> HTTPException:
    """Translate a failure into the HTTP error returned to the caller."""
    if isinstance(exc, SearchError):
        if exc.status_code >= 500:
            logger.error("%s failed: %s", what, exc.message)
        return HTTPException(status_code=exc.status_code, detail=exc.message)
    logger.exception("%s failed", what)
    return HTTPException(status_code=502, detail="Elasticsearch request failed")


async def _search_entities(
    request: Request, caller_id: str, kind: str, payload: EntitySearchRequest
) -> EntitySearchResponse:
    orchestrator = get_orchestrator(request)
    try:
        query, results = await orchestrator.search_entities(
            caller_id,
            kind,
            payload.query,
            limit=payload.limit,
            threshold=payload.threshold,
        )
    except Exception as exc:
        raise _http_error(exc, f"Semantic {kind} search") from exc

    return EntitySearchResponse(
        query=query,
        count=len(results),
        results=[r.document for r in results],
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/news", response_model=NewsSearchResponse)
async def search_news(
    request: Request, payload: NewsSearchRequest, caller_id: CallerId
) -> NewsSearchResponse:
    """Search the web for up to five news articles about the query."""
    orchestrator = get_orchestrator(request)
    try:
        query, articles = await orchestrator.search_news(caller_id, payload.query)
    except Exception as exc:
        raise _http_error(exc, "News search") from exc

    return NewsSearchResponse(query=query, count=len(articles), results=articles)


@router.post("/posts", response_model=EntitySearchResponse)
async def search_posts(
    request: Request, payload: EntitySearchRequest, caller_id: CallerId
) -> EntitySearchResponse:
    """Semantic search for posts using embeddings."""
    return await _search_entities(request, caller_id, "posts", payload)


@router.post("/users", response_model=EntitySearchResponse)
async def search_users(
    request: Request, payload: EntitySearchRequest, caller_id: CallerId
) -> EntitySearchResponse:
    """Semantic search for users using embeddings."""
    return await _search_entities(request, caller_id, "users", payload)


@router.get("/history", response_model=HistoryResponse)
async def search_history(
    request: Request,
    caller_id: CallerId,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> HistoryResponse:
    """Return the caller's search history, newest first."""
    try:
        entries, total = await list_history(request.app.state.es, caller_id, page, limit)
    except Exception as exc:
        raise _http_error(exc, "Search history lookup") from exc

    return HistoryResponse(
        results=entries,
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=math.ceil(total / limit)
        ),
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def search_analyze(
    request: Request, payload: AnalyzeRequest, caller_id: CallerId
) -> AnalyzeResponse:
    """Summarize a piece of content and list its key topics."""
    try:
        analysis = await analyze_content(get_ai_client(request), payload.content)
    except Exception as exc:
        raise _http_error(exc, "Content analysis") from exc
    return AnalyzeResponse(analysis=analysis)


@router.post("/suggestions", response_model=SuggestionsResponse)
async def search_suggestions(
    request: Request, payload: SuggestionsRequest, caller_id: CallerId
) -> SuggestionsResponse:
    """Suggest post ideas for a topic."""
    try:
        suggestions = await generate_content_suggestions(
            get_ai_client(request), payload.topic
        )
    except Exception as exc:
        raise _http_error(exc, "Suggestion generation") from exc
    return SuggestionsResponse(suggestions=suggestions)
