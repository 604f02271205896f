"""Search entry points.

Entity search:
    query → embedding → candidate batch → similarity ranking → history

News search:
    query → AI web search → parsed articles → history

Each step awaits the previous one; nothing runs concurrently within a
request.  History is written only after a search succeeds.
"""

import logging

from ..errors import InvalidInput
from ..models import NewsArticle, SearchHistoryEntry
from .candidates import RankedResult, get_source
from .embedding_client import EmbeddingClient
from .history import record_search
from .news import NewsAggregator
from .ranking import DEFAULT_LIMIT, DEFAULT_THRESHOLD, rank

logger = logging.getLogger(__name__)

# Upper bound on stored entities scanned per entity search.
CANDIDATE_BATCH_SIZE = 100


def normalize_query(query) -> str:
    """Trim *query*, rejecting anything that is not a non-blank string."""
    if not isinstance(query, str) or not query.strip():
        raise InvalidInput("Search query is required")
    return query.strip()


class SearchOrchestrator:
    """Compose embedding, ranking and news aggregation for one request."""

    def __init__(
        self,
        es,
        embedder: EmbeddingClient,
        aggregator: NewsAggregator,
        *,
        candidate_batch_size: int = CANDIDATE_BATCH_SIZE,
    ):
        self.es = es
        self.embedder = embedder
        self.aggregator = aggregator
        self.candidate_batch_size = candidate_batch_size

    async def search_entities(
        self,
        user_id: str,
        kind: str,
        query: str,
        limit: int = DEFAULT_LIMIT,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> tuple[str, list[RankedResult]]:
        """Rank stored *kind* entities against *query*.

        Returns the normalized query and the ranked results.  The history
        entry keeps only identifiers and scores.
        """
        normalized = normalize_query(query)
        source = get_source(kind)
        logger.info("Semantic search for %s: %r", kind, normalized)

        query_vector = await self.embedder.generate_embedding(normalized)
        candidates = await source.fetch(self.es, self.candidate_batch_size)
        results = rank(query_vector, candidates, threshold=threshold, limit=limit)
        logger.info(
            "Found %d similar %s above threshold %s", len(results), kind, threshold
        )

        await record_search(
            self.es,
            SearchHistoryEntry(
                user_id=user_id,
                query=normalized,
                kind=kind,
                results=[{"id": r.id, "similarity": r.similarity} for r in results],
            ),
        )
        return normalized, results

    async def search_news(
        self, user_id: str, query: str
    ) -> tuple[str, list[NewsArticle]]:
        """Search news for *query* and record the full article list."""
        normalized = normalize_query(query)
        articles = await self.aggregator.search_news(normalized)

        await record_search(
            self.es,
            SearchHistoryEntry(
                user_id=user_id,
                query=normalized,
                kind="news",
                results=[a.model_dump() for a in articles],
            ),
        )
        return normalized, articles
