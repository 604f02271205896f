"""Append-only search history stored in the ``search_history`` index."""

import logging

from ..models import SearchHistoryEntry
from .elasticsearch import iter_hit_sources, unwrap_es_response

logger = logging.getLogger(__name__)

HISTORY_INDEX = "search_history"

# user_id and kind are matched with `term` filters, so they must not be analyzed.
# Result lists vary by search kind and are stored without indexing.
HISTORY_MAPPINGS = {
    "properties": {
        "user_id": {"type": "keyword"},
        "query": {"type": "text"},
        "kind": {"type": "keyword"},
        "created_at": {"type": "date"},
        "results": {"type": "object", "enabled": False},
    }
}


async def ensure_history_index(es) -> bool:
    """Create the history index with its explicit mapping if it is missing.

    Returns ``True`` when the index was created.
    """
    if await es.indices.exists(index=HISTORY_INDEX):
        return False
    await es.indices.create(index=HISTORY_INDEX, mappings=HISTORY_MAPPINGS)
    logger.info("Created %s index", HISTORY_INDEX)
    return True


async def record_search(es, entry: SearchHistoryEntry) -> None:
    """Persist one history entry.  Entries are never updated afterwards."""
    await es.index(index=HISTORY_INDEX, document=entry.model_dump(mode="json"))
    logger.info(
        "Recorded %s search for user %s (%d results)",
        entry.kind,
        entry.user_id,
        len(entry.results),
    )


async def list_history(
    es, user_id: str, page: int = 1, limit: int = 20
) -> tuple[list[SearchHistoryEntry], int]:
    """Return one page of *user_id*'s history, newest first, and the total."""
    query = {"bool": {"filter": [{"term": {"user_id": user_id}}]}}
    offset = (max(page, 1) - 1) * limit

    resp = await es.search(
        index=HISTORY_INDEX,
        query=query,
        sort=[{"created_at": "desc"}],
        from_=offset,
        size=limit,
    )
    data = unwrap_es_response(resp)
    entries = [SearchHistoryEntry(**src) for _, src in iter_hit_sources(data)]

    count_resp = await es.count(index=HISTORY_INDEX, query=query)
    total = unwrap_es_response(count_resp).get("count", 0)
    return entries, total
