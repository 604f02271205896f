"""Post candidate source.

Fetches posts that carry a stored embedding from the ``posts`` index, and
writes embeddings back onto posts when they are created or edited.
"""

import logging

from ...errors import EmbeddingFailed, ProviderUnconfigured
from ..elasticsearch import extract_embedding, iter_hit_sources, unwrap_es_response
from ..embedding_client import EmbeddingClient
from .base import Candidate, CandidateSource

logger = logging.getLogger(__name__)

POSTS_INDEX = "posts"


async def fetch_posts_with_embeddings(es, limit: int) -> list[Candidate]:
    """Return up to *limit* posts whose ``embedding`` field is set.

    Hits that come back without a usable vector keep ``vector=None`` and are
    later ignored by the ranker.
    """
    query = {"bool": {"filter": [{"exists": {"field": "embedding"}}]}}

    resp = await es.search(index=POSTS_INDEX, query=query, size=limit)
    data = unwrap_es_response(resp)

    candidates: list[Candidate] = []
    for hit_id, src in iter_hit_sources(data):
        post_id = src.get("id") or hit_id
        if not post_id:
            continue
        payload = {k: v for k, v in src.items() if k != "embedding"}
        candidates.append(
            Candidate(
                id=str(post_id),
                kind=POSTS_INDEX,
                vector=extract_embedding(src),
                payload=payload,
            )
        )
    return candidates


async def store_post_embedding(
    es,
    embedder: EmbeddingClient,
    post_id: str,
    content: str,
    username: str | None = None,
) -> bool:
    """Embed a post and save the vector on its document.

    Embedding failures are logged and reported as ``False`` so the caller's
    create/update flow can continue with an unrankable post.
    """
    try:
        vector = await embedder.generate_post_embedding(content, username)
    except (EmbeddingFailed, ProviderUnconfigured) as exc:
        logger.warning("Skipping embedding for post %s: %s", post_id, exc)
        return False

    await es.update(index=POSTS_INDEX, id=post_id, doc={"embedding": vector})
    return True


class PostCandidateSource(CandidateSource):
    """Posts with stored embeddings."""

    @property
    def name(self) -> str:
        return POSTS_INDEX

    async def fetch(self, es, limit: int = 100) -> list[Candidate]:
        candidates = await fetch_posts_with_embeddings(es, limit)
        logger.info("Found %d posts with embeddings", len(candidates))
        return candidates
