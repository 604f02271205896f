"""User candidate source.

Users are ranked on an embedding of their identity fields.  The email address
feeds the embedding but is never returned in search results.
"""

import logging

from ...errors import EmbeddingFailed, ProviderUnconfigured
from ..elasticsearch import extract_embedding, iter_hit_sources, unwrap_es_response
from ..embedding_client import EmbeddingClient
from .base import Candidate, CandidateSource

logger = logging.getLogger(__name__)

USERS_INDEX = "users"

# Fields exposed in search results (plus the embedding used for ranking).
PUBLIC_USER_FIELDS = ["id", "username", "profile_image", "bio", "created_at"]


async def fetch_users_with_embeddings(es, limit: int) -> list[Candidate]:
    """Return up to *limit* users whose ``embedding`` field is set."""
    query = {"bool": {"filter": [{"exists": {"field": "embedding"}}]}}

    resp = await es.search(
        index=USERS_INDEX,
        query=query,
        size=limit,
        _source=PUBLIC_USER_FIELDS + ["embedding"],
    )
    data = unwrap_es_response(resp)

    candidates: list[Candidate] = []
    for hit_id, src in iter_hit_sources(data):
        user_id = src.get("id") or hit_id
        if not user_id:
            continue
        payload = {k: v for k, v in src.items() if k in PUBLIC_USER_FIELDS}
        candidates.append(
            Candidate(
                id=str(user_id),
                kind=USERS_INDEX,
                vector=extract_embedding(src),
                payload=payload,
            )
        )
    return candidates


async def store_user_embedding(
    es,
    embedder: EmbeddingClient,
    user_id: str,
    username: str,
    email: str,
) -> bool:
    """Embed a user profile and save the vector on its document.

    Returns ``False`` (after logging) when the embedding could not be made.
    """
    try:
        vector = await embedder.generate_user_embedding(username, email)
    except (EmbeddingFailed, ProviderUnconfigured) as exc:
        logger.warning("Skipping embedding for user %s: %s", user_id, exc)
        return False

    await es.update(index=USERS_INDEX, id=user_id, doc={"embedding": vector})
    return True


class UserCandidateSource(CandidateSource):
    """Users with stored embeddings."""

    @property
    def name(self) -> str:
        return USERS_INDEX

    async def fetch(self, es, limit: int = 100) -> list[Candidate]:
        candidates = await fetch_users_with_embeddings(es, limit)
        logger.info("Found %d users with embeddings", len(candidates))
        return candidates
