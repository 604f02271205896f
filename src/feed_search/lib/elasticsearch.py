"""Shared Elasticsearch utilities.

Helpers for working with Elasticsearch responses that are used across
candidate sources and the search history store.
"""

import logging

from elastic_transport import ObjectApiResponse

logger = logging.getLogger(__name__)


def unwrap_es_response(resp) -> dict:
    """Unwrap an Elasticsearch response, handling both ObjectApiResponse and dict.

    Raises ``TypeError`` if the response type is unexpected.
    """
    if isinstance(resp, ObjectApiResponse):
        return resp.body
    elif isinstance(resp, dict):
        return resp
    else:
        logger.error("Unexpected Elasticsearch response type: %s", type(resp))
        raise TypeError(f"Unexpected Elasticsearch response type: {type(resp)}")


def iter_hit_sources(data: dict):
    """Yield ``(_id, _source)`` pairs from an unwrapped search response."""
    for hit in data.get("hits", {}).get("hits", []):
        yield hit.get("_id"), hit.get("_source") or {}


def extract_embedding(src: dict) -> tuple[float, ...] | None:
    """Return the stored ``embedding`` field as a tuple, or ``None`` if absent."""
    emb = src.get("embedding")
    if isinstance(emb, (list, tuple)) and emb:
        return tuple(float(x) for x in emb)
    return None
