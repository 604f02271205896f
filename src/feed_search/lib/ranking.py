"""Similarity ranking of pre-fetched candidates against a query vector.

The full candidate batch is scanned linearly; there is no index.
"""

import logging
from collections.abc import Iterable, Sequence

from ..errors import DimensionMismatch
from .candidates.base import Candidate, RankedResult
from .embeddings import cosine_similarity

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.7
DEFAULT_LIMIT = 10


def rank(
    query_vector: Sequence[float],
    candidates: Iterable[Candidate],
    threshold: float = DEFAULT_THRESHOLD,
    limit: int = DEFAULT_LIMIT,
) -> list[RankedResult]:
    """Score *candidates* by cosine similarity and return the best matches.

    Candidates without a vector, or whose vector length differs from the
    query's, are skipped.  Results scoring below *threshold* are dropped; the
    rest are ordered by descending similarity (ties keep their input order)
    and truncated to *limit*.
    """
    scored: list[RankedResult] = []
    skipped = 0
    for candidate in candidates:
        if candidate.vector is None:
            continue
        try:
            similarity = cosine_similarity(query_vector, candidate.vector)
        except DimensionMismatch:
            skipped += 1
            continue
        if similarity >= threshold:
            scored.append(RankedResult.from_candidate(candidate, similarity))

    if skipped:
        logger.warning(
            "Skipped %d candidates with mismatched embedding dimensions", skipped
        )

    scored.sort(key=lambda r: r.similarity, reverse=True)
    return scored[: max(limit, 0)]
