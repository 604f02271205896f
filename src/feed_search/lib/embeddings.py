"""Shared vector math for embedding similarity."""

import math
from collections.abc import Sequence

from ..errors import DimensionMismatch


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Return the cosine similarity of two equal-length vectors.

    Raises :class:`DimensionMismatch` when the lengths differ.  A zero vector
    has no direction, so any comparison involving one scores ``0.0``.
    """
    if len(vec_a) != len(vec_b):
        raise DimensionMismatch(
            f"Vectors must have the same length ({len(vec_a)} != {len(vec_b)})"
        )

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for a, b in zip(vec_a, vec_b):
        dot += a * b
        norm_a += a * a
        norm_b += b * b

    norm_a = math.sqrt(norm_a)
    norm_b = math.sqrt(norm_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot / (norm_a * norm_b)
