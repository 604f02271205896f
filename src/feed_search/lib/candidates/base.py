"""Base abstraction for candidate sources.

Each source has a unique name (the entity kind, e.g. ``posts``) and an async
`fetch` method that returns a bounded batch of `Candidate` objects from
Elasticsearch.  Sources are registered in a global registry so the search
orchestrator can look them up by kind.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ...errors import InvalidInput


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Candidate(BaseModel):
    """A stored entity eligible for similarity ranking."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier of the stored entity")
    kind: str = Field(..., description="Entity kind (name of the source that produced it)")
    vector: tuple[float, ...] | None = Field(
        None, description="Stored embedding; candidates without one are never ranked"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Original stored attributes, minus the embedding"
    )


class RankedResult(BaseModel):
    """A candidate paired with its similarity to the query."""

    id: str
    kind: str
    similarity: float
    document: dict[str, Any] = Field(
        default_factory=dict,
        description="The candidate payload merged with its similarity score",
    )

    @classmethod
    def from_candidate(cls, candidate: Candidate, similarity: float) -> "RankedResult":
        return cls(
            id=candidate.id,
            kind=candidate.kind,
            similarity=similarity,
            document={**candidate.payload, "id": candidate.id, "similarity": similarity},
        )


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class CandidateSource(ABC):
    """Abstract base class for named candidate sources.

    Subclasses must implement `name` (property) and `fetch`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name identifying this source (e.g. ``posts``)."""
        ...

    @abstractmethod
    async def fetch(self, es, limit: int = 100) -> list[Candidate]:
        """Fetch up to *limit* stored entities that carry an embedding.

        Parameters
        ----------
        es:
            An ``AsyncElasticsearch`` client instance.
        limit:
            Maximum number of candidates to return.

        Returns
        -------
        list[Candidate]
        """
        ...


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_sources: dict[str, CandidateSource] = {}


def register_source(source: CandidateSource) -> None:
    """Register a source instance by its name."""
    _sources[source.name] = source


def get_source(kind: str) -> CandidateSource:
    """Look up a registered source by kind.  Raises ``InvalidInput`` if unknown."""
    source = _sources.get(kind)
    if source is None:
        raise InvalidInput(f"Unknown search kind: {kind}")
    return source


def list_sources() -> list[str]:
    """Return the names of all registered sources."""
    return list(_sources.keys())
