"""Candidate sources for semantic entity search.

Provides an abstraction for named sources of stored entities (posts, users)
that the search orchestrator ranks by embedding similarity.
"""

from .base import (
    Candidate,
    CandidateSource,
    RankedResult,
    get_source,
    list_sources,
    register_source,
)
from .posts import PostCandidateSource, store_post_embedding
from .users import UserCandidateSource, store_user_embedding

# Register built-in sources
_posts = PostCandidateSource()
register_source(_posts)

_users = UserCandidateSource()
register_source(_users)

__all__ = [
    "Candidate",
    "CandidateSource",
    "RankedResult",
    "get_source",
    "list_sources",
    "register_source",
    "PostCandidateSource",
    "UserCandidateSource",
    "store_post_embedding",
    "store_user_embedding",
]
