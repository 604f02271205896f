"""Embedding generation through the OpenAI embeddings endpoint.

The ``AsyncOpenAI`` client is injected so the application can share one
instance and tests can pass a fake.  A ``None`` client means no API key was
configured.
"""

import logging
from typing import Any

from ..config import get_embedding_model
from ..errors import EmbeddingFailed, InvalidInput, ProviderUnconfigured

logger = logging.getLogger(__name__)

# Provider input limit; longer text is truncated rather than rejected.
MAX_EMBEDDING_CHARS = 8000


class EmbeddingClient:
    """Turn free text into an embedding vector."""

    def __init__(self, client: Any | None, *, model: str | None = None):
        self._client = client
        self.model = model or get_embedding_model()

    async def generate_embedding(self, text: str) -> list[float]:
        """Embed *text* with a single provider call (no retry).

        Raises ``InvalidInput`` for blank text, ``ProviderUnconfigured`` when
        no client is available and ``EmbeddingFailed`` for any provider error.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInput("Text is required for embedding generation")
        if self._client is None:
            raise ProviderUnconfigured()

        cleaned = text.strip()[:MAX_EMBEDDING_CHARS]
        logger.info("Generating embedding for text (%d chars)", len(cleaned))

        try:
            resp = await self._client.embeddings.create(
                model=self.model,
                input=cleaned,
                encoding_format="float",
            )
            embedding = list(resp.data[0].embedding)
        except Exception as exc:
            logger.exception("Embedding request failed")
            raise EmbeddingFailed(f"Failed to generate embedding: {exc}") from exc

        logger.info("Generated embedding with %d dimensions", len(embedding))
        return embedding

    async def generate_post_embedding(
        self, content: str, username: str | None = None
    ) -> list[float]:
        """Embed a post, prefixed with its author when known."""
        text = content
        if username:
            text = f"Author: {username}\nContent: {content}"
        return await self.generate_embedding(text)

    async def generate_user_embedding(self, username: str, email: str) -> list[float]:
        """Embed a user profile from its identity fields."""
        return await self.generate_embedding(f"Username: {username}\nEmail: {email}")
