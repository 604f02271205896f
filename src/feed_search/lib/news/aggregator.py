"""News search through the OpenAI Responses API ``web_search`` tool."""

import logging
from typing import Any

from ...config import get_search_model
from ...errors import EmptyProviderResponse, ProviderUnconfigured, translate_provider_error
from ...models import NewsArticle
from ..sanitize import sanitize_query
from .parser import extract_articles

logger = logging.getLogger(__name__)

MAX_ARTICLES = 5

NEWS_PROMPT = """Find {count} recent news articles about: {query}

For each article found, provide:
1. Title - The actual headline
2. Summary - A 2-3 sentence summary
3. Relevance - Why it's relevant to the search
4. Category - One of: Politics, Technology, Business, Sports, Entertainment, Science, Health, or World
5. URL - The actual article URL
6. PublishedDate - Publication date in ISO format
7. Source - The news source name

Format the response as a JSON object with an "articles" array."""


def build_news_prompt(query: str, count: int = MAX_ARTICLES) -> str:
    return NEWS_PROMPT.format(count=count, query=query)


def response_text(resp: Any) -> str:
    """Pull the text payload out of a Responses API result."""
    text = getattr(resp, "output_text", None)
    if text is None and isinstance(resp, dict):
        text = resp.get("output_text")
    return text if isinstance(text, str) else ""


class NewsAggregator:
    """Search the web for news articles about a caller's query."""

    def __init__(self, client: Any | None, *, model: str | None = None):
        self._client = client
        self.model = model or get_search_model()

    async def search_news(self, query: str) -> list[NewsArticle]:
        """Return at most five sanitized articles about *query*.

        Query validation errors propagate unchanged.  Provider failures are
        translated into the error taxonomy; unparsable output yields ``[]``.
        """
        if self._client is None:
            raise ProviderUnconfigured()

        sanitized = sanitize_query(query)
        logger.info("Searching web for %r using model %s", sanitized, self.model)

        try:
            resp = await self._client.responses.create(
                model=self.model,
                tools=[{"type": "web_search"}],
                input=build_news_prompt(sanitized),
            )
        except Exception as exc:
            logger.exception("AI web search failed")
            raise translate_provider_error(
                exc, "Error searching news with OpenAI Web Search"
            ) from exc

        text = response_text(resp)
        if not text:
            raise EmptyProviderResponse()

        articles = extract_articles(text)
        logger.info("Found %d news articles", len(articles))
        return articles[:MAX_ARTICLES]
