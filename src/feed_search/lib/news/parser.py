"""Tolerant extraction of news articles from AI web-search output.

The provider is asked for a JSON object with an ``articles`` array, but the
reply is generated text: the JSON may be wrapped in prose, use a different
top-level key, or use capitalized field names.  Parsing proceeds in two
steps:

1. :func:`parse_news_payload` locates and decodes the JSON and resolves the
   list of raw records, returning either :class:`ParsedArticles` or
   :class:`ParseFailure`.
2. :func:`normalize_article` maps each raw record onto a sanitized
   :class:`~feed_search.models.NewsArticle`.

A parse failure is an expected outcome and yields an empty list, never an
exception.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ...models import NewsArticle, utc_now
from ..sanitize import sanitize_api_text

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedArticles:
    records: list[dict[str, Any]] = field(default_factory=list)
    strategy: str = ""


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = ParsedArticles | ParseFailure


# ---------------------------------------------------------------------------
# Record list strategies, tried in order
# ---------------------------------------------------------------------------

def _top_level_list(parsed: Any) -> list | None:
    return parsed if isinstance(parsed, list) else None


def _keyed_list(key: str) -> Callable[[Any], list | None]:
    def strategy(parsed: Any) -> list | None:
        if isinstance(parsed, dict) and isinstance(parsed.get(key), list):
            return parsed[key]
        return None

    return strategy


def _titled_values(parsed: Any) -> list | None:
    if not isinstance(parsed, dict):
        return None
    return [
        value
        for value in parsed.values()
        if isinstance(value, dict) and (value.get("title") or value.get("Title"))
    ]


EXTRACTION_STRATEGIES: list[tuple[str, Callable[[Any], list | None]]] = [
    ("list", _top_level_list),
    ("articles", _keyed_list("articles")),
    ("results", _keyed_list("results")),
    ("news", _keyed_list("news")),
    ("titled_values", _titled_values),
]


def _widest_span(text: str, opening: str, closing: str) -> str | None:
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def find_json_object(text: str) -> str | None:
    """Return the widest ``{...}`` span in *text*, or ``None``."""
    return _widest_span(text, "{", "}")


def find_json_candidates(text: str) -> list[str]:
    """Spans worth decoding, most likely first.

    A bare array reply is only considered when its ``[`` comes before the
    first ``{``; the widest object span is always tried.
    """
    spans: list[str] = []
    array_start = text.find("[")
    object_start = text.find("{")
    if array_start != -1 and (object_start == -1 or array_start < object_start):
        array_span = _widest_span(text, "[", "]")
        if array_span is not None:
            spans.append(array_span)
    object_span = find_json_object(text)
    if object_span is not None:
        spans.append(object_span)
    return spans


def parse_news_payload(text: str) -> ParseResult:
    """Locate, decode and resolve the article records in a provider reply."""
    if not isinstance(text, str):
        return ParseFailure("response is not text")

    candidates = find_json_candidates(text)
    if not candidates:
        return ParseFailure("no JSON object found")

    parsed = None
    error = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
            break
        except ValueError as exc:
            error = exc
    else:
        return ParseFailure(f"invalid JSON: {error}")

    for name, strategy in EXTRACTION_STRATEGIES:
        records = strategy(parsed)
        if records is not None:
            return ParsedArticles(
                records=[r for r in records if isinstance(r, dict)],
                strategy=name,
            )
    return ParseFailure("no article list found")


# ---------------------------------------------------------------------------
# Field normalization
# ---------------------------------------------------------------------------

# Output field -> (accepted input keys, default, max length)
FIELD_SPECS: dict[str, tuple[tuple[str, ...], str | None, int]] = {
    "title": (("title", "Title"), "Untitled", 200),
    "summary": (("summary", "Summary"), "No summary available", 2000),
    "relevance": (("relevance", "Relevance"), "Related to search query", 500),
    "category": (("category", "Category"), "World", 100),
    "url": (("url", "URL"), None, 2000),
    "published_date": (("publishedDate", "PublishedDate"), None, 100),
    "source": (("source", "Source"), "Unknown", 100),
}


def _first_present(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def normalize_article(record: dict[str, Any]) -> NewsArticle:
    """Build a sanitized ``NewsArticle`` from one raw provider record."""
    fields: dict[str, str | None] = {}
    for name, (keys, default, max_length) in FIELD_SPECS.items():
        value = _first_present(record, keys)
        if value is None:
            value = default
        if name == "published_date" and value is None:
            value = utc_now().isoformat()
        fields[name] = sanitize_api_text(value, max_length) if value is not None else None
    return NewsArticle(**fields)


def extract_articles(text: str) -> list[NewsArticle]:
    """Return every article found in *text*; ``[]`` when nothing parses."""
    result = parse_news_payload(text)
    if isinstance(result, ParseFailure):
        logger.warning("Could not parse news articles: %s", result.reason)
        return []

    logger.info(
        "Parsed %d news records using the %r strategy",
        len(result.records),
        result.strategy,
    )
    return [normalize_article(record) for record in result.records]
