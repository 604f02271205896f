"""AI news aggregation: provider call, tolerant parsing and sanitization."""

from .aggregator import MAX_ARTICLES, NewsAggregator
from .parser import ParsedArticles, ParseFailure, extract_articles, parse_news_payload

__all__ = [
    "MAX_ARTICLES",
    "NewsAggregator",
    "ParsedArticles",
    "ParseFailure",
    "extract_articles",
    "parse_news_payload",
]
