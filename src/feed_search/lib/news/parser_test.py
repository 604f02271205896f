"""Tests for tolerant news-article parsing."""

import json
from datetime import datetime

import pytest

from .parser import (
    ParsedArticles,
    ParseFailure,
    extract_articles,
    find_json_candidates,
    find_json_object,
    normalize_article,
    parse_news_payload,
)


class TestFindJsonObject:
    def test_widest_brace_span(self):
        text = 'Here you go: {"a": {"b": 1}} hope that helps'
        assert find_json_object(text) == '{"a": {"b": 1}}'

    def test_none_without_braces(self):
        assert find_json_object("no braces here") is None

    def test_none_when_closing_before_opening(self):
        assert find_json_object("} backwards {") is None


class TestFindJsonCandidates:
    def test_array_reply_tried_before_object(self):
        text = '[{"title": "A"}, {"title": "B"}]'
        assert find_json_candidates(text) == [text, '{"title": "A"}, {"title": "B"}']

    def test_object_reply_skips_array_span(self):
        text = '{"articles": [{"title": "A"}]}'
        assert find_json_candidates(text) == [text]

    def test_nothing_to_decode(self):
        assert find_json_candidates("plain words") == []


class TestParseNewsPayload:
    def test_articles_key(self):
        result = parse_news_payload('{"articles": [{"title": "A"}]}')
        assert isinstance(result, ParsedArticles)
        assert result.strategy == "articles"
        assert result.records == [{"title": "A"}]

    def test_results_key(self):
        result = parse_news_payload('{"results": [{"Title": "X"}]}')
        assert result.strategy == "results"

    def test_news_key(self):
        result = parse_news_payload('{"news": [{"title": "N"}]}')
        assert result.strategy == "news"

    def test_articles_preferred_over_results(self):
        text = '{"results": [{"title": "R"}], "articles": [{"title": "A"}]}'
        result = parse_news_payload(text)
        assert result.records == [{"title": "A"}]

    def test_non_list_articles_falls_through(self):
        text = '{"articles": "none", "news": [{"title": "N"}]}'
        result = parse_news_payload(text)
        assert result.strategy == "news"

    def test_bare_array(self):
        result = parse_news_payload('[{"title": "A"}, {"title": "B"}]')
        assert isinstance(result, ParsedArticles)
        assert result.strategy == "list"
        assert result.records == [{"title": "A"}, {"title": "B"}]

    def test_bracketed_prose_falls_back_to_object(self):
        text = 'See [1] below: {"articles": [{"title": "A"}]} and [2].'
        result = parse_news_payload(text)
        assert result.strategy == "articles"
        assert result.records == [{"title": "A"}]

    def test_titled_values_fallback(self):
        text = json.dumps({
            "first": {"title": "One"},
            "second": {"Title": "Two"},
            "meta": {"count": 2},
            "note": "ignored",
        })
        result = parse_news_payload(text)
        assert result.strategy == "titled_values"
        assert result.records == [{"title": "One"}, {"Title": "Two"}]

    def test_non_object_records_dropped(self):
        result = parse_news_payload('{"articles": [{"title": "A"}, "junk", null, 3]}')
        assert result.records == [{"title": "A"}]

    def test_no_json_is_failure(self):
        result = parse_news_payload("not json at all")
        assert isinstance(result, ParseFailure)
        assert "no JSON" in result.reason

    def test_invalid_json_is_failure(self):
        result = parse_news_payload("{articles: [oops}")
        assert isinstance(result, ParseFailure)
        assert "invalid JSON" in result.reason

    def test_non_text_is_failure(self):
        assert isinstance(parse_news_payload(None), ParseFailure)


class TestNormalizeArticle:
    def test_lowercase_fields(self):
        article = normalize_article({
            "title": "Rates rise",
            "summary": "The bank raised rates.",
            "relevance": "Mentions rates",
            "category": "Business",
            "url": "https://example.com/rates",
            "publishedDate": "2024-05-01T00:00:00Z",
            "source": "Example News",
        })
        assert article.title == "Rates rise"
        assert article.summary == "The bank raised rates."
        assert article.relevance == "Mentions rates"
        assert article.category == "Business"
        assert article.url == "https://example.com/rates"
        assert article.published_date == "2024-05-01T00:00:00Z"
        assert article.source == "Example News"

    def test_capitalized_fields(self):
        article = normalize_article({
            "Title": "Big match",
            "Summary": "A close game.",
            "Relevance": "Sports query",
            "Category": "Sports",
            "URL": "https://example.com/match",
            "PublishedDate": "2024-06-01",
            "Source": "Daily Sport",
        })
        assert article.title == "Big match"
        assert article.summary == "A close game."
        assert article.relevance == "Sports query"
        assert article.category == "Sports"
        assert article.url == "https://example.com/match"
        assert article.published_date == "2024-06-01"
        assert article.source == "Daily Sport"

    def test_defaults_for_missing_fields(self):
        article = normalize_article({})
        assert article.title == "Untitled"
        assert article.summary == "No summary available"
        assert article.relevance == "Related to search query"
        assert article.category == "World"
        assert article.source == "Unknown"
        assert article.url is None
        # Defaults to "now"
        assert datetime.fromisoformat(article.published_date).year >= 2024

    def test_empty_values_use_defaults(self):
        article = normalize_article({"title": "", "Title": "Fallback", "summary": ""})
        assert article.title == "Fallback"
        assert article.summary == "No summary available"

    def test_fields_are_sanitized(self):
        article = normalize_article({
            "title": "T" * 300,
            "summary": "Line one\nline two<script>x()</script>",
            "source": "  Wire   Service ",
        })
        assert article.title == "T" * 200 + "..."
        assert article.summary == "Line oneline two"
        assert article.source == "Wire Service"

    def test_non_string_values_become_empty(self):
        article = normalize_article({"title": 123, "category": ["World"]})
        assert article.title == ""
        assert article.category == ""


class TestExtractArticles:
    def test_articles_key(self):
        articles = extract_articles('{"articles":[{"title":"A"},{"title":"B"}]}')
        assert [a.title for a in articles] == ["A", "B"]

    def test_results_key_with_capitalized_title(self):
        articles = extract_articles('{"results":[{"Title":"X"}]}')
        assert len(articles) == 1
        assert articles[0].title == "X"

    def test_bare_array_reply(self):
        articles = extract_articles('[{"title": "A"}, {"Title": "B"}]')
        assert [a.title for a in articles] == ["A", "B"]

    def test_not_json(self):
        assert extract_articles("not json at all") == []

    def test_broken_json(self):
        assert extract_articles('{"articles": [{"title": "A"},') == []

    def test_json_wrapped_in_prose_and_code_fence(self):
        text = (
            "Sure! Here are the latest articles:\n```json\n"
            '{"articles": [{"Title": "Launch", "Category": "Science"}]}\n'
            "```\nLet me know if you need more."
        )
        articles = extract_articles(text)
        assert len(articles) == 1
        assert articles[0].title == "Launch"
        assert articles[0].category == "Science"

    def test_object_without_articles(self):
        assert extract_articles('{"status": "ok"}') == []

    @pytest.mark.parametrize("text", ["", "{}", "{ }"])
    def test_empty_shapes(self, text):
        assert extract_articles(text) == []
