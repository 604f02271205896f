"""Tests for the search orchestrator."""

import json
from types import SimpleNamespace

import pytest

from ..errors import EmbeddingFailed, InvalidInput, QueryTooShort
from .embedding_client import EmbeddingClient
from .news import NewsAggregator
from .search import CANDIDATE_BATCH_SIZE, SearchOrchestrator, normalize_query


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

class FakeEs:
    """Fake Elasticsearch serving fixed posts/users and recording history."""

    def __init__(self, posts=None, users=None):
        self._hits = {"posts": posts or [], "users": users or []}
        self.searches: list[dict] = []
        self.indexed: list[dict] = []

    async def search(self, *, index=None, query=None, size=None, **kwargs):
        self.searches.append({"index": index, "size": size})
        return {"hits": {"hits": self._hits.get(index, [])}}

    async def index(self, *, index, document):
        self.indexed.append({"index": index, "document": document})
        return {"result": "created"}


class FakeOpenAI:
    """Embeds every text to a fixed vector and answers web searches."""

    def __init__(self, vector=None, output_text="", embed_error=None):
        self.embedded: list[str] = []
        self.searched: list[str] = []
        outer = self

        class _Embeddings:
            async def create(self, *, model, input, encoding_format):
                outer.embedded.append(input)
                if embed_error is not None:
                    raise embed_error
                return SimpleNamespace(data=[SimpleNamespace(embedding=list(vector or [1.0, 0.0]))])

        class _Responses:
            async def create(self, *, model, tools, input):
                outer.searched.append(input)
                return SimpleNamespace(output_text=output_text)

        self.embeddings = _Embeddings()
        self.responses = _Responses()


def post_hit(post_id: str, embedding, **fields) -> dict:
    return {"_id": post_id, "_source": {"id": post_id, "embedding": embedding, **fields}}


def make_orchestrator(es, client) -> SearchOrchestrator:
    return SearchOrchestrator(es, EmbeddingClient(client), NewsAggregator(client))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestNormalizeQuery:
    def test_trims(self):
        assert normalize_query("  cats  ") == "cats"

    @pytest.mark.parametrize("value", ["", "   ", None, 5])
    def test_rejects_blank(self, value):
        with pytest.raises(InvalidInput, match="Search query is required"):
            normalize_query(value)


class TestSearchEntities:
    @pytest.mark.asyncio
    async def test_identical_embedding_end_to_end(self):
        cats = [0.2, 0.4, 0.1]
        es = FakeEs(posts=[post_hit("post-1", cats, content="I love cats")])
        client = FakeOpenAI(vector=cats)

        query, results = await make_orchestrator(es, client).search_entities(
            "user-1", "posts", "cats", threshold=0.7
        )

        assert query == "cats"
        assert len(results) == 1
        assert results[0].similarity == pytest.approx(1.0)
        assert results[0].document["content"] == "I love cats"
        assert results[0].document["similarity"] == pytest.approx(1.0)
        assert client.embedded == ["cats"]

    @pytest.mark.asyncio
    async def test_ranks_and_limits(self):
        es = FakeEs(posts=[
            post_hit("far", [0.0, 1.0]),
            post_hit("close", [0.9, 0.1]),
            post_hit("exact", [1.0, 0.0]),
            post_hit("mismatch", [1.0, 0.0, 0.0]),
            post_hit("missing", None),
        ])
        _, results = await make_orchestrator(es, FakeOpenAI()).search_entities(
            "user-1", "posts", "query", limit=2, threshold=0.5
        )
        assert [r.id for r in results] == ["exact", "close"]

    @pytest.mark.asyncio
    async def test_fetches_bounded_batch(self):
        es = FakeEs()
        await make_orchestrator(es, FakeOpenAI()).search_entities("user-1", "users", "ann")
        assert es.searches == [{"index": "users", "size": CANDIDATE_BATCH_SIZE}]
        assert CANDIDATE_BATCH_SIZE == 100

    @pytest.mark.asyncio
    async def test_records_ids_and_scores_only(self):
        es = FakeEs(posts=[post_hit("post-1", [1.0, 0.0], content="long body")])
        await make_orchestrator(es, FakeOpenAI()).search_entities(
            "user-1", "posts", "  cats  "
        )

        [call] = es.indexed
        doc = call["document"]
        assert call["index"] == "search_history"
        assert doc["user_id"] == "user-1"
        assert doc["query"] == "cats"
        assert doc["kind"] == "posts"
        assert doc["results"] == [{"id": "post-1", "similarity": pytest.approx(1.0)}]
        assert "created_at" in doc

    @pytest.mark.asyncio
    async def test_empty_result_still_recorded(self):
        es = FakeEs()
        _, results = await make_orchestrator(es, FakeOpenAI()).search_entities(
            "user-1", "posts", "cats"
        )
        assert results == []
        assert es.indexed[0]["document"]["results"] == []

    @pytest.mark.asyncio
    async def test_blank_query_rejected_before_any_call(self):
        es = FakeEs()
        client = FakeOpenAI()
        with pytest.raises(InvalidInput):
            await make_orchestrator(es, client).search_entities("user-1", "posts", "  ")
        assert client.embedded == []
        assert es.searches == []
        assert es.indexed == []

    @pytest.mark.asyncio
    async def test_unknown_kind_rejected(self):
        with pytest.raises(InvalidInput):
            await make_orchestrator(FakeEs(), FakeOpenAI()).search_entities(
                "user-1", "comments", "cats"
            )

    @pytest.mark.asyncio
    async def test_failed_search_not_recorded(self):
        es = FakeEs(posts=[post_hit("post-1", [1.0, 0.0])])
        client = FakeOpenAI(embed_error=RuntimeError("provider down"))
        with pytest.raises(EmbeddingFailed):
            await make_orchestrator(es, client).search_entities("user-1", "posts", "cats")
        assert es.indexed == []


class TestSearchNews:
    @pytest.mark.asyncio
    async def test_returns_articles_and_records_full_list(self):
        es = FakeEs()
        payload = json.dumps({"articles": [{"Title": "Cats rule", "Source": "Wire"}]})
        client = FakeOpenAI(output_text=payload)

        query, articles = await make_orchestrator(es, client).search_news("user-1", " cats ")

        assert query == "cats"
        assert [a.title for a in articles] == ["Cats rule"]
        doc = es.indexed[0]["document"]
        assert doc["kind"] == "news"
        assert doc["query"] == "cats"
        assert doc["results"][0]["title"] == "Cats rule"
        assert doc["results"][0]["source"] == "Wire"

    @pytest.mark.asyncio
    async def test_validation_failure_not_recorded(self):
        es = FakeEs()
        client = FakeOpenAI(output_text="{}")
        with pytest.raises(QueryTooShort):
            await make_orchestrator(es, client).search_news("user-1", "a")
        assert client.searched == []
        assert es.indexed == []

    @pytest.mark.asyncio
    async def test_blank_query_rejected(self):
        with pytest.raises(InvalidInput, match="Search query is required"):
            await make_orchestrator(FakeEs(), FakeOpenAI()).search_news("user-1", "")
