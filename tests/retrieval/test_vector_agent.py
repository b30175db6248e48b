"""
Unit tests for VectorSearchAgent.

Covers threshold filtering, ordering, score normalization, error
propagation and bounded batch concurrency.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from rag_notes.errors import EmbeddingError, SearchError
from rag_notes.models import SearchOptions
from rag_notes.retrieval import VectorSearchAgent, normalize_scores
from rag_notes.storage.vector.models import VectorMatch


@pytest.fixture
def mock_embedding_client():
    client = Mock()
    client.embed_query = AsyncMock(return_value=[0.1, 0.2, 0.3])
    return client


@pytest.fixture
def mock_vector_index():
    index = Mock()
    index.query = AsyncMock(
        return_value=[
            VectorMatch(id="1", score=0.4, metadata={"text": "weak"}),
            VectorMatch(id="2", score=0.8, metadata={"text": "best"}),
            VectorMatch(id="3", score=0.7, metadata={"text": "exactly at threshold"}),
        ]
    )
    return index


@pytest.fixture
def agent(mock_embedding_client, mock_vector_index):
    return VectorSearchAgent(mock_embedding_client, mock_vector_index)


@pytest.mark.asyncio
async def test_search_filters_by_threshold_and_sorts(agent, mock_vector_index):
    matches = await agent.search("pizza", SearchOptions(top_k=5, threshold=0.7))

    assert [m.id for m in matches] == ["2", "3"]
    assert all(m.score >= 0.7 for m in matches)
    mock_vector_index.query.assert_called_once_with([0.1, 0.2, 0.3], top_k=5)


@pytest.mark.asyncio
async def test_search_normalizes_against_best_score(agent):
    matches = await agent.search("pizza", SearchOptions(top_k=5, threshold=0.5))

    assert matches[0].normalized_score == 1.0
    assert matches[1].normalized_score == pytest.approx(0.7 / 0.8)
    assert matches[0].source == "vector"
    assert matches[0].agent == "VectorAgent"
    assert matches[0].metadata == {"text": "best"}


@pytest.mark.asyncio
async def test_search_uses_default_options(agent, mock_vector_index):
    matches = await agent.search("pizza")

    mock_vector_index.query.assert_called_once_with([0.1, 0.2, 0.3], top_k=10)
    assert [m.id for m in matches] == ["2", "3"]


@pytest.mark.asyncio
async def test_search_nothing_above_threshold(agent):
    assert await agent.search("pizza", SearchOptions(threshold=0.9)) == []


@pytest.mark.asyncio
async def test_embedding_error_propagates(agent, mock_embedding_client, mock_vector_index):
    mock_embedding_client.embed_query.side_effect = EmbeddingError("down")

    with pytest.raises(EmbeddingError):
        await agent.search("pizza")

    mock_vector_index.query.assert_not_called()


@pytest.mark.asyncio
async def test_index_failure_raises_search_error(agent, mock_vector_index):
    mock_vector_index.query.side_effect = ConnectionError("index unreachable")

    with pytest.raises(SearchError):
        await agent.search("pizza")


def test_normalize_scores_with_zero_best_score():
    matches = normalize_scores(
        [VectorMatch(id="1", score=0.0), VectorMatch(id="2", score=0.0)],
        source="vector",
        agent="VectorAgent",
    )

    assert [m.normalized_score for m in matches] == [0.0, 0.0]


def test_normalize_scores_empty():
    assert normalize_scores([], source="vector", agent="VectorAgent") == []


@pytest.mark.asyncio
async def test_batch_search_returns_result_per_query(agent):
    results = await agent.batch_search(["a", "b", "c", "d"], SearchOptions(threshold=0.5))

    assert set(results) == {"a", "b", "c", "d"}
    assert all([m.id for m in matches] == ["2", "3"] for matches in results.values())


@pytest.mark.asyncio
async def test_batch_search_bounds_concurrency(mock_embedding_client):
    in_flight = 0
    peak = 0
    started = []

    async def slow_query(vector, top_k=10):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        started.append(in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return [VectorMatch(id="1", score=0.9)]

    index = Mock()
    index.query = slow_query
    agent = VectorSearchAgent(mock_embedding_client, index, batch_concurrency=3)

    results = await agent.batch_search([f"q{i}" for i in range(7)])

    assert len(results) == 7
    assert peak == 3
    # Groups run one after another: 3, then 3, then 1
    assert started == [1, 2, 3, 1, 2, 3, 1]


@pytest.mark.asyncio
async def test_batch_search_failure_waits_for_group(mock_vector_index):
    finished = []

    async def embed_query(text):
        if text == "bad":
            raise EmbeddingError("embedding service down")
        await asyncio.sleep(0.01)
        finished.append(text)
        return [0.1, 0.2, 0.3]

    client = Mock()
    client.embed_query = embed_query
    agent = VectorSearchAgent(client, mock_vector_index, batch_concurrency=3)

    with pytest.raises(EmbeddingError, match="embedding service down"):
        await agent.batch_search(["a", "bad", "c", "d"])

    # The failing group ran to completion and the next group never started
    assert sorted(finished) == ["a", "c"]
    assert mock_vector_index.query.await_count == 2
