"""Integration tests for the Qdrant vector index."""

import pytest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_qdrant_upsert_query_delete(skip_if_no_qdrant):
    pytest.importorskip("qdrant_client")

    from rag_notes.storage.vector.qdrant import QdrantVectorIndex

    index = QdrantVectorIndex(collection_name="rag_notes_test", dimension=3)

    try:
        await index.upsert("1", [1.0, 0.0, 0.0], {"text": "one"})
        await index.upsert("2", [0.0, 1.0, 0.0], {"text": "two"})

        results = await index.query([1.0, 0.0, 0.0], top_k=2)
        assert results[0].id == "1"
        assert results[0].score == pytest.approx(1.0)

        await index.delete(["1"])

        results = await index.query([1.0, 0.0, 0.0], top_k=2)
        assert [r.id for r in results] == ["2"]
    finally:
        index.client.delete_collection("rag_notes_test")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_notes_service_against_qdrant(skip_if_no_qdrant):
    pytest.importorskip("qdrant_client")

    from rag_notes.config import Settings
    from rag_notes.container import build_container

    container = build_container(
        Settings(
            _env_file=None,
            vector_store="qdrant",
            qdrant_collection="rag_notes_service_test",
            embedding_dimension=256,
        )
    )

    try:
        result = await container.service.add_note("Pepperoni is the best pizza topping")
        results = (await container.service.search("pizza toppings")).results

        assert [r.id for r in results] == [result.record_id]
        assert results[0].score >= 0.5
    finally:
        container.vector_index.client.delete_collection("rag_notes_service_test")
