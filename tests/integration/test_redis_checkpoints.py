"""Integration tests for the Redis checkpoint store."""

import pytest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_redis_checkpoints_round_trip(skip_if_no_redis):
    pytest.importorskip("redis")

    from rag_notes.storage.checkpoints.redis import RedisCheckpointStore

    # Separate DB for testing
    store = RedisCheckpointStore(host="localhost", port=6379, db=15, ttl_seconds=60)

    try:
        await store.save("wf-int", "persist", {"id": "1", "text": "a"})
        await store.save("wf-int", "embed", [0.1, 0.2])

        assert await store.load("wf-int", "persist") == {"id": "1", "text": "a"}
        assert await store.load("wf-int", "index") is None
        assert await store.completed_steps("wf-int") == ["persist", "embed"]
    finally:
        await store.clear("wf-int")

    assert await store.completed_steps("wf-int") == []
