"""Unit tests for the Redis checkpoint store with a mocked client."""

import json
from unittest.mock import Mock

import pytest

from rag_notes.storage.checkpoints.redis import RedisCheckpointStore


@pytest.fixture
def redis_client():
    client = Mock()
    client.pipeline.return_value = Mock()
    return client


@pytest.fixture
def checkpoint_store(redis_client):
    return RedisCheckpointStore(ttl_seconds=60, key_prefix="test:", client=redis_client)


@pytest.mark.asyncio
async def test_save_writes_result_and_order(checkpoint_store, redis_client):
    await checkpoint_store.save("wf-1", "persist", {"id": "1"})

    pipeline = redis_client.pipeline.return_value
    pipeline.hset.assert_called_once_with("test:wf-1:results", "persist", json.dumps({"id": "1"}))
    pipeline.rpush.assert_called_once_with("test:wf-1:steps", "persist")
    pipeline.expire.assert_any_call("test:wf-1:results", 60)
    pipeline.expire.assert_any_call("test:wf-1:steps", 60)
    pipeline.execute.assert_called_once()


@pytest.mark.asyncio
async def test_load_decodes_json(checkpoint_store, redis_client):
    redis_client.hget.return_value = json.dumps([0.1, 0.2])

    assert await checkpoint_store.load("wf-1", "embed") == [0.1, 0.2]
    redis_client.hget.assert_called_once_with("test:wf-1:results", "embed")


@pytest.mark.asyncio
async def test_load_missing_step(checkpoint_store, redis_client):
    redis_client.hget.return_value = None

    assert await checkpoint_store.load("wf-1", "index") is None


@pytest.mark.asyncio
async def test_completed_steps_deduplicates(checkpoint_store, redis_client):
    redis_client.lrange.return_value = ["persist", "embed", "embed"]

    assert await checkpoint_store.completed_steps("wf-1") == ["persist", "embed"]


@pytest.mark.asyncio
async def test_clear(checkpoint_store, redis_client):
    await checkpoint_store.clear("wf-1")

    redis_client.delete.assert_called_once_with("test:wf-1:results", "test:wf-1:steps")
