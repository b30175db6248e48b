"""
Redis checkpoint storage implementation.

Stores each pipeline instance's step results in a Redis hash and the order
in which steps completed in a Redis list. Survives restarts and works across
multiple replicas.
"""

import asyncio
import json
import logging
from typing import Any, List, Optional

try:
    import redis
except ImportError:
    redis = None  # type: ignore

logger = logging.getLogger(__name__)


class RedisCheckpointStore:
    """Redis implementation of the CheckpointStore protocol."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        ttl_seconds: int = 7 * 24 * 3600,
        key_prefix: str = "ingest:",
        client=None,
    ):
        """
        Initialize the Redis store.

        Args:
            host: Redis host
            port: Redis port
            db: Redis database number
            ttl_seconds: Expiry applied to every instance's keys
            key_prefix: Prefix for Redis keys (default: "ingest:")
            client: Pre-built redis client (skips connection setup)
        """
        if client is None:
            if redis is None:
                raise ImportError(
                    "redis package is required for RedisCheckpointStore. "
                    "Install with: pip install rag-notes[redis]"
                )
            client = redis.Redis(host=host, port=port, db=db, decode_responses=True)
            try:
                client.ping()
            except redis.ConnectionError as e:
                logger.error(f"Failed to connect to Redis: {e}")
                raise

        self.client = client
        self._ttl = ttl_seconds
        self._key_prefix = key_prefix

        logger.info(f"RedisCheckpointStore initialized (prefix={key_prefix}, ttl={ttl_seconds}s)")

    def _results_key(self, instance_id: str) -> str:
        return f"{self._key_prefix}{instance_id}:results"

    def _order_key(self, instance_id: str) -> str:
        return f"{self._key_prefix}{instance_id}:steps"

    def _load(self, instance_id: str, step: str) -> Optional[Any]:
        raw = self.client.hget(self._results_key(instance_id), step)
        if raw is None:
            return None
        return json.loads(raw)

    async def load(self, instance_id: str, step: str) -> Optional[Any]:
        return await asyncio.to_thread(self._load, instance_id, step)

    def _save(self, instance_id: str, step: str, result: Any) -> None:
        results_key = self._results_key(instance_id)
        order_key = self._order_key(instance_id)

        pipeline = self.client.pipeline()
        pipeline.hset(results_key, step, json.dumps(result))
        pipeline.rpush(order_key, step)
        pipeline.expire(results_key, self._ttl)
        pipeline.expire(order_key, self._ttl)
        pipeline.execute()

    async def save(self, instance_id: str, step: str, result: Any) -> None:
        await asyncio.to_thread(self._save, instance_id, step, result)
        logger.debug(f"Checkpoint saved: {instance_id}/{step}")

    async def completed_steps(self, instance_id: str) -> List[str]:
        steps = await asyncio.to_thread(self.client.lrange, self._order_key(instance_id), 0, -1)
        # A step saved twice (concurrent retries) is listed once
        return list(dict.fromkeys(steps))

    async def clear(self, instance_id: str) -> None:
        await asyncio.to_thread(
            self.client.delete, self._results_key(instance_id), self._order_key(instance_id)
        )
