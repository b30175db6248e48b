"""
In-memory checkpoint storage implementation.

Keeps ingestion step results in a dictionary, suitable for testing and
single-instance deployments. For checkpoints that survive restarts and work
across replicas, use the Redis implementation instead.
"""

import copy
import logging
import time
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class InMemoryCheckpointStore:
    """
    In-memory implementation of the CheckpointStore protocol.

    Instances expire ``ttl_seconds`` after their last save, like the Redis
    store's key expiry. Expired instances are purged on every save.
    """

    def __init__(self, ttl_seconds: Optional[float] = 7 * 24 * 3600):
        # instance_id -> {step: result}, insertion ordered
        self._checkpoints: Dict[str, Dict[str, Any]] = {}
        self._expires_at: Dict[str, float] = {}
        self._ttl = ttl_seconds

        logger.info(f"InMemoryCheckpointStore initialized (ttl={ttl_seconds}s)")

    def _expired(self, instance_id: str, now: float) -> bool:
        expires_at = self._expires_at.get(instance_id)
        return expires_at is not None and expires_at <= now

    def _purge_expired(self, now: float) -> None:
        expired = [i for i in self._checkpoints if self._expired(i, now)]
        for instance_id in expired:
            self._checkpoints.pop(instance_id, None)
            self._expires_at.pop(instance_id, None)
        if expired:
            logger.debug(f"Purged {len(expired)} expired checkpoint instances")

    def _steps(self, instance_id: str) -> Dict[str, Any]:
        if self._expired(instance_id, time.monotonic()):
            return {}
        return self._checkpoints.get(instance_id, {})

    async def load(self, instance_id: str, step: str) -> Optional[Any]:
        return copy.deepcopy(self._steps(instance_id).get(step))

    async def save(self, instance_id: str, step: str, result: Any) -> None:
        now = time.monotonic()
        self._purge_expired(now)

        self._checkpoints.setdefault(instance_id, {})[step] = copy.deepcopy(result)
        if self._ttl is not None:
            self._expires_at[instance_id] = now + self._ttl
        logger.debug(f"Checkpoint saved: {instance_id}/{step}")

    async def completed_steps(self, instance_id: str) -> List[str]:
        return list(self._steps(instance_id))

    async def clear(self, instance_id: str) -> None:
        self._checkpoints.pop(instance_id, None)
        self._expires_at.pop(instance_id, None)

    def __len__(self) -> int:
        return len(self._checkpoints)
