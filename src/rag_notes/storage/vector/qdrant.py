"""
Qdrant vector index implementation.

Stores note vectors in a cosine-distance collection, created when the index
is constructed if it does not exist yet. Qdrant point ids must be integers
or UUIDs, so the note id is also kept in each point's payload and returned
from queries. The client is blocking; reads and writes run in a worker thread.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Union

from qdrant_client import QdrantClient
from qdrant_client.models import Distance, PointIdsList, PointStruct, VectorParams

from rag_notes.storage.vector.models import VectorMatch

logger = logging.getLogger(__name__)

# Namespace for deriving Qdrant point ids from non-numeric note ids
_POINT_NAMESPACE = uuid.UUID("6f1c1d2e-5b7a-4f0e-9a43-2d9b8f7c3e10")


def to_point_id(entry_id: str) -> Union[int, str]:
    """Qdrant only accepts unsigned integers or UUIDs as point ids."""
    if entry_id.isdigit():
        return int(entry_id)
    return str(uuid.uuid5(_POINT_NAMESPACE, entry_id))


class QdrantVectorIndex:
    def __init__(
        self,
        host: str = "localhost",
        port: int = 6333,
        collection_name: str = "notes",
        dimension: int = 768,
        client: QdrantClient | None = None,
    ):
        """
        Initialize Qdrant vector index.

        Args:
            host: Qdrant host (default: localhost)
            port: Qdrant port (default: 6333)
            collection_name: Collection name (default: notes)
            dimension: Vector size of the collection (default: 768)
            client: Pre-built client (tests pass QdrantClient(":memory:"))
        """
        self.client = client or QdrantClient(host=host, port=port)
        self.collection_name = collection_name
        self.dimension = dimension
        self._init_collection()

    def _init_collection(self):
        if not self.client.collection_exists(self.collection_name):
            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(size=self.dimension, distance=Distance.COSINE),
            )
            logger.info(
                f"Created Qdrant collection {self.collection_name} "
                f"({self.dimension} dims, cosine)"
            )

    async def upsert(self, entry_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        """
        Insert or replace the vector for a note.

        The note id is kept in the payload because Qdrant may store it under
        a derived point id.
        """
        payload = {**metadata, "note_id": entry_id}
        point = PointStruct(id=to_point_id(entry_id), vector=vector, payload=payload)

        await asyncio.to_thread(
            self.client.upsert, collection_name=self.collection_name, points=[point]
        )
        logger.debug(f"Upserted vector {entry_id}: '{str(metadata.get('text', ''))[:50]}...'")

    async def query(self, vector: List[float], top_k: int = 10) -> List[VectorMatch]:
        response = await asyncio.to_thread(
            self.client.query_points,
            collection_name=self.collection_name,
            query=vector,
            limit=top_k,
            with_payload=True,
            with_vectors=False,
        )

        results = []
        for hit in response.points:
            payload = dict(hit.payload or {})
            note_id = str(payload.pop("note_id", hit.id))
            results.append(VectorMatch(id=note_id, score=hit.score, metadata=payload))

        logger.debug(f"{len(results)} hits found")
        return results

    async def delete(self, entry_ids: List[str]) -> None:
        if not entry_ids:
            return

        await asyncio.to_thread(
            self.client.delete,
            collection_name=self.collection_name,
            points_selector=PointIdsList(points=[to_point_id(i) for i in entry_ids]),
        )
        logger.debug(f"Deleted vectors: {entry_ids}")

    def clear(self):
        """Drop and recreate the collection (dangerous!)"""
        self.client.delete_collection(collection_name=self.collection_name)
        self._init_collection()
