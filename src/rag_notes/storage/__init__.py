"""
Storage protocols and implementations.

The record store, vector index and checkpoint store are defined as
protocols; implementations can use various backends (SQLAlchemy, Qdrant,
Redis, in-memory) as long as they satisfy the protocol interface.
"""

from rag_notes.storage.checkpoints.memory import InMemoryCheckpointStore
from rag_notes.storage.notes.memory import InMemoryNoteStore
from rag_notes.storage.protocols import CheckpointStore, NoteStore, VectorIndex
from rag_notes.storage.vector.memory import InMemoryVectorIndex

__all__ = [
    "NoteStore",
    "VectorIndex",
    "CheckpointStore",
    "InMemoryNoteStore",
    "InMemoryVectorIndex",
    "InMemoryCheckpointStore",
]

try:
    from rag_notes.storage.notes.sqlalchemy import SQLAlchemyNoteStore  # noqa: F401

    __all__.append("SQLAlchemyNoteStore")
except ImportError:
    pass

try:
    from rag_notes.storage.vector.qdrant import QdrantVectorIndex  # noqa: F401

    __all__.append("QdrantVectorIndex")
except ImportError:
    pass

try:
    from rag_notes.storage.checkpoints.redis import RedisCheckpointStore  # noqa: F401

    __all__.append("RedisCheckpointStore")
except ImportError:
    pass
