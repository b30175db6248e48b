"""
Storage protocol definitions for notes, vectors and ingestion checkpoints.

These protocols define the interface that storage implementations must
provide. They are implementation-agnostic and can be backed by various
databases (Qdrant, SQLite, PostgreSQL, Redis, in-memory, etc.).

The record store and the vector index are managed independently: nothing
enforces that a note has a vector or that a vector has a note.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol

from rag_notes.models import Note
from rag_notes.storage.vector.models import VectorMatch


class NoteStore(Protocol):
    """
    Protocol for the canonical record store.

    Typically backed by a SQL database, or in-memory for testing.
    """

    async def create(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Note:
        """
        Insert a new note and return it with its assigned id.

        If ``idempotency_key`` matches a note created earlier, that note is
        returned unchanged and nothing is inserted.
        """
        ...

    async def get(self, note_id: str) -> Optional[Note]:
        """Return a note by id, or None if it does not exist."""
        ...

    async def get_many(self, note_ids: Iterable[str]) -> List[Note]:
        """
        Return the notes matching ``note_ids`` in a single round trip.

        Ids with no matching note are skipped; order is unspecified.
        """
        ...

    async def delete(self, note_id: str) -> bool:
        """
        Delete a note.

        Returns:
            True if a note was removed, False if none existed
        """
        ...

    async def count(self) -> int:
        ...


class VectorIndex(Protocol):
    """
    Protocol for the similarity index holding one vector per note id.

    Backed by Qdrant in production, or in-memory for testing.
    """

    async def upsert(self, entry_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        """Insert or replace the vector stored under ``entry_id``."""
        ...

    async def query(self, vector: List[float], top_k: int = 10) -> List[VectorMatch]:
        """Return up to ``top_k`` nearest entries, best score first."""
        ...

    async def delete(self, entry_ids: List[str]) -> None:
        """Delete entries by id. Unknown ids are ignored."""
        ...


class CheckpointStore(Protocol):
    """
    Protocol for ingestion step checkpoints.

    A checkpoint is the JSON-serializable result of one named step of one
    pipeline instance. Once saved, the step is never executed again for
    that instance.
    """

    async def load(self, instance_id: str, step: str) -> Optional[Any]:
        """Return the saved result of ``step``, or None if it has not completed."""
        ...

    async def save(self, instance_id: str, step: str, result: Any) -> None:
        ...

    async def completed_steps(self, instance_id: str) -> List[str]:
        """Names of completed steps, in completion order."""
        ...

    async def clear(self, instance_id: str) -> None:
        ...
