"""
Note deletion.

A note and its vector live in two independent stores. Deletion issues both
deletes and reports failure if either fails, without undoing the one that
succeeded.
"""

import asyncio
import logging

from rag_notes.errors import DeletionError
from rag_notes.storage.protocols import NoteStore, VectorIndex

logger = logging.getLogger(__name__)


class DeletionCoordinator:
    """Best-effort dual delete from the record store and the vector index."""

    def __init__(self, note_store: NoteStore, vector_index: VectorIndex):
        self.note_store = note_store
        self.vector_index = vector_index

    async def delete(self, note_id: str) -> None:
        """
        Delete the note and the vector stored under ``note_id``.

        Both calls are issued concurrently. Deleting an id that does not
        exist in either store is not an error.

        Raises:
            DeletionError: If either leg failed. The other leg's effect stays applied.
        """
        record_result, vector_result = await asyncio.gather(
            self.note_store.delete(note_id),
            self.vector_index.delete([note_id]),
            return_exceptions=True,
        )

        failed_legs = []
        if isinstance(record_result, BaseException):
            logger.error(f"Record delete failed for note {note_id}: {record_result}")
            failed_legs.append("record")
        if isinstance(vector_result, BaseException):
            logger.error(f"Vector delete failed for note {note_id}: {vector_result}")
            failed_legs.append("vector")

        if failed_legs:
            cause = record_result if "record" in failed_legs else vector_result
            raise DeletionError(note_id, failed_legs) from cause

        if record_result is False:
            logger.info(f"Note {note_id} was not in the record store")
        logger.info(f"Deleted note {note_id}")
