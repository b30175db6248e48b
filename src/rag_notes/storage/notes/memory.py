"""
In-memory note storage implementation.

Provides a simple in-memory record store, suitable for testing and
single-instance deployments. For persistence, use the SQLAlchemy
implementation instead.
"""

import itertools
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from rag_notes.models import Note

logger = logging.getLogger(__name__)


class InMemoryNoteStore:
    """
    In-memory implementation of the NoteStore protocol.

    Ids are sequential integers rendered as strings, like the SQL store's
    autoincrement key. Data is lost on restart.
    """

    def __init__(self):
        self._notes: Dict[str, Note] = {}
        self._by_key: Dict[str, str] = {}  # idempotency_key -> note id
        self._ids = itertools.count(1)

        logger.info("InMemoryNoteStore initialized")

    async def create(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Note:
        if idempotency_key and idempotency_key in self._by_key:
            existing = self._notes.get(self._by_key[idempotency_key])
            if existing is not None:
                logger.info(f"Note for key {idempotency_key} already exists: {existing.id}")
                return existing

        note = Note(
            id=str(next(self._ids)),
            text=text,
            metadata=dict(metadata or {}),
            created_at=datetime.now(),
            idempotency_key=idempotency_key,
        )
        self._notes[note.id] = note
        if idempotency_key:
            self._by_key[idempotency_key] = note.id

        logger.debug(f"Inserted note {note.id}: '{text[:50]}...'")
        return note

    async def get(self, note_id: str) -> Optional[Note]:
        return self._notes.get(note_id)

    async def get_many(self, note_ids: Iterable[str]) -> List[Note]:
        return [self._notes[i] for i in set(note_ids) if i in self._notes]

    async def delete(self, note_id: str) -> bool:
        note = self._notes.pop(note_id, None)
        if note is None:
            return False
        if note.idempotency_key:
            self._by_key.pop(note.idempotency_key, None)
        logger.debug(f"Deleted note {note_id}")
        return True

    async def count(self) -> int:
        return len(self._notes)
