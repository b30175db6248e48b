"""Re-join search matches with their canonical notes."""

import logging
from typing import Dict, Iterable, List, Tuple

from rag_notes.models import Match, Note
from rag_notes.storage.protocols import NoteStore

logger = logging.getLogger(__name__)


class RecordResolver:
    """
    Fetches notes for a set of matched ids from the record store.

    Missing notes are not an error: a vector may outlive its note, so absent
    ids are simply left out of the result.
    """

    def __init__(self, note_store: NoteStore):
        self.note_store = note_store

    async def resolve(self, ids: Iterable[str]) -> Dict[str, Note]:
        """Return ``{id: note}`` for every id that has a note, in one store call."""
        unique_ids = set(ids)
        if not unique_ids:
            return {}

        notes = await self.note_store.get_many(unique_ids)
        resolved = {note.id: note for note in notes if note.id in unique_ids}

        missing = unique_ids - resolved.keys()
        if missing:
            logger.warning(f"Vectors without notes (skipped): {sorted(missing)}")

        return resolved

    async def resolve_ordered(self, matches: List[Match]) -> List[Tuple[Match, Note]]:
        """Pair each match with its note, keeping match order and dropping orphans."""
        resolved = await self.resolve(m.id for m in matches)
        return [(m, resolved[m.id]) for m in matches if m.id in resolved]
