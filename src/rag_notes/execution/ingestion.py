"""
Note ingestion pipeline.

Three steps run in order, each depending on the previous one's output:

1. persist: store the note text in the record store
2. embed: compute the note's embedding
3. index: upsert the vector under the note's id

Every step's result is checkpointed before the next step starts. Running the
same pipeline instance again skips completed steps and resumes from the
first one that has no checkpoint, so a failure in embed or index never
creates a second note. The note stays persisted while embed or index is
failing; that window is expected and is not rolled back.

Once the index step completes, the embed checkpoint is replaced by the
vector size so finished instances do not keep their embeddings around.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from rag_notes.embeddings.client import EmbeddingClient
from rag_notes.errors import ValidationError
from rag_notes.execution.models import IngestionResult, IngestionStatus
from rag_notes.models import Note
from rag_notes.storage.protocols import CheckpointStore, NoteStore, VectorIndex

logger = logging.getLogger(__name__)

STEP_PERSIST = "persist"
STEP_EMBED = "embed"
STEP_INDEX = "index"
STEPS = (STEP_PERSIST, STEP_EMBED, STEP_INDEX)


def validate_text(text: Any) -> str:
    """
    Check that ``text`` is a non-empty string and return it stripped.

    Raises:
        ValidationError: If text is missing, not a string, or blank
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Valid text content is required")
    return text.strip()


def new_instance_id() -> str:
    return str(uuid.uuid4())


class IngestionPipeline:
    """
    Checkpointed persist → embed → index pipeline.

    Each step is retried up to ``max_attempts`` times with exponential
    backoff. Validation failures are never retried.
    """

    def __init__(
        self,
        note_store: NoteStore,
        vector_index: VectorIndex,
        embedding_client: EmbeddingClient,
        checkpoint_store: CheckpointStore,
        max_attempts: int = 3,
        retry_delay: float = 0.5,
        metadata_text_limit: int = 500,
    ):
        """
        Initialize the pipeline.

        Args:
            note_store: Record store receiving the note
            vector_index: Index receiving the note's vector
            embedding_client: Client used to embed the note text
            checkpoint_store: Where step results are saved
            max_attempts: Attempts per step before the step's error is raised
            retry_delay: Base delay in seconds, doubled after every failed attempt
            metadata_text_limit: Characters of note text copied into vector metadata
        """
        self.note_store = note_store
        self.vector_index = vector_index
        self.embedding_client = embedding_client
        self.checkpoint_store = checkpoint_store
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.metadata_text_limit = metadata_text_limit

    async def _step(
        self, instance_id: str, name: str, action: Callable[[], Awaitable[Any]]
    ) -> Any:
        """Run one step unless it already has a checkpoint, then checkpoint its result."""
        saved = await self.checkpoint_store.load(instance_id, name)
        if saved is not None:
            logger.info(f"Ingestion {instance_id}: step '{name}' already completed, skipping")
            return saved

        attempt = 0
        while True:
            attempt += 1
            try:
                result = await action()
                break
            except ValidationError:
                raise
            except Exception as e:
                if attempt >= self.max_attempts:
                    logger.error(
                        f"Ingestion {instance_id}: step '{name}' failed after {attempt} attempts: {e}"
                    )
                    raise
                delay = self.retry_delay * (2 ** (attempt - 1))
                logger.warning(
                    f"Ingestion {instance_id}: step '{name}' attempt {attempt} failed ({e}), "
                    f"retrying in {delay:.2f}s"
                )
                await asyncio.sleep(delay)

        await self.checkpoint_store.save(instance_id, name, result)
        logger.debug(f"Ingestion {instance_id}: step '{name}' completed")
        return result

    async def run(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        instance_id: Optional[str] = None,
    ) -> IngestionResult:
        """
        Run (or resume) one pipeline instance.

        Args:
            text: Note text
            metadata: Caller metadata stored on the note and the vector
            instance_id: Identifies the instance; pass the same id to resume

        Returns:
            IngestionResult for the stored note

        Raises:
            ValidationError: If text is not a non-empty string
            EmbeddingError: If embedding keeps failing (note stays persisted)
            Exception: Whatever the record store or vector index raised
        """
        instance_id = instance_id or new_instance_id()
        caller_metadata = dict(metadata or {})

        async def persist():
            clean_text = validate_text(text)
            note = await self.note_store.create(
                clean_text, caller_metadata, idempotency_key=instance_id
            )
            return note.model_dump(mode="json")

        note = Note.model_validate(await self._step(instance_id, STEP_PERSIST, persist))

        indexed = await self.checkpoint_store.load(instance_id, STEP_INDEX)
        if indexed is None:
            indexed = await self._embed_and_index(instance_id, note, caller_metadata)
        else:
            logger.info(f"Ingestion {instance_id}: already indexed, skipping")

        logger.info(f"Ingestion {instance_id} complete: note {note.id} indexed")

        return IngestionResult(
            success=True,
            record_id=note.id,
            text=note.text,
            metadata=indexed["metadata"],
            timestamp=indexed["timestamp"],
            instance_id=instance_id,
        )

    async def _embed_and_index(
        self, instance_id: str, note: Note, caller_metadata: Dict[str, Any]
    ) -> Dict[str, Any]:
        async def embed():
            return await self.embedding_client.embed_document(note.text)

        vector: List[float] = await self._step(instance_id, STEP_EMBED, embed)

        async def index():
            timestamp = datetime.now().isoformat()
            vector_metadata = {
                **caller_metadata,
                "text": note.text[: self.metadata_text_limit],
                "timestamp": timestamp,
            }
            await self.vector_index.upsert(note.id, vector, vector_metadata)
            return {"metadata": vector_metadata, "timestamp": timestamp}

        indexed = await self._step(instance_id, STEP_INDEX, index)

        # The vector now lives in the index; keep only its size
        await self.checkpoint_store.save(instance_id, STEP_EMBED, {"dimension": len(vector)})
        return indexed

    async def status(self, instance_id: str) -> IngestionStatus:
        steps = await self.checkpoint_store.completed_steps(instance_id)
        return IngestionStatus(instance_id=instance_id, completed_steps=steps)
