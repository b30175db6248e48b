"""
Notes service: the query, search and write paths over the core components.
"""

import logging
from typing import Any, Dict, Optional

from rag_notes.execution import (
    DeletionCoordinator,
    IngestionPipeline,
    IngestionResult,
    IngestionStatus,
    new_instance_id,
    validate_text,
)
from rag_notes.generation import AnswerGenerator, assemble
from rag_notes.models import Answer, SearchOptions, SearchOutcome, SearchResult
from rag_notes.retrieval import RecordResolver, SearchStrategy

logger = logging.getLogger(__name__)


class NotesService:
    def __init__(
        self,
        search_strategy: SearchStrategy,
        resolver: RecordResolver,
        generator: AnswerGenerator,
        ingestion: IngestionPipeline,
        deletion: DeletionCoordinator,
        query_options: Optional[SearchOptions] = None,
        search_options: Optional[SearchOptions] = None,
    ):
        self.search_strategy = search_strategy
        self.resolver = resolver
        self.generator = generator
        self.ingestion = ingestion
        self.deletion = deletion
        self.query_options = query_options or SearchOptions(top_k=5, threshold=0.5)
        self.search_options = search_options or SearchOptions(top_k=10, threshold=0.5)

    async def answer(self, question: str, model: Optional[str] = None) -> Answer:
        """
        Answer a question with retrieved notes as context.

        Embedding, search and generation failures propagate to the caller
        unchanged; nothing on this path is retried.
        """
        matches = await self.search_strategy.search(question, self.query_options)
        resolved = await self.resolver.resolve_ordered(matches)
        notes = [note for _, note in resolved]

        context_block = assemble(notes)
        generated = await self.generator.generate(question, context_block or None, model)

        logger.info(
            f"Answered question: model={generated.model}, matches={len(matches)}, "
            f"context_notes={len(notes)}"
        )

        return Answer(
            answer=generated.text,
            question=question,
            context=[note.text for note in notes],
            match_count=len(matches),
            model=generated.model,
            similarity_threshold=self.query_options.threshold,
        )

    async def search(self, query: str) -> SearchOutcome:
        """
        Semantic search returning canonical note text.

        Text comes from the record store, not from the vector metadata copy.
        Matches whose note no longer exists are dropped, so
        ``filtered_matches`` can be lower than ``total_matches``.
        """
        matches = await self.search_strategy.search(query, self.search_options)
        resolved = await self.resolver.resolve_ordered(matches)

        results = [
            SearchResult(
                id=match.id,
                score=match.score,
                text=note.text,
                metadata={**match.metadata, "created_at": note.created_at.isoformat()},
            )
            for match, note in resolved
        ]

        logger.info(f"{len(results)} search results for '{query[:50]}' ({len(matches)} matches)")
        return SearchOutcome(
            query=query,
            results=results,
            total_matches=len(matches),
            similarity_threshold=self.search_options.threshold,
        )

    async def add_note(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        instance_id: Optional[str] = None,
    ) -> IngestionResult:
        """Run the ingestion pipeline to completion."""
        return await self.ingestion.run(text, metadata, instance_id=instance_id)

    def start_note(self, text: Any) -> tuple[str, str]:
        """
        Validate a note for background ingestion.

        Returns:
            (instance_id, cleaned text); the caller schedules ``add_note``
            with that instance id

        Raises:
            ValidationError: If text is not a non-empty string
        """
        return new_instance_id(), validate_text(text)

    async def ingestion_status(self, instance_id: str) -> IngestionStatus:
        return await self.ingestion.status(instance_id)

    async def delete_note(self, note_id: str) -> None:
        await self.deletion.delete(note_id)
