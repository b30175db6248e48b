"""
Builds every collaborator from Settings.

The container is created once at startup. Its components only hold
configuration and client handles, so they are shared read-only across
requests.
"""

import logging
from dataclasses import dataclass

from casual_llm import LLMProvider, ModelConfig, Provider, create_provider

from rag_notes.config import Settings
from rag_notes.embeddings import EmbeddingClient, HashEmbedding, TextEmbedding
from rag_notes.execution import DeletionCoordinator, IngestionPipeline
from rag_notes.generation import AnswerGenerator, GenerationModel
from rag_notes.generation.local import EchoProvider
from rag_notes.models import SearchOptions
from rag_notes.notes_service import NotesService
from rag_notes.retrieval import RecordResolver, create_search_strategy
from rag_notes.storage import (
    CheckpointStore,
    InMemoryCheckpointStore,
    InMemoryNoteStore,
    InMemoryVectorIndex,
    NoteStore,
    VectorIndex,
)

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    embedding_client: EmbeddingClient
    note_store: NoteStore
    vector_index: VectorIndex
    checkpoint_store: CheckpointStore
    service: NotesService


def build_embedding(settings: Settings) -> TextEmbedding:
    if settings.embedding_provider == "openai":
        from rag_notes.embeddings.openai_embedding import OpenAIEmbedding

        return OpenAIEmbedding(
            model=settings.embedding_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            dimensions=settings.embedding_dimension,
        )
    if settings.embedding_provider == "e5":
        from rag_notes.embeddings.e5_embedding import E5Embedding

        return E5Embedding(model_name=settings.embedding_model)
    return HashEmbedding(dimension=settings.embedding_dimension)


def build_vector_index(settings: Settings) -> VectorIndex:
    if settings.vector_store == "qdrant":
        from rag_notes.storage.vector.qdrant import QdrantVectorIndex

        return QdrantVectorIndex(
            host=settings.qdrant_host,
            port=settings.qdrant_port,
            collection_name=settings.qdrant_collection,
            dimension=settings.embedding_dimension,
        )
    return InMemoryVectorIndex(dimension=settings.embedding_dimension)


def build_note_store(settings: Settings) -> NoteStore:
    if settings.note_store == "sql":
        from rag_notes.storage.notes.sqlalchemy import SQLAlchemyNoteStore, create_note_engine

        store = SQLAlchemyNoteStore(create_note_engine(settings.database_url))
        store.create_tables()
        return store
    return InMemoryNoteStore()


def build_checkpoint_store(settings: Settings) -> CheckpointStore:
    if settings.checkpoint_store == "redis":
        from rag_notes.storage.checkpoints.redis import RedisCheckpointStore

        return RedisCheckpointStore(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            ttl_seconds=settings.checkpoint_ttl_seconds,
        )
    return InMemoryCheckpointStore(ttl_seconds=settings.checkpoint_ttl_seconds)


def build_llm_provider(settings: Settings, model_name: str) -> LLMProvider:
    if settings.llm_provider == "echo":
        return EchoProvider(model_name=model_name)

    provider = Provider.OPENAI if settings.llm_provider == "openai" else Provider.OLLAMA
    return create_provider(
        ModelConfig(
            name=model_name,
            provider=provider,
            base_url=settings.llm_base_url,
            api_key=settings.llm_api_key,
        )
    )


def build_generator(settings: Settings) -> AnswerGenerator:
    fast = GenerationModel(
        name=settings.fast_model, provider=build_llm_provider(settings, settings.fast_model)
    )
    advanced = GenerationModel(
        name=settings.advanced_model,
        provider=build_llm_provider(settings, settings.advanced_model),
    )
    return AnswerGenerator(fast=fast, advanced=advanced)


def build_container(settings: Settings) -> Container:
    embedding_client = EmbeddingClient(build_embedding(settings))
    if embedding_client.dimension != settings.embedding_dimension:
        logger.warning(
            f"Embedding model {embedding_client.model_name} produces "
            f"{embedding_client.dimension} dims, index configured for {settings.embedding_dimension}"
        )

    note_store = build_note_store(settings)
    vector_index = build_vector_index(settings)
    checkpoint_store = build_checkpoint_store(settings)

    search_strategy = create_search_strategy(
        settings.search_strategy,
        embedding_client=embedding_client,
        vector_index=vector_index,
        batch_concurrency=settings.batch_concurrency,
    )

    service = NotesService(
        search_strategy=search_strategy,
        resolver=RecordResolver(note_store),
        generator=build_generator(settings),
        ingestion=IngestionPipeline(
            note_store=note_store,
            vector_index=vector_index,
            embedding_client=embedding_client,
            checkpoint_store=checkpoint_store,
            max_attempts=settings.ingestion_max_attempts,
            retry_delay=settings.ingestion_retry_delay,
            metadata_text_limit=settings.metadata_text_limit,
        ),
        deletion=DeletionCoordinator(note_store, vector_index),
        query_options=SearchOptions(
            top_k=settings.query_top_k, threshold=settings.similarity_threshold
        ),
        search_options=SearchOptions(
            top_k=settings.search_top_k, threshold=settings.similarity_threshold
        ),
    )

    logger.info(
        f"Container built: embedding={settings.embedding_provider}, "
        f"vector_store={settings.vector_store}, note_store={settings.note_store}, "
        f"checkpoints={settings.checkpoint_store}, llm={settings.llm_provider}"
    )

    return Container(
        settings=settings,
        embedding_client=embedding_client,
        note_store=note_store,
        vector_index=vector_index,
        checkpoint_store=checkpoint_store,
        service=service,
    )
