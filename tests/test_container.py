"""Tests for Settings and container assembly."""

import pytest

from rag_notes.config import Settings
from rag_notes.container import build_container
from rag_notes.generation.local import EchoProvider
from rag_notes.retrieval import VectorSearchAgent
from rag_notes.storage import InMemoryCheckpointStore, InMemoryNoteStore, InMemoryVectorIndex


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.similarity_threshold == 0.5
    assert settings.search_top_k == 10
    assert settings.query_top_k == 5
    assert settings.embedding_dimension == 768
    assert settings.default_question == "describe Machine Learning ?"
    assert settings.debug is False


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("RAG_NOTES_VECTOR_STORE", "qdrant")
    monkeypatch.setenv("RAG_NOTES_SIMILARITY_THRESHOLD", "0.6")
    monkeypatch.setenv("RAG_NOTES_DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.vector_store == "qdrant"
    assert settings.similarity_threshold == 0.6
    assert settings.debug is True


def test_settings_reject_unknown_provider():
    with pytest.raises(ValueError):
        Settings(_env_file=None, vector_store="pinecone")


def test_local_container():
    container = build_container(Settings(_env_file=None, embedding_dimension=64))

    assert isinstance(container.note_store, InMemoryNoteStore)
    assert isinstance(container.vector_index, InMemoryVectorIndex)
    assert isinstance(container.checkpoint_store, InMemoryCheckpointStore)
    assert container.embedding_client.dimension == 64

    service = container.service
    assert isinstance(service.search_strategy, VectorSearchAgent)
    assert service.query_options.top_k == 5
    assert service.search_options.top_k == 10
    assert isinstance(service.generator.select("fast").provider, EchoProvider)
    assert service.generator.resolve_model("llama-70b") == "llama3.1:70b"


def test_sql_note_store_container():
    container = build_container(
        Settings(_env_file=None, note_store="sql", database_url="sqlite://")
    )

    assert type(container.note_store).__name__ == "SQLAlchemyNoteStore"


def test_unknown_search_strategy():
    with pytest.raises(ValueError):
        build_container(Settings(_env_file=None, search_strategy="keyword"))
