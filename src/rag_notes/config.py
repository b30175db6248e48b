"""
Runtime configuration for rag-notes.

All collaborators are chosen explicitly here. A deployment decides which ones
are live (OpenAI, Qdrant, SQL database, Redis, a hosted LLM) and which are
local stand-ins; nothing is inferred from request data.

Values are read from environment variables prefixed with ``RAG_NOTES_`` or
from a ``.env`` file, e.g. ``RAG_NOTES_VECTOR_STORE=qdrant``.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RAG_NOTES_", env_file=".env", extra="ignore")

    # Collaborator selection
    embedding_provider: Literal["hash", "openai", "e5"] = "hash"
    vector_store: Literal["memory", "qdrant"] = "memory"
    note_store: Literal["memory", "sql"] = "memory"
    checkpoint_store: Literal["memory", "redis"] = "memory"
    llm_provider: Literal["echo", "openai", "ollama"] = "echo"
    search_strategy: str = "vector"

    # Embeddings
    embedding_model: str = "intfloat/e5-base-v2"
    embedding_dimension: int = 768
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None

    # Generation
    fast_model: str = "llama3.2:1b"
    advanced_model: str = "llama3.1:70b"
    llm_base_url: Optional[str] = None
    llm_api_key: Optional[str] = None

    # Vector index
    qdrant_host: str = "localhost"
    qdrant_port: int = 6333
    qdrant_collection: str = "notes"

    # Record store
    database_url: str = "sqlite:///notes.db"

    # Checkpoints
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    checkpoint_ttl_seconds: int = 7 * 24 * 3600

    # Retrieval
    similarity_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    search_top_k: int = Field(default=10, ge=1)
    query_top_k: int = Field(default=5, ge=1)
    batch_concurrency: int = Field(default=3, ge=1)
    default_question: str = "describe Machine Learning ?"

    # Ingestion
    ingestion_mode: Literal["inline", "background"] = "inline"
    ingestion_max_attempts: int = Field(default=3, ge=1)
    ingestion_retry_delay: float = Field(default=0.5, ge=0.0)
    metadata_text_limit: int = Field(default=500, ge=1)

    # HTTP / diagnostics
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
