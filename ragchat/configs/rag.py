"""
RAG pipeline configuration settings.

Chunking, embedding, vector store selection and context assembly limits.

Dependencies: pydantic, pydantic_settings
System role: Configuration for ingestion and retrieval
"""

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from ragchat.configs.base import BaseSettings


class RagSettings(BaseSettings):
    """Vector store, embedding and chunking configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'pgvector' for PostgreSQL, 'memory' for local dev",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the documents table)",
    )

    chunk_size: int = Field(default=150, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=20, description="Overlap between consecutive chunks")

    retrieval_limit: int = Field(default=5, description="Number of snippets retrieved per query")
    snippet_max_chars: int = Field(default=1000, description="Per-snippet character cap")
    context_max_chars: int = Field(default=4000, description="Hard cap on assembled context")
    preview_chars: int = Field(
        default=300,
        description="Characters of an ingested document kept in the history marker",
    )

    @field_validator("chunk_overlap")
    @classmethod
    def _overlap_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"chunk_overlap must be >= 0, got {v}")
        return v
