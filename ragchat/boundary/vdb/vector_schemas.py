"""
Vector database schemas.

Pydantic models and the store protocol shared by every vector store
implementation.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

EmbeddingVector = list[float]


class RetrievalResult(BaseModel):
    """Single result from vector search. Computed per query, never stored."""

    id: int = Field(description="Stored record id")
    content: str = Field(description="Chunk text content")
    similarity: float = Field(ge=-1.0, le=1.0, description="1 - cosine distance")
    chunk_index: int | None = Field(default=None, description="Ordinal within its document")
    document_id: uuid.UUID | None = Field(default=None, description="Ingestion call the chunk came from")


@runtime_checkable
class VectorStore(Protocol):
    """Structural type for the document vector stores."""

    async def initialize(self) -> None: ...

    async def insert(
        self,
        content: str,
        embedding: EmbeddingVector,
        chunk_index: int,
        document_id: uuid.UUID | None = None,
    ) -> None: ...

    async def search(
        self,
        query_embedding: EmbeddingVector,
        limit: int,
        document_id: uuid.UUID | None = None,
    ) -> list[RetrievalResult]: ...

    async def count(self) -> int: ...

    async def close(self) -> None: ...


def clamp_similarity(value: float) -> float:
    """Keep floating-point noise inside [-1, 1]."""
    return max(-1.0, min(1.0, float(value)))
