"""
In-process vector store for local development and tests.

Exact brute-force cosine search with numpy; fine for small corpora,
nothing is persisted across restarts.

Dependencies: numpy, ragchat.boundary.vdb.vector_schemas
System role: Local vector store for development RAG
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass

import numpy as np

from ragchat.boundary.vdb.vector_schemas import (
    EmbeddingVector,
    RetrievalResult,
    clamp_similarity,
)
from ragchat.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Record:
    id: int
    content: str
    embedding: np.ndarray
    chunk_index: int
    document_id: uuid.UUID | None


class InMemoryVectorStore:
    """Brute-force cosine store with the same contract as PgVectorStore."""

    def __init__(self, dimension: int = 1536) -> None:
        self.dimension = dimension
        self._records: list[_Record] = []
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Nothing to create; kept for interface parity."""
        logger.info("Using in-memory vector store", extra={"dimension": self.dimension})

    async def insert(
        self,
        content: str,
        embedding: EmbeddingVector,
        chunk_index: int,
        document_id: uuid.UUID | None = None,
    ) -> None:
        """
        Append one record.

        Raises:
            PersistenceError: Wrong dimension or negative chunk index
        """
        if len(embedding) != self.dimension:
            raise PersistenceError(
                f"Embedding has {len(embedding)} dimensions, expected {self.dimension}",
                operation="insert",
            )
        if chunk_index < 0:
            raise PersistenceError(
                f"chunk_index must be non-negative, got {chunk_index}",
                operation="insert",
            )

        vector = np.asarray(embedding, dtype=np.float64)
        async with self._lock:
            self._records.append(
                _Record(
                    id=self._next_id,
                    content=content,
                    embedding=vector,
                    chunk_index=chunk_index,
                    document_id=document_id,
                )
            )
            self._next_id += 1

    async def search(
        self,
        query_embedding: EmbeddingVector,
        limit: int,
        document_id: uuid.UUID | None = None,
    ) -> list[RetrievalResult]:
        """
        Exact cosine search; ties keep insertion order (stable sort).

        Raises:
            PersistenceError: Wrong query dimension
        """
        if limit < 1:
            return []
        if len(query_embedding) != self.dimension:
            raise PersistenceError(
                f"Query embedding has {len(query_embedding)} dimensions, expected {self.dimension}",
                operation="search",
            )

        records = [
            r for r in self._records
            if document_id is None or r.document_id == document_id
        ]
        if not records:
            return []

        matrix = np.vstack([r.embedding for r in records])
        query = np.asarray(query_embedding, dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        similarities = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)

        order = np.argsort(-similarities, kind="stable")[:limit]
        return [
            RetrievalResult(
                id=records[i].id,
                content=records[i].content,
                chunk_index=records[i].chunk_index,
                document_id=records[i].document_id,
                similarity=clamp_similarity(similarities[i]),
            )
            for i in order
        ]

    async def count(self) -> int:
        return len(self._records)

    async def close(self) -> None:
        self._records.clear()

    def __repr__(self) -> str:
        return f"InMemoryVectorStore(dimension={self.dimension}, rows={len(self._records)})"
