"""
PostgreSQL + pgvector document store.

Persists chunk embeddings in the ``documents`` table and answers cosine
nearest-neighbour queries through the HNSW index. The session factory is
injected; every call opens one session and releases it on exit, so no
transaction spans more than one chunk.

Dependencies: sqlalchemy, pgvector, asyncpg, ragchat.boundary.db
System role: Production vector store
"""

import logging
import uuid

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from ragchat.boundary.db.create_tables import create_documents_schema
from ragchat.boundary.db.models.document_chunk_model import DocumentChunkModel
from ragchat.boundary.vdb.vector_schemas import (
    EmbeddingVector,
    RetrievalResult,
    clamp_similarity,
)
from ragchat.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class PgVectorStore:
    """
    pgvector-backed vector store.

    Attributes:
        dimension: Required embedding length
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker,
        dimension: int = 1536,
        owns_engine: bool = False,
    ) -> None:
        """
        Args:
            engine: Async engine used for schema DDL
            session_factory: Factory producing one session per call
            dimension: Required embedding length
            owns_engine: Dispose the engine on ``close()``; False when the
                engine is shared with the conversation memory
        """
        self._engine = engine
        self._session_factory = session_factory
        self._owns_engine = owns_engine
        self.dimension = dimension

    async def initialize(self) -> None:
        """
        Create extension, table and HNSW index if missing. Safe to repeat.

        Raises:
            PersistenceError: If the database is unreachable or DDL fails
        """
        try:
            async with self._engine.begin() as conn:
                await create_documents_schema(conn)
        except SQLAlchemyError as e:
            raise PersistenceError(
                "Failed to initialize documents table",
                operation="initialize",
                details={"error": str(e)},
            ) from e
        logger.info("Documents vector table ready", extra={"dimension": self.dimension})

    async def insert(
        self,
        content: str,
        embedding: EmbeddingVector,
        chunk_index: int,
        document_id: uuid.UUID | None = None,
    ) -> None:
        """
        Append one chunk record.

        Raises:
            PersistenceError: Wrong dimension, negative index, or store failure
        """
        self._check_record(embedding, chunk_index)
        try:
            async with self._session_factory() as session:
                session.add(
                    DocumentChunkModel(
                        content=content,
                        embedding=embedding,
                        chunk_index=chunk_index,
                        document_id=document_id,
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(
                "Failed to insert document chunk",
                operation="insert",
                details={"error": str(e), "chunk_index": chunk_index},
            ) from e

    async def search(
        self,
        query_embedding: EmbeddingVector,
        limit: int,
        document_id: uuid.UUID | None = None,
    ) -> list[RetrievalResult]:
        """
        Nearest chunks by cosine similarity, most similar first.

        Ties are broken by ascending id (insertion order).

        Args:
            query_embedding: Query vector
            limit: Maximum results; values below 1 return nothing
            document_id: Restrict the search to one ingested document

        Raises:
            PersistenceError: Wrong dimension or store failure
        """
        if limit < 1:
            return []
        if len(query_embedding) != self.dimension:
            raise PersistenceError(
                f"Query embedding has {len(query_embedding)} dimensions, expected {self.dimension}",
                operation="search",
            )

        distance = DocumentChunkModel.embedding.cosine_distance(query_embedding)
        stmt = (
            select(
                DocumentChunkModel.id,
                DocumentChunkModel.content,
                DocumentChunkModel.chunk_index,
                DocumentChunkModel.document_id,
                (1 - distance).label("similarity"),
            )
            .order_by(distance.asc(), DocumentChunkModel.id.asc())
            .limit(limit)
        )
        if document_id is not None:
            stmt = stmt.where(DocumentChunkModel.document_id == document_id)

        try:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise PersistenceError(
                "Failed to query document chunks",
                operation="search",
                details={"error": str(e), "limit": limit},
            ) from e

        return [
            RetrievalResult(
                id=row.id,
                content=row.content,
                chunk_index=row.chunk_index,
                document_id=row.document_id,
                similarity=clamp_similarity(row.similarity),
            )
            for row in rows
        ]

    async def count(self) -> int:
        """Number of stored chunks."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(text("SELECT count(*) FROM documents"))
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to count document chunks", operation="count") from e

    async def close(self) -> None:
        """Dispose the engine's connection pool when this store owns it."""
        if self._owns_engine:
            await self._engine.dispose()

    def _check_record(self, embedding: EmbeddingVector, chunk_index: int) -> None:
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

    def __repr__(self) -> str:
        return f"PgVectorStore(dimension={self.dimension})"
