"""
Document chunk ORM model.

One row per ingested chunk: text, pgvector embedding, ordinal within the
ingestion call, and the id shared by every chunk of that call.

Dependencies: sqlalchemy, pgvector
System role: Vector storage for RAG retrieval
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ragchat.boundary.db.base import Base, CreatedAtMixin

EMBEDDING_DIMENSION = 1536


class DocumentChunkModel(Base, CreatedAtMixin):
    """
    Append-only document chunk.

    Attributes:
        id: Auto-increment primary key; ascending id is insertion order
        content: Chunk text
        embedding: 1536-dimension vector
        chunk_index: Ordinal of the chunk within its ingestion call (>= 0)
        document_id: Id shared by all chunks of one ingestion call
        created_at: Insertion timestamp (UTC)

    Indexes:
        embedding_index: HNSW over ``embedding`` with cosine operators
        ix_documents_document_id: grouping/filtering by document
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)
    chunk_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    document_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index(
            "embedding_index",
            "embedding",
            postgresql_using="hnsw",
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
        Index("ix_documents_document_id", "document_id"),
    )
