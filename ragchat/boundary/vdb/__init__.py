"""
Vector database boundary layer.

- PgVectorStore: PostgreSQL/pgvector store (HNSW cosine index)
- InMemoryVectorStore: exact numpy store for development and tests

Dependencies: pgvector, sqlalchemy, numpy
System role: Vector store adapters for RAG retrieval
"""

from ragchat.boundary.vdb.memory_store import InMemoryVectorStore
from ragchat.boundary.vdb.pgvector_store import PgVectorStore
from ragchat.boundary.vdb.vector_schemas import EmbeddingVector, RetrievalResult, VectorStore
from ragchat.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "EmbeddingVector",
    "InMemoryVectorStore",
    "PgVectorStore",
    "RetrievalResult",
    "VectorStore",
    "get_vector_store",
]
