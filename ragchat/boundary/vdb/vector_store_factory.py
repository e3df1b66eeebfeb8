"""
Vector store factory for selecting between pgvector (prod) and in-memory (dev).

Depends on the RAG_STORE_TYPE environment variable.

Dependencies: ragchat.boundary.vdb, ragchat.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from ragchat.boundary.vdb.memory_store import InMemoryVectorStore
from ragchat.boundary.vdb.pgvector_store import PgVectorStore
from ragchat.boundary.vdb.vector_schemas import VectorStore
from ragchat.configs.rag import RagSettings

logger = logging.getLogger(__name__)


def get_vector_store(
    rag_config: RagSettings,
    engine: AsyncEngine | None = None,
    session_factory: async_sessionmaker | None = None,
) -> VectorStore:
    """
    Build the configured vector store.

    Args:
        rag_config: RAG settings (``store_type``, ``embedding_dimension``)
        engine: Shared async engine, required for ``pgvector``
        session_factory: Session factory bound to ``engine``

    Returns:
        PgVectorStore or InMemoryVectorStore

    Raises:
        ValueError: If RAG_STORE_TYPE is invalid or pgvector lacks an engine
    """
    store_type = rag_config.store_type.lower()

    if store_type == "pgvector":
        if engine is None or session_factory is None:
            raise ValueError("pgvector store requires an engine and a session factory")
        logger.info("Creating pgvector store", extra={"dimension": rag_config.embedding_dimension})
        return PgVectorStore(
            engine=engine,
            session_factory=session_factory,
            dimension=rag_config.embedding_dimension,
        )

    if store_type == "memory":
        logger.info("Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(dimension=rag_config.embedding_dimension)

    raise ValueError(
        f"Invalid RAG_STORE_TYPE: {store_type}. "
        f"Must be 'pgvector' (production) or 'memory' (local dev)."
    )
