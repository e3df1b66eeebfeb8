"""
Database schema initialization.

Creates the pgvector extension, the ``documents`` vector table and the
conversation memory tables. Every statement is IF NOT EXISTS, so running
it on each startup is safe.

Dependencies: sqlalchemy, ragchat.boundary.db
System role: Database schema initialization

Usage:
    python -m ragchat.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from ragchat.boundary.db.base import Base
from ragchat.boundary.db.models import (
    ConversationModel,
    DocumentChunkModel,
    MessageModel,
)

logger = logging.getLogger(__name__)

# Columns added after the first release; old tables are upgraded in place
_DOCUMENTS_BACKFILL = (
    "ALTER TABLE documents ADD COLUMN IF NOT EXISTS chunk_index INT",
    "ALTER TABLE documents ADD COLUMN IF NOT EXISTS document_id UUID",
    "ALTER TABLE documents ADD COLUMN IF NOT EXISTS created_at TIMESTAMPTZ NOT NULL DEFAULT now()",
    "CREATE INDEX IF NOT EXISTS ix_documents_document_id ON documents (document_id)",
)

# Older deployments created the cosine index under another name
_FIND_COSINE_INDEX = (
    "SELECT indexname FROM pg_indexes "
    "WHERE tablename = 'documents' AND indexdef LIKE '%vector_cosine_ops%'"
)
_CREATE_COSINE_INDEX = (
    "CREATE INDEX IF NOT EXISTS embedding_index ON documents USING hnsw (embedding vector_cosine_ops)"
)


async def create_documents_schema(conn: AsyncConnection) -> None:
    """
    Ensure the pgvector extension and the ``documents`` table exist.

    Args:
        conn: Connection inside an open transaction (``engine.begin()``)
    """
    await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    await conn.run_sync(
        Base.metadata.create_all,
        tables=[DocumentChunkModel.__table__],
        checkfirst=True,
    )
    for statement in _DOCUMENTS_BACKFILL:
        await conn.execute(text(statement))

    existing = (await conn.execute(text(_FIND_COSINE_INDEX))).first()
    if existing is None:
        await conn.execute(text(_CREATE_COSINE_INDEX))
    else:
        logger.debug("Cosine index already present", extra={"index": existing[0]})


async def create_memory_schema(conn: AsyncConnection) -> None:
    """Ensure the ``conversations`` and ``messages`` tables exist."""
    if conn.dialect.name == "postgresql":
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    await conn.run_sync(
        Base.metadata.create_all,
        tables=[ConversationModel.__table__, MessageModel.__table__],
        checkfirst=True,
    )


async def create_all_tables(engine: AsyncEngine) -> None:
    """
    Create every table used by the application.

    Raises:
        SQLAlchemyError: If the database is unreachable or DDL fails
    """
    async with engine.begin() as conn:
        await create_documents_schema(conn)
        await create_memory_schema(conn)
    logger.info("Database schema ready (documents, conversations, messages)")


async def _main() -> None:
    from ragchat.boundary.db.connection import create_engine_from_settings
    from ragchat.configs import get_settings
    from ragchat.observability.logger import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_engine_from_settings(settings.database)
    try:
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
