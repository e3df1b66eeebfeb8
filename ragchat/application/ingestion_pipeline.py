"""
Document ingestion pipeline.

Chunk -> embed -> insert, one chunk at a time. There is no batch
transaction: chunks stored before a failure stay stored and the failing
step's error propagates to the caller.

Dependencies: ragchat.core, ragchat.boundary.vdb
System role: Write path of the RAG knowledge base
"""

import logging
import uuid
from dataclasses import dataclass

from ragchat.boundary.vdb.vector_schemas import VectorStore
from ragchat.core.chunker import TextChunker
from ragchat.core.embedding_client import EmbeddingClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one ingestion call."""

    document_id: uuid.UUID | None
    chunk_count: int


class IngestionPipeline:
    """Turns raw text into stored, embedded chunks."""

    def __init__(
        self,
        chunker: TextChunker,
        embedding_client: EmbeddingClient,
        vector_store: VectorStore,
    ) -> None:
        self.chunker = chunker
        self.embedding_client = embedding_client
        self.vector_store = vector_store

    async def ingest(
        self,
        raw_text: str,
        document_id: uuid.UUID | None = None,
    ) -> IngestionResult:
        """
        Chunk, embed and store ``raw_text``.

        Args:
            raw_text: Document text; blank input is a no-op
            document_id: Groups the chunks; a fresh uuid4 when omitted

        Returns:
            IngestionResult: Document id and number of stored chunks

        Raises:
            EmbeddingProviderError: Embedding a chunk failed
            PersistenceError: Storing a chunk failed
        """
        text = (raw_text or "").strip()
        if not text:
            logger.info("Skipping ingestion of blank text")
            return IngestionResult(document_id=None, chunk_count=0)

        chunks = self.chunker.chunk(text)
        document_id = document_id or uuid.uuid4()
        logger.info(
            "Ingesting document",
            extra={"document_id": str(document_id), "chars": len(text), "chunks": len(chunks)},
        )

        stored = 0
        for chunk in chunks:
            embedding = await self.embedding_client.embed(chunk.content)
            await self.vector_store.insert(
                content=chunk.content,
                embedding=embedding,
                chunk_index=chunk.source_ordinal,
                document_id=document_id,
            )
            stored += 1

        logger.info(
            "Document ingested",
            extra={"document_id": str(document_id), "chunks": stored},
        )
        return IngestionResult(document_id=document_id, chunk_count=stored)
