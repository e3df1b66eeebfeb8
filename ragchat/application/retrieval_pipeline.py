"""
Retrieval pipeline.

Embeds a query once and runs one similarity search. Failures never reach
the caller: they come back as an empty outcome tagged with the reason so
chat can carry on without context.

Dependencies: ragchat.core, ragchat.boundary.vdb
System role: Read path of the RAG knowledge base
"""

import logging
from dataclasses import dataclass, field

from ragchat.boundary.vdb.vector_schemas import RetrievalResult, VectorStore
from ragchat.core.embedding_client import EmbeddingClient
from ragchat.core.exceptions import RetrievalError
from ragchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetrievalOutcome:
    """Ranked results, or an empty list plus the reason retrieval failed."""

    results: list[RetrievalResult] = field(default_factory=list)
    error: str | None = None

    @property
    def has_context(self) -> bool:
        return bool(self.results)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def empty(cls, error: str | None = None) -> "RetrievalOutcome":
        return cls(results=[], error=error)


class RetrievalPipeline:
    """Query -> embedding -> top-k chunks."""

    def __init__(self, embedding_client: EmbeddingClient, vector_store: VectorStore) -> None:
        self.embedding_client = embedding_client
        self.vector_store = vector_store

    async def retrieve(self, query: str, limit: int = 5) -> RetrievalOutcome:
        """
        Top ``limit`` chunks for ``query``, most similar first.

        Blank queries return an empty outcome without calling the embedding
        provider or the store.
        """
        text = (query or "").strip()
        if not text:
            return RetrievalOutcome.empty()

        try:
            embedding = await self.embedding_client.embed(text)
            results = await self.vector_store.search(embedding, limit)
        except Exception as e:
            reason = RetrievalError(f"Retrieval failed: {e}", details={"cause": type(e).__name__})
            log_exception_with_context(
                logger,
                "Retrieval failed, continuing without context",
                e,
                level=logging.WARNING,
                query_chars=len(text),
                limit=limit,
            )
            return RetrievalOutcome.empty(error=reason.message)

        logger.info("Retrieved chunks", extra={"count": len(results), "limit": limit})
        return RetrievalOutcome(results=results)
