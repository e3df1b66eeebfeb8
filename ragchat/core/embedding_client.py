"""
Embedding client.

Converts a text segment into a fixed-length vector. The same instance is
shared by ingestion, retrieval and semantic memory so that every vector
lives in one metric space.

Dependencies: langchain_core, fastapi.concurrency, ragchat.core.exceptions
System role: Embedding generation adapter
"""

import logging

from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings

from ragchat.core.exceptions import EmbeddingProviderError, EmptyInputError

logger = logging.getLogger(__name__)

EmbeddingVector = list[float]


class EmbeddingClient:
    """Single-text embedding client over any LangChain ``Embeddings``."""

    def __init__(
        self,
        embeddings: Embeddings,
        dimension: int = 1536,
        model_name: str | None = None,
    ) -> None:
        """
        Args:
            embeddings: LangChain embeddings implementation (provider call)
            dimension: Expected vector length
            model_name: Model identifier used in errors and logs
        """
        self._embeddings = embeddings
        self.dimension = dimension
        self.model_name = model_name or type(embeddings).__name__

    async def embed(self, text: str) -> EmbeddingVector:
        """
        Embed one text.

        The blocking provider call runs in the thread pool. No retry.

        Args:
            text: Text to embed; surrounding whitespace is ignored

        Returns:
            EmbeddingVector: Vector of exactly ``dimension`` floats

        Raises:
            EmptyInputError: Text is blank (no provider call is made)
            EmbeddingProviderError: Provider failed or returned a bad vector
        """
        value = text.strip()
        if not value:
            raise EmptyInputError("Cannot create embedding for empty text", field="text")

        try:
            vector = await run_in_threadpool(self._embeddings.embed_query, value)
        except Exception as e:
            raise EmbeddingProviderError(
                f"Embedding provider call failed: {e}",
                model=self.model_name,
                details={"error_type": type(e).__name__},
            ) from e

        if not vector:
            raise EmbeddingProviderError("Embedding provider returned an empty embedding", model=self.model_name)
        if len(vector) != self.dimension:
            raise EmbeddingProviderError(
                f"Embedding has {len(vector)} dimensions, expected {self.dimension}",
                model=self.model_name,
            )

        logger.debug("Embedded text", extra={"text_len": len(value), "model": self.model_name})
        return [float(x) for x in vector]
