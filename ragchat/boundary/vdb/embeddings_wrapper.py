"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

GoogleGenerativeAIEmbeddings ignores ``output_dimensionality`` given to the
constructor, so every call is pinned here to the dimension of the
``documents`` table (1536).

Dependencies: langchain_google_genai
System role: Embedding dimension consistency for the pgvector schema
"""

import logging
from typing import Any

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings pinned to a single output dimension."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs: Any,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Dimension enforced on every call
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            "Initialized fixed-dimension embeddings",
            extra={"model": model, "output_dimensionality": output_dimensionality},
        )

    def embed_documents(self, texts: list[str], **kwargs: Any) -> list[list[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs: Any) -> list[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)
