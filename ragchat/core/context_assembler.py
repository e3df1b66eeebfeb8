"""
Context assembler.

Merges retrieved snippets into a bounded prompt fragment and wraps it in
the system message sent ahead of the user's question.

Dependencies: langchain_core, ragchat.boundary.vdb.vector_schemas
System role: Prompt context construction for RAG
"""

from collections.abc import Sequence

from langchain_core.messages import SystemMessage

from ragchat.boundary.vdb.vector_schemas import RetrievalResult

SNIPPET_SEPARATOR = "\n\n---\n\n"
CONTEXT_PREAMBLE = (
    "The following snippets are from the user's uploaded documents. "
    "Use them if relevant:\n\n"
)


class ContextAssembler:
    """Formats retrieval results as numbered, size-capped snippets."""

    def __init__(self, snippet_max_chars: int = 1000, max_chars: int = 4000) -> None:
        """
        Args:
            snippet_max_chars: Cap applied to each snippet's content
            max_chars: Hard cap on the joined context
        """
        self.snippet_max_chars = snippet_max_chars
        self.max_chars = max_chars

    def assemble(
        self,
        results: Sequence[RetrievalResult],
        max_chars: int | None = None,
    ) -> str:
        """
        Join results as ``Snippet n:`` blocks, then cut to ``max_chars``.

        Args:
            results: Retrieval results in rank order
            max_chars: Override of the configured hard cap

        Returns:
            str: Context text, or "" when there are no results
        """
        if not results:
            return ""

        limit = self.max_chars if max_chars is None else max_chars
        snippets = [
            f"Snippet {n}:\n{result.content[: self.snippet_max_chars]}"
            for n, result in enumerate(results, start=1)
        ]
        return SNIPPET_SEPARATOR.join(snippets)[: max(limit, 0)]

    @staticmethod
    def build_context_message(context: str) -> SystemMessage | None:
        """
        System message carrying the assembled context.

        Returns:
            SystemMessage, or None for an empty context so the caller omits
            the message entirely
        """
        if not context:
            return None
        return SystemMessage(content=CONTEXT_PREAMBLE + context)
