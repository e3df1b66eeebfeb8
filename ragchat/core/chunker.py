"""
Text chunker using RecursiveCharacterTextSplitter.

Splits raw document text into overlapping chunks, preferring paragraph,
then line, then word boundaries before falling back to characters.

Dependencies: langchain_text_splitters, ragchat.models.chunk
System role: First stage of document ingestion
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from ragchat.core.exceptions import ValidationError
from ragchat.models.chunk import Chunk

# Priority order: paragraph, line, word, character
SEPARATORS = ["\n\n", "\n", " ", ""]


class TextChunker:
    """Split text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(self, chunk_size: int = 150, chunk_overlap: int = 20) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValidationError: When the size/overlap pair cannot produce chunks
        """
        if chunk_size <= 0:
            raise ValidationError(f"chunk_size must be positive, got {chunk_size}", field="chunk_size")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValidationError(
                f"chunk_overlap must be in [0, {chunk_size}), got {chunk_overlap}",
                field="chunk_overlap",
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=SEPARATORS,
            length_function=len,
        )

    def chunk(self, text: str) -> list[Chunk]:
        """
        Split text into chunks.

        Args:
            text: Raw document text; surrounding whitespace is ignored

        Returns:
            list[Chunk]: Ordered chunks, empty for blank input. ``start_index``
            is relative to the trimmed text.
        """
        trimmed = text.strip()
        if not trimmed:
            return []

        pieces = self._splitter.split_text(trimmed)
        return [
            Chunk(
                content=piece,
                source_ordinal=ordinal,
                start_index=start,
                size_bound=self.chunk_size,
                overlap_bound=self.chunk_overlap,
            )
            for ordinal, (piece, start) in enumerate(zip(pieces, self._offsets(trimmed, pieces)))
        ]

    def _offsets(self, source: str, pieces: list[str]) -> list[int]:
        """
        Character offset of each piece within ``source``.

        A piece starts after its predecessor's start, no earlier than
        ``chunk_overlap`` characters before the predecessor's end, and no
        later than the whitespace following it. The latest match inside that
        window is taken, so repeated text never maps back to an earlier copy.
        """
        offsets: list[int] = []
        start = end = 0
        for piece in pieces:
            if not offsets:
                found = 0
            else:
                lower = max(start + 1, end - self.chunk_overlap)
                upper = end
                while upper < len(source) and source[upper].isspace():
                    upper += 1
                found = source.rfind(piece, lower, upper + len(piece))
                if found < 0:
                    found = source.find(piece, start + 1)
                if found < 0:
                    found = source.find(piece)
            offsets.append(found)
            start, end = found, found + len(piece)
        return offsets


def chunk(text: str, max_size: int = 150, overlap: int = 20) -> list[Chunk]:
    """Split ``text`` with a one-off chunker."""
    return TextChunker(chunk_size=max_size, chunk_overlap=overlap).chunk(text)
