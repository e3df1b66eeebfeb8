"""
Test suite for TextChunker.

Covers size/overlap validation, blank input, size bounds, ordinals and
reconstruction of the source text from chunk offsets.

System role: Verification of document chunking
"""

import pytest

from ragchat.core.chunker import SEPARATORS, TextChunker, chunk
from ragchat.core.exceptions import ValidationError

SAMPLE_TEXT = (
    "Retrieval-augmented generation combines search with language models.\n\n"
    "Documents are split into overlapping chunks, embedded, and stored in a "
    "vector index. At question time the closest chunks are retrieved and "
    "handed to the model as context.\n"
    "This keeps answers grounded in the uploaded material."
)


class TestTextChunkerInit:
    """Test suite for TextChunker configuration validation."""

    def test_init_should_use_default_size_and_overlap(self) -> None:
        """Test defaults are 150 characters with 20 overlap."""
        chunker = TextChunker()

        assert chunker.chunk_size == 150
        assert chunker.chunk_overlap == 20

    @pytest.mark.parametrize("size", [0, -5])
    def test_init_should_reject_non_positive_size(self, size: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TextChunker(chunk_size=size, chunk_overlap=0)

        assert exc_info.value.field == "chunk_size"

    @pytest.mark.parametrize("overlap", [-1, 10, 11])
    def test_init_should_reject_overlap_outside_range(self, overlap: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TextChunker(chunk_size=10, chunk_overlap=overlap)

        assert exc_info.value.field == "chunk_overlap"

    def test_separators_should_prefer_paragraphs_then_lines_then_words(self) -> None:
        assert SEPARATORS == ["\n\n", "\n", " ", ""]


class TestTextChunkerChunk:
    """Test suite for TextChunker.chunk()."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t \n"])
    def test_chunk_should_return_empty_list_for_blank_text(self, text: str) -> None:
        assert TextChunker().chunk(text) == []

    def test_chunk_should_return_single_chunk_for_short_text(self) -> None:
        # Act
        chunks = TextChunker().chunk("  The sky is blue.  ")

        # Assert
        assert len(chunks) == 1
        assert chunks[0].content == "The sky is blue."
        assert chunks[0].source_ordinal == 0
        assert chunks[0].start_index == 0

    def test_chunk_should_respect_size_bound(self) -> None:
        chunks = TextChunker(chunk_size=40, chunk_overlap=8).chunk(SAMPLE_TEXT)

        assert len(chunks) > 1
        assert all(0 < len(c.content) <= 40 for c in chunks)
        assert all(c.size_bound == 40 and c.overlap_bound == 8 for c in chunks)

    def test_chunk_should_number_chunks_in_order(self) -> None:
        chunks = TextChunker(chunk_size=40, chunk_overlap=8).chunk(SAMPLE_TEXT)

        assert [c.source_ordinal for c in chunks] == list(range(len(chunks)))
        starts = [c.start_index for c in chunks]
        assert starts == sorted(starts)

    def test_chunk_offsets_should_point_at_chunk_content(self) -> None:
        # Arrange
        text = f"\n  {SAMPLE_TEXT}  \n"
        trimmed = text.strip()

        # Act
        chunks = TextChunker(chunk_size=50, chunk_overlap=10).chunk(text)

        # Assert
        for c in chunks:
            assert trimmed[c.start_index:c.start_index + len(c.content)] == c.content

    def test_chunk_offsets_should_follow_repeated_text(self) -> None:
        """Identical chunks map to successive copies, not the first one."""
        chunks = TextChunker(chunk_size=5, chunk_overlap=3).chunk("ab ab ab ab ab ab")

        assert [(c.content, c.start_index) for c in chunks] == [
            ("ab ab", 0),
            ("ab", 6),
            ("ab", 9),
            ("ab", 12),
            ("ab", 15),
        ]

    def test_chunk_offsets_should_advance_through_single_long_word(self) -> None:
        chunks = TextChunker(chunk_size=10, chunk_overlap=0).chunk("a" * 35)

        assert [c.start_index for c in chunks] == [0, 10, 20, 30]

    def test_chunks_should_cover_every_word_of_the_text(self) -> None:
        """Concatenating chunks with overlaps removed reconstructs the text."""
        # Arrange
        trimmed = SAMPLE_TEXT.strip()

        # Act
        chunks = TextChunker(chunk_size=50, chunk_overlap=10).chunk(SAMPLE_TEXT)

        # Assert
        covered = [False] * len(trimmed)
        for c in chunks:
            for i in range(c.start_index, c.start_index + len(c.content)):
                covered[i] = True
        uncovered = "".join(ch for ch, seen in zip(trimmed, covered) if not seen)
        assert uncovered.strip() == ""

    def test_chunk_should_split_long_word_by_characters(self) -> None:
        chunks = TextChunker(chunk_size=10, chunk_overlap=0).chunk("a" * 35)

        assert [len(c.content) for c in chunks] == [10, 10, 10, 5]


class TestChunkFunction:
    """Test suite for the module-level chunk() helper."""

    def test_chunk_should_apply_given_bounds(self) -> None:
        chunks = chunk("The sky is blue. Paris is in France.", max_size=20, overlap=5)

        assert len(chunks) >= 2
        assert all(len(c.content) <= 20 for c in chunks)
