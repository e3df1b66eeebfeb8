"""
Chunk domain model.

A contiguous slice of an ingested document, produced by the chunker and
immutable afterwards.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Document chunk model."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    source_ordinal: int = Field(ge=0, description="Position of the chunk within its document")
    start_index: int = Field(ge=0, description="Character offset into the trimmed source text")
    size_bound: int = Field(gt=0, description="Maximum chunk size the chunk was cut to")
    overlap_bound: int = Field(ge=0, description="Overlap configured between neighbours")
