"""Chunk models."""

from pydantic import BaseModel, ConfigDict, Field


class TextChunk(BaseModel):
    """A chunk of text produced by the chunking service."""

    model_config = ConfigDict(frozen=True)

    chunk_index: int = Field(..., ge=0, description="0-based index of this chunk within the document")
    text: str = Field(..., min_length=1, description="Chunk text content")
