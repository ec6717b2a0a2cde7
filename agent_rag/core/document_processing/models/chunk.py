"""
Chunk domain models for document processing pipeline.

A chunk is a contiguous slice of source text; its position in the source
gives it a deterministic vector ID, which makes re-ingestion idempotent.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def build_vector_id(owner_id: str, source_id: str, index: int) -> str:
    """Deterministic vector ID for the chunk at `index` of a source."""
    return f"{owner_id}-{source_id}-{index}"


class SourceKind(str, Enum):
    """Origin of ingested content, which selects the size limit."""

    FILE = "file"
    WEB = "web"


class SourceDocument(BaseModel):
    """Metadata describing the document being ingested."""

    source_id: str = Field(min_length=1, description="Stable source identifier (file name or URL)")
    name: str = Field(description="Human readable name or title")
    url: str = Field(default="", description="Location of the source (storage URL or web URL)")
    kind: SourceKind = Field(default=SourceKind.FILE)


class Chunk(BaseModel):
    """Document chunk tagged with its owner, source and position."""

    model_config = ConfigDict(frozen=True)

    owner_id: str = Field(description="Owner (agent) the chunk belongs to")
    source_id: str = Field(description="Source document identifier")
    index: int = Field(ge=0, description="Position of the chunk in its source")
    text: str = Field(description="Chunk text content")

    @property
    def vector_id(self) -> str:
        return build_vector_id(self.owner_id, self.source_id, self.index)


class EmbeddedChunk(BaseModel):
    """Chunk paired with the embedding generated for it."""

    chunk: Chunk
    embedding: list[float]
