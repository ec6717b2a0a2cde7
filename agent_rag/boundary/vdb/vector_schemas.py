"""
Vector database schemas.

Pydantic models for vector operations (records, metadata, matches).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field

# Metadata keys every knowledge-base record must carry to be returned by a query
REQUIRED_METADATA_FIELDS = ("owner_id", "content")


class VectorMetadata(BaseModel):
    """
    Metadata attached to each vector.

    `owner_id` is the isolation key: every query is filtered on it.
    """

    owner_id: str = Field(description="Owner (agent) the vector belongs to")
    source_id: str = Field(description="Source document identifier")
    source_name: str = Field(description="Human readable source name")
    source_url: str = Field(default="", description="Source location")
    index: int = Field(ge=0, description="Chunk position in the source")
    content: str = Field(description="Chunk text content")
    timestamp: float = Field(description="Unix timestamp of ingestion")


class VectorRecord(BaseModel):
    """Vector plus metadata as written to a store."""

    id: str = Field(description="Deterministic vector ID")
    vector: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict)


class VectorMatch(BaseModel):
    """Single result from a vector store query."""

    id: str
    score: float = Field(description="Similarity score, higher is closer")
    metadata: dict[str, Any] = Field(default_factory=dict)


def matches_filter(metadata: dict[str, Any], filter_dict: dict[str, Any] | None) -> bool:
    """
    Check metadata against an equality filter.

    A filter value may be given directly or as ``{"$eq": value}``.
    """
    if not filter_dict:
        return True
    for key, expected in filter_dict.items():
        if isinstance(expected, dict) and "$eq" in expected:
            expected = expected["$eq"]
        if metadata.get(key) != expected:
            return False
    return True
