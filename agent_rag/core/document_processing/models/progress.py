"""
Ingestion progress events.

Dependencies: pydantic
System role: Progress reporting contract for ingestion callers
"""

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, Field


class IngestionOperation(str, Enum):
    """Pipeline stage reported by a progress event."""

    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    INDEXING = "indexing"


class IngestionProgress(BaseModel):
    """Snapshot of ingestion progress."""

    total_chunks: int = Field(ge=0)
    processed_chunks: int = Field(ge=0)
    current_operation: IngestionOperation


ProgressCallback = Callable[[IngestionProgress], None]
