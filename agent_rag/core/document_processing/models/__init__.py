"""
Models for document processing pipeline.

Exports: Chunk, EmbeddedChunk, SourceDocument, SourceKind, IngestionProgress,
IngestionOperation, IngestionResult
"""

from .chunk import Chunk, EmbeddedChunk, SourceDocument, SourceKind, build_vector_id
from .pipeline_result import IngestionResult
from .progress import IngestionOperation, IngestionProgress, ProgressCallback

__all__ = [
    "Chunk",
    "EmbeddedChunk",
    "IngestionOperation",
    "IngestionProgress",
    "IngestionResult",
    "ProgressCallback",
    "SourceDocument",
    "SourceKind",
    "build_vector_id",
]
