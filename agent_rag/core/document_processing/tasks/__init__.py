"""
Task modules for document processing pipeline.

Exports: ParsingTask, Chunker, EmbeddingTask, VectorStoreTask
"""

from .chunking_task import Chunker, chunk_text
from .embedding_task import EmbeddingTask
from .parsing_task import ParsingError, ParsingTask, normalize_text
from .vector_store_task import VectorStoreTask

__all__ = [
    "Chunker",
    "EmbeddingTask",
    "ParsingError",
    "ParsingTask",
    "VectorStoreTask",
    "chunk_text",
    "normalize_text",
]
