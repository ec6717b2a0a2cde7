"""
Vector database boundary layer.

Provides namespaced vector stores for storage and retrieval operations.
- InMemoryVectorStore: process-local cosine store
- FAISSVectorStore: LangChain FAISS indexes with optional persistence

Dependencies: faiss-cpu, langchain_community
System role: Vector store adapter for RAG retrieval
"""

from agent_rag.boundary.vdb.base import DEFAULT_MAX_BATCH_SIZE, VectorStore
from agent_rag.boundary.vdb.in_memory_store import InMemoryVectorStore
from agent_rag.boundary.vdb.vector_schemas import (
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    matches_filter,
)


__all__ = [
    "DEFAULT_MAX_BATCH_SIZE",
    "InMemoryVectorStore",
    "VectorMatch",
    "VectorMetadata",
    "VectorRecord",
    "VectorStore",
    "matches_filter",
]
