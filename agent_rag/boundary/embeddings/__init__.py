"""
Embedding boundary layer.

Dependencies: langchain_google_genai
System role: Embedding adapters
"""

from agent_rag.boundary.embeddings.base import EmbeddingGenerator

__all__ = ["EmbeddingGenerator"]
