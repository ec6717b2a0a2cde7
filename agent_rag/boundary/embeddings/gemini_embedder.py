"""
Gemini embedding generator.

Generates embeddings using Google Gemini through FixedDimensionEmbeddings.

Dependencies: langchain-google-genai, agent_rag.configs
System role: Embedding generation adapter
"""

import logging

from langchain_core.embeddings import Embeddings

from agent_rag.boundary.embeddings.base import EmbeddingGenerator
from agent_rag.boundary.embeddings.embeddings_wrapper import FixedDimensionEmbeddings
from agent_rag.configs.vector_store import VectorStoreSettings
from agent_rag.core.exceptions import ServiceError

logger = logging.getLogger(__name__)


class GeminiEmbeddingGenerator(EmbeddingGenerator):
    """Gemini embedding generator."""

    def __init__(self, embeddings: Embeddings) -> None:
        """
        Args:
            embeddings: LangChain embeddings client (usually FixedDimensionEmbeddings)
        """
        self._embeddings = embeddings

    @classmethod
    def from_settings(cls, settings: VectorStoreSettings) -> "GeminiEmbeddingGenerator":
        """Build a generator for the configured model and dimension."""
        return cls(
            FixedDimensionEmbeddings(
                model=settings.embedding_model,
                output_dimensionality=settings.embedding_dimension,
            )
        )

    async def generate(self, text: str) -> list[float]:
        """
        Generate embedding for text.

        Args:
            text: Chunk or query text

        Returns:
            list[float]: Embedding vector

        Raises:
            ServiceError: If the Gemini call fails
        """
        try:
            return await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:generate - FAILED: {type(e).__name__}: {e}")
            raise ServiceError(
                f"Embedding generation failed: {e}",
                provider="embeddings",
                operation="generate",
                details={"text_length": len(text)},
            ) from e
