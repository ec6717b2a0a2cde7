"""
Embedding generator interface.

Dependencies: None
System role: Embedding contract used by ingestion and retrieval
"""

from abc import ABC, abstractmethod


class EmbeddingGenerator(ABC):
    """Turns one text into a fixed-dimension vector."""

    @abstractmethod
    async def generate(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            ServiceError: On provider failure (auth, quota, network, timeout)
        """
