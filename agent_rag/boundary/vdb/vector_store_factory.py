"""
Vector store factory for selecting between in-memory and FAISS stores.

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: agent_rag.boundary.vdb, agent_rag.configs
System role: Vector store instantiation and selection
"""

import logging

from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.boundary.vdb.faiss_store import FAISSVectorStore
from agent_rag.boundary.vdb.in_memory_store import InMemoryVectorStore
from agent_rag.configs.vector_store import VectorStoreSettings
from agent_rag.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def get_vector_store(settings: VectorStoreSettings) -> VectorStore:
    """
    Build the vector store named by configuration.

    Args:
        settings: Vector store settings

    Returns:
        VectorStore: InMemoryVectorStore or FAISSVectorStore

    Raises:
        ConfigError: If store_type is not recognised
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store")
        return InMemoryVectorStore()

    if store_type == "faiss":
        logger.info(
            f"{__name__}:get_vector_store - Creating FAISS vector store "
            f"(persist_directory={settings.persist_directory})"
        )
        return FAISSVectorStore(persist_directory=settings.persist_directory)

    raise ConfigError(
        f"Invalid vector store type: {store_type}. Must be 'memory' or 'faiss'.",
        field="store_type",
    )
