"""
Vector store configuration settings.

Selects the vector store backend and the embedding model used to
populate it. Namespaces partition vectors per agent.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for tests, FAISS for local persistence)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' or 'faiss'",
    )
    persist_directory: str | None = Field(
        default=None,
        description="Directory for FAISS index persistence (None keeps indexes in memory)",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension",
    )

    top_k: int = Field(default=5, description="Number of top results to retrieve", ge=1)
    namespace_prefix: str = Field(
        default="agent-",
        description="Prefix for per-agent knowledge namespaces",
    )
    web_namespace_prefix: str = Field(
        default="web-search-",
        description="Prefix for per-agent web search knowledge namespaces",
    )
