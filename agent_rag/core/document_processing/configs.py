"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for chunking, embedding and indexing.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=500,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=50,
        description="Overlap between consecutive chunks",
    )
    respect_sentence_boundaries: bool = Field(
        default=False,
        description="Prefer cutting chunks after the last sentence end in the overlap window",
    )

    # Embedding settings
    max_concurrent_embeddings: int = Field(
        default=5,
        ge=1,
        description="Embedding calls allowed in flight at once",
    )
    embedding_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single embedding call",
    )
    embedding_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per chunk before the ingestion fails",
    )
    embedding_retry_initial_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Initial backoff between embedding attempts",
    )

    # Indexing settings
    upsert_batch_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Vectors per upsert call",
    )

    # Content limits
    max_file_content_length: int = Field(
        default=1_000_000,
        description="Maximum characters accepted for a local document",
    )
    max_web_content_length: int = Field(
        default=100_000,
        description="Maximum characters accepted for a web search result",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
