"""
Pipeline result model for document ingestion.

Dependencies: pydantic
System role: Return type for IngestionPipeline.ingest()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Result of ingesting one document."""

    owner_id: str = Field(description="Owner the vectors belong to")
    source_id: str = Field(description="Ingested source identifier")
    namespace: str = Field(description="Vector store namespace written to")
    chunk_count: int = Field(description="Number of chunks generated")
    vector_ids: list[str] = Field(default_factory=list, description="Upserted vector IDs in chunk order")
    batches_upserted: int = Field(default=0, description="Upsert calls committed")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
