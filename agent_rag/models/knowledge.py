"""
Knowledge base API schemas.

Dependencies: pydantic
System role: Ingestion and retrieval contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from agent_rag.models.web_search import WebSearchResult


class KnowledgeSource(str, Enum):
    """Which of an agent's namespaces to search."""

    DOCUMENTS = "documents"
    WEB = "web"


class IngestFileRequest(BaseModel):
    """Uploaded document content to ingest."""

    file_name: str = Field(min_length=1)
    content: str
    file_url: str = ""


class IngestWebResultRequest(BaseModel):
    """Web search result to save into the agent's web namespace."""

    result: WebSearchResult
    content: str | None = Field(default=None, description="Page text (defaults to title and snippet)")


class KnowledgeQueryRequest(BaseModel):
    """Knowledge base query."""

    query: str
    top_k: int = Field(default=5, description="Maximum matches to return")
    source: KnowledgeSource = KnowledgeSource.DOCUMENTS


class KnowledgeMatchResponse(BaseModel):
    """Single knowledge base match."""

    content: str
    source: str
    score: float
    source_url: str = ""


class KnowledgeQueryResponse(BaseModel):
    """Knowledge base query results."""

    matches: list[KnowledgeMatchResponse]
    total: int
