"""
Citation domain model.

Represents a source backing a composed answer: a web page returned by the
search provider or a knowledge-base passage.

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, Field


class Citation(BaseModel):
    """Citation model for source attribution."""

    url: str = Field(description="Source URL or knowledge-base URI")
    title: str = Field(description="Source title or document name")
    snippet: str = Field(default="", description="Short excerpt from the source")
    relevance_score: float = Field(description="Relevance of the source (0.0-1.0)")
