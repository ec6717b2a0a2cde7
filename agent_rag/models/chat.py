"""
Chat domain models and schemas.

Conversation turns plus request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from agent_rag.models.citation import Citation


class TurnRole(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ConversationTurn(BaseModel):
    """Single immutable turn in a conversation history."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str
    timestamp: float = Field(default_factory=time.time, description="Unix timestamp")
    citations: tuple[Citation, ...] = Field(
        default=(),
        description="Sources cited by an assistant turn",
    )


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(min_length=1, description="User question or message")
    use_rag: bool = Field(
        default=True,
        description="Run knowledge-base retrieval and web search before answering",
    )


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str
    citations: list[Citation]
    phases: list[str] = Field(description="Pipeline phases visited, in order")
    degraded_phases: list[str] = Field(
        default_factory=list,
        description="Phases that fell back to a degraded contribution",
    )


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'system', 'user' or 'assistant'")
    content: str = Field(description="Message content")
    timestamp: float


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
