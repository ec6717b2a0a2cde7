"""
LLM provider interface.

Dependencies: pydantic, agent_rag.models
System role: Chat completion contract used by the orchestrator and summarizer
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pydantic import BaseModel, Field

from agent_rag.models.chat import ConversationTurn


class CompletionOptions(BaseModel):
    """Per-call generation overrides."""

    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: int | None = Field(default=None, ge=1)


class LLMProvider(ABC):
    """Chat-style completion provider."""

    @abstractmethod
    async def complete(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> str:
        """
        Return the full completion for a message list.

        Raises:
            ServiceError: On provider failure
        """

    @abstractmethod
    def stream(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield completion text fragments as they arrive."""
