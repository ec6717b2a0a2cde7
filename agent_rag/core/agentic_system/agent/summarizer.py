"""
Text summarizers used by the answer pipeline.

Dependencies: agent_rag.boundary.llm
System role: Summarize stage collaborator
"""

from abc import ABC, abstractmethod

from agent_rag.boundary.llm.base import CompletionOptions, LLMProvider
from agent_rag.core.agentic_system.agent.orchestrator_prompt import SUMMARY_PROMPT
from agent_rag.models.chat import ConversationTurn, TurnRole


class Summarizer(ABC):
    """Condenses text into a short summary."""

    @abstractmethod
    async def summarize(self, content: str) -> str:
        """Raises ServiceError on provider failure."""


class LLMSummarizer(Summarizer):
    """Summarizer that prompts an LLM provider."""

    def __init__(self, llm: LLMProvider, temperature: float = 0.0) -> None:
        self._llm = llm
        self._options = CompletionOptions(temperature=temperature)

    async def summarize(self, content: str) -> str:
        prompt = SUMMARY_PROMPT.format(content=content)
        return await self._llm.complete(
            [ConversationTurn(role=TurnRole.USER, content=prompt)],
            self._options,
        )
