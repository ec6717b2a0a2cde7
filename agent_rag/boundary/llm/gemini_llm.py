"""
Gemini chat provider.

Adapts ChatGoogleGenerativeAI to the LLMProvider interface. Conversation
turns are converted to LangChain messages; provider errors are wrapped
into ServiceError.

Dependencies: langchain_google_genai, langchain_core
System role: LLM adapter for answer composition and summarization
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from agent_rag.boundary.llm.base import CompletionOptions, LLMProvider
from agent_rag.configs.orchestrator import OrchestratorSettings
from agent_rag.core.exceptions import ServiceError
from agent_rag.models.chat import ConversationTurn, TurnRole

logger = logging.getLogger(__name__)


def to_langchain_messages(turns: list[ConversationTurn]) -> list[BaseMessage]:
    """Convert conversation turns to LangChain chat messages."""
    messages: list[BaseMessage] = []
    for turn in turns:
        if turn.role == TurnRole.SYSTEM:
            messages.append(SystemMessage(content=turn.content))
        elif turn.role == TurnRole.ASSISTANT:
            messages.append(AIMessage(content=turn.content))
        else:
            messages.append(HumanMessage(content=turn.content))
    return messages


def content_to_text(content: Any) -> str:
    """Flatten string or list message content into plain text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str)
            else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GeminiLLMProvider(LLMProvider):
    """ChatGoogleGenerativeAI-backed LLM provider."""

    def __init__(self, model: BaseChatModel) -> None:
        self._model = model

    @classmethod
    def from_settings(cls, settings: OrchestratorSettings) -> "GeminiLLMProvider":
        return cls(
            ChatGoogleGenerativeAI(
                model=settings.llm_model,
                temperature=settings.temperature,
            )
        )

    def _configured(self, options: CompletionOptions | None) -> BaseChatModel:
        if options is None:
            return self._model
        update = options.model_dump(exclude_none=True)
        if not update:
            return self._model
        return self._model.model_copy(update=update)

    async def complete(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> str:
        logger.info(f"{__name__}:complete - START message_count={len(messages)}")
        try:
            response = await self._configured(options).ainvoke(to_langchain_messages(messages))
        except Exception as e:
            logger.error(f"{__name__}:complete - FAILED: {type(e).__name__}: {e}")
            raise ServiceError(
                f"LLM completion failed: {e}",
                provider="llm",
                operation="complete",
            ) from e
        text = content_to_text(response.content)
        logger.info(f"{__name__}:complete - END answer_len={len(text)}")
        return text

    async def stream(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]:
        token_count = 0
        try:
            async for chunk in self._configured(options).astream(to_langchain_messages(messages)):
                token = content_to_text(chunk.content)
                if token:
                    token_count += 1
                    yield token
        except Exception as e:
            logger.error(f"{__name__}:stream - FAILED after {token_count} tokens: {type(e).__name__}: {e}")
            raise ServiceError(
                f"LLM streaming failed: {e}",
                provider="llm",
                operation="stream",
            ) from e
        logger.info(f"{__name__}:stream - END tokens={token_count}")
