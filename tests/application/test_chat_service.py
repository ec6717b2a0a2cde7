"""
Test suite for ChatService.

Tests orchestrator reuse per agent, history access and reset, and
serialized message handling.
"""

import asyncio

import pytest

from agent_rag.application.services.agent_registry import AgentRegistry
from agent_rag.application.services.chat_service import ChatService
from agent_rag.core.agentic_system.agent.orchestrator_schema import OrchestratorPhase
from agent_rag.core.exceptions import EmptyQueryError, NotFoundError
from agent_rag.models.chat import TurnRole

DIRECT_PHASES = [OrchestratorPhase.LLM_EXPAND, OrchestratorPhase.COMPOSE, OrchestratorPhase.DONE]


@pytest.fixture
def registry() -> AgentRegistry:
    registry = AgentRegistry()
    registry.register("Tutor", agent_id="tutor")
    registry.register("Coach", agent_id="coach")
    return registry


@pytest.fixture
def built() -> list[str]:
    return []


@pytest.fixture
def chat_service(registry, make_orchestrator, built) -> ChatService:
    def factory(profile):
        built.append(profile.agent_id)
        return make_orchestrator(profile.agent_id, namespace=profile.namespace)

    return ChatService(registry, factory)


class TestChatService:
    @pytest.mark.asyncio
    async def test_send_message_returns_answer(self, chat_service) -> None:
        answer = await chat_service.send_message("tutor", "Hello", use_rag=False)

        assert answer.phases == DIRECT_PHASES
        assert answer.answer

    @pytest.mark.asyncio
    async def test_orchestrator_reused_per_agent(self, chat_service, built) -> None:
        await chat_service.send_message("tutor", "first", use_rag=False)
        await chat_service.send_message("tutor", "second", use_rag=False)
        await chat_service.send_message("coach", "hello", use_rag=False)

        assert built == ["tutor", "coach"]
        assert len(chat_service.get_history("tutor")) == 5
        assert len(chat_service.get_history("coach")) == 3

    @pytest.mark.asyncio
    async def test_history_and_reset(self, chat_service) -> None:
        await chat_service.send_message("tutor", "Hello", use_rag=False)

        chat_service.reset_conversation("tutor")

        history = chat_service.get_history("tutor")
        assert [turn.role for turn in history] == [TurnRole.SYSTEM]

    @pytest.mark.asyncio
    async def test_concurrent_messages_are_serialized(self, chat_service) -> None:
        await asyncio.gather(
            chat_service.send_message("tutor", "one", use_rag=False),
            chat_service.send_message("tutor", "two", use_rag=False),
        )

        roles = [turn.role for turn in chat_service.get_history("tutor")]
        assert roles == [
            TurnRole.SYSTEM,
            TurnRole.USER,
            TurnRole.ASSISTANT,
            TurnRole.USER,
            TurnRole.ASSISTANT,
        ]

    @pytest.mark.asyncio
    async def test_phase_callback_forwarded(self, chat_service) -> None:
        seen = []

        await chat_service.send_message("tutor", "Hello", use_rag=False, on_phase=seen.append)

        assert seen == DIRECT_PHASES

    @pytest.mark.asyncio
    async def test_unknown_agent(self, chat_service) -> None:
        with pytest.raises(NotFoundError):
            await chat_service.send_message("ghost", "Hello")
        with pytest.raises(NotFoundError):
            chat_service.get_history("ghost")

    @pytest.mark.asyncio
    async def test_blank_message(self, chat_service) -> None:
        with pytest.raises(EmptyQueryError):
            await chat_service.send_message("tutor", "  ")
