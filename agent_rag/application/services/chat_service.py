"""
Chat service for conversational Q&A with RAG.

Keeps one ResponseOrchestrator (and therefore one conversation history)
per agent and serializes requests to it.

Dependencies: agent_rag.core.agentic_system, agent_rag.application.services.agent_registry
System role: Chat service orchestration layer
"""

import asyncio
import logging
from collections.abc import Callable

from agent_rag.application.services.agent_registry import AgentProfile, AgentRegistry
from agent_rag.core.agentic_system.agent.orchestrator_schema import AgentAnswer, PhaseCallback
from agent_rag.core.agentic_system.agent.response_orchestrator import ResponseOrchestrator
from agent_rag.models.chat import ConversationTurn

logger = logging.getLogger(__name__)

OrchestratorFactory = Callable[[AgentProfile], ResponseOrchestrator]


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates agent lookup, orchestrator reuse and history access.
    """

    def __init__(self, registry: AgentRegistry, orchestrator_factory: OrchestratorFactory) -> None:
        """
        Initialize chat service.

        Args:
            registry: Agent registry
            orchestrator_factory: Builds an orchestrator for an agent profile
        """
        self._registry = registry
        self._factory = orchestrator_factory
        self._orchestrators: dict[str, ResponseOrchestrator] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _orchestrator(self, agent_id: str) -> ResponseOrchestrator:
        profile = self._registry.get(agent_id)
        orchestrator = self._orchestrators.get(agent_id)
        if orchestrator is None:
            orchestrator = self._factory(profile)
            self._orchestrators[agent_id] = orchestrator
            self._locks[agent_id] = asyncio.Lock()
        return orchestrator

    async def send_message(
        self,
        agent_id: str,
        message: str,
        use_rag: bool = True,
        on_phase: PhaseCallback | None = None,
    ) -> AgentAnswer:
        """
        Process a chat message through the agent's orchestrator.

        Raises:
            NotFoundError: Unknown agent
            EmptyQueryError: Blank message
        """
        orchestrator = self._orchestrator(agent_id)
        async with self._locks[agent_id]:
            return await orchestrator.respond(message, use_rag=use_rag, on_phase=on_phase)

    def get_history(self, agent_id: str) -> list[ConversationTurn]:
        return self._orchestrator(agent_id).history.turns()

    def reset_conversation(self, agent_id: str) -> None:
        self._orchestrator(agent_id).history.reset()
        logger.info(f"{__name__}:reset_conversation - agent_id={agent_id}")
