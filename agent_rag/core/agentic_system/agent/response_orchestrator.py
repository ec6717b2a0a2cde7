"""
Multi-stage response orchestrator.

Drives one chat request through knowledge-base retrieval, LLM context
expansion, summarization and web search, then composes a cited answer.
Each stage makes a single external call under a timeout. A failing stage
never aborts the request: its contribution is replaced by a labeled
substitute and the pipeline moves on. Direct chat mode skips retrieval,
summarization and web search.

Dependencies: agent_rag.core.retriever, agent_rag.boundary.llm, agent_rag.boundary.web_search
System role: Chat answer orchestration
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from agent_rag.boundary.llm.base import LLMProvider
from agent_rag.boundary.web_search.base import WebSearchProvider
from agent_rag.configs.orchestrator import OrchestratorSettings
from agent_rag.core.agentic_system.agent.conversation import ConversationHistory
from agent_rag.core.agentic_system.agent.orchestrator_prompt import (
    COMPOSE_FALLBACK_HEADER,
    COMPOSE_PROMPT,
    EXPAND_PROMPT,
    EXPANSION_UNAVAILABLE,
    GENERIC_APOLOGY,
    NO_CONTEXT,
    NO_WEB_RESULTS,
    RAG_UNAVAILABLE,
    SUMMARY_UNAVAILABLE,
    WEB_SEARCH_UNAVAILABLE,
)
from agent_rag.core.agentic_system.agent.orchestrator_schema import (
    AgentAnswer,
    OrchestratorPhase,
    PhaseCallback,
    SideEffect,
    StageResult,
)
from agent_rag.core.agentic_system.agent.summarizer import Summarizer
from agent_rag.core.exceptions import EmptyQueryError
from agent_rag.core.retriever import QueryEngine, QueryMatch
from agent_rag.models.chat import ConversationTurn, TurnRole
from agent_rag.models.citation import Citation
from agent_rag.models.web_search import WebSearchPreferences, WebSearchResponse
from agent_rag.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from agent_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

SNIPPET_LENGTH = 200


def _format_matches(matches: list[QueryMatch]) -> str:
    if not matches:
        return NO_CONTEXT
    return "\n".join(
        f"---\n[{match.source} | score {match.score:.2f}]\n{match.content}\n---" for match in matches
    )


def _format_web_results(response: WebSearchResponse) -> str:
    if not response.results:
        return NO_WEB_RESULTS
    return "\n".join(
        f"[{result.position}] {result.title} ({result.url})\n{result.snippet}" for result in response.results
    )


def _clamp_score(score: float) -> float:
    return min(max(score, 0.0), 1.0)


def build_citations(matches: list[QueryMatch], web: WebSearchResponse) -> list[Citation]:
    """Citations for every web result followed by every knowledge base match."""
    citations = [
        Citation(url=result.url, title=result.title, snippet=result.snippet, relevance_score=1.0)
        for result in web.results
    ]
    citations.extend(
        Citation(
            url=match.source_url or f"kb://{match.source_id or match.source}",
            title=match.source,
            snippet=match.content[:SNIPPET_LENGTH],
            relevance_score=_clamp_score(match.score),
        )
        for match in matches
    )
    return citations


class ResponseOrchestrator:
    """
    Per-conversation answer pipeline.

    Owns the conversation history for one agent. Not safe for concurrent
    `respond` calls on the same instance; callers serialize per conversation.
    """

    def __init__(
        self,
        owner_id: str,
        query_engine: QueryEngine,
        llm: LLMProvider,
        summarizer: Summarizer,
        web_search: WebSearchProvider,
        settings: OrchestratorSettings | None = None,
        namespace: str | None = None,
        search_preferences: WebSearchPreferences | None = None,
        side_effects: list[SideEffect] | None = None,
    ) -> None:
        """
        Initialize orchestrator with injected collaborators.

        Args:
            owner_id: Agent whose knowledge base is searched
            query_engine: Knowledge base retrieval
            llm: LLM used for expansion and composition
            summarizer: Summarize stage collaborator
            web_search: Web search provider (usually cache-wrapped)
            settings: Timeouts, history window and system prompt
            namespace: Knowledge namespace (defaults to the owner's namespace)
            search_preferences: Preferences passed to the web search provider
            side_effects: Async callables run on each finished answer, fire-and-forget
        """
        self._owner_id = owner_id
        self._query_engine = query_engine
        self._llm = llm
        self._summarizer = summarizer
        self._web_search = web_search
        self._settings = settings or OrchestratorSettings()
        self._namespace = namespace
        self._search_preferences = search_preferences or WebSearchPreferences()
        self._side_effects = list(side_effects or [])
        self._background_tasks: set[asyncio.Task] = set()
        self._history = ConversationHistory(self._settings.system_prompt)

    @property
    def history(self) -> ConversationHistory:
        return self._history

    async def respond(
        self,
        message: str,
        use_rag: bool = True,
        on_phase: PhaseCallback | None = None,
    ) -> AgentAnswer:
        """
        Answer a user message.

        Appends the user turn, runs the pipeline and appends the assistant
        turn. Provider failures degrade the answer instead of raising.

        Args:
            message: User message
            use_rag: Run the full pipeline (False selects direct chat)
            on_phase: Called synchronously before each phase begins

        Returns:
            AgentAnswer: Answer, citations and the phases visited

        Raises:
            EmptyQueryError: When the message is blank
        """
        if not message or not message.strip():
            raise EmptyQueryError(details={"owner_id": self._owner_id})

        owns_correlation = not get_correlation_id()
        if owns_correlation:
            set_correlation_id()
        try:
            logger.info(
                f"{__name__}:respond - START owner_id={self._owner_id}, use_rag={use_rag}, "
                f"message_len={len(message)}"
            )
            self._history.append(ConversationTurn(role=TurnRole.USER, content=message))

            if use_rag:
                answer = await self._run_rag(message, on_phase)
            else:
                answer = await self._run_direct(message, on_phase)

            self._history.append(
                ConversationTurn(
                    role=TurnRole.ASSISTANT,
                    content=answer.answer,
                    citations=tuple(answer.citations),
                )
            )
            self._launch_side_effects(answer)
            logger.info(
                f"{__name__}:respond - END answer_len={len(answer.answer)}, "
                f"citations={len(answer.citations)}, degraded={[p.value for p in answer.degraded_phases]}"
            )
            return answer
        finally:
            if owns_correlation:
                clear_correlation_id()

    async def wait_for_side_effects(self) -> None:
        """Wait until every launched side effect has finished."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    def _enter(
        self,
        phase: OrchestratorPhase,
        visited: list[OrchestratorPhase],
        on_phase: PhaseCallback | None,
    ) -> None:
        visited.append(phase)
        if on_phase is None:
            return
        try:
            on_phase(phase)
        except Exception as e:
            logger.warning(f"{__name__}:_enter - Phase callback failed at {phase.value}: {type(e).__name__}: {e}")

    async def _run_stage(
        self,
        phase: OrchestratorPhase,
        call: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
    ) -> StageResult[T]:
        try:
            value = await asyncio.wait_for(call(), timeout=self._settings.stage_timeout_seconds)
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            log_exception_with_context(
                logger,
                f"{__name__}:_run_stage - {phase.value} degraded: {error}",
                e,
                level=logging.WARNING,
                owner_id=self._owner_id,
                phase=phase.value,
            )
            return StageResult.fallback(phase, fallback(), error)
        return StageResult.ok(phase, value)

    def _prior_history(self) -> list[ConversationTurn]:
        """Windowed history without the current user turn."""
        return self._history.window(self._settings.history_window)[:-1]

    async def _run_rag(self, query: str, on_phase: PhaseCallback | None) -> AgentAnswer:
        visited: list[OrchestratorPhase] = []

        self._enter(OrchestratorPhase.RAG_SEARCH, visited, on_phase)
        rag = await self._run_stage(
            OrchestratorPhase.RAG_SEARCH,
            lambda: self._query_engine.query(
                self._owner_id, query, top_k=self._settings.rag_top_k, namespace=self._namespace
            ),
            lambda: [],
        )

        self._enter(OrchestratorPhase.LLM_EXPAND, visited, on_phase)
        context = RAG_UNAVAILABLE if rag.degraded else _format_matches(rag.value)
        expand_messages = self._prior_history() + [
            ConversationTurn(role=TurnRole.USER, content=EXPAND_PROMPT.format(context=context, question=query))
        ]
        expansion = await self._run_stage(
            OrchestratorPhase.LLM_EXPAND,
            lambda: self._llm.complete(expand_messages),
            lambda: f"{EXPANSION_UNAVAILABLE} {query}",
        )

        self._enter(OrchestratorPhase.SUMMARIZE, visited, on_phase)
        summary = await self._run_stage(
            OrchestratorPhase.SUMMARIZE,
            lambda: self._summarizer.summarize(expansion.value),
            lambda: f"{SUMMARY_UNAVAILABLE} {expansion.value[:SNIPPET_LENGTH]}",
        )

        self._enter(OrchestratorPhase.WEB_SEARCH, visited, on_phase)
        web = await self._run_stage(
            OrchestratorPhase.WEB_SEARCH,
            lambda: self._web_search.search(query, self._search_preferences),
            lambda: WebSearchResponse(),
        )

        self._enter(OrchestratorPhase.COMPOSE, visited, on_phase)
        stages = [rag, expansion, summary, web]
        try:
            citations = build_citations(rag.value, web.value)
            composed = await self._compose(query, context, expansion, summary, web)
            answer = AgentAnswer(
                answer=composed.value,
                citations=citations,
                degraded_phases=[stage.phase for stage in stages + [composed] if stage.degraded],
            )
        except Exception as e:
            logger.error(f"{__name__}:_run_rag - Compose failed: {type(e).__name__}: {e}")
            answer = AgentAnswer(
                answer=GENERIC_APOLOGY,
                degraded_phases=[stage.phase for stage in stages if stage.degraded] + [OrchestratorPhase.COMPOSE],
            )

        self._enter(OrchestratorPhase.DONE, visited, on_phase)
        answer.phases = visited
        return answer

    async def _compose(
        self,
        query: str,
        context: str,
        expansion: StageResult[str],
        summary: StageResult[str],
        web: StageResult[WebSearchResponse],
    ) -> StageResult[str]:
        web_text = WEB_SEARCH_UNAVAILABLE if web.degraded else _format_web_results(web.value)
        prompt = COMPOSE_PROMPT.format(
            context=context,
            expansion=expansion.value,
            summary=summary.value,
            web_results=web_text,
            question=query,
        )
        messages = self._prior_history() + [ConversationTurn(role=TurnRole.USER, content=prompt)]
        return await self._run_stage(
            OrchestratorPhase.COMPOSE,
            lambda: self._llm.complete(messages),
            lambda: "\n\n".join(
                [
                    COMPOSE_FALLBACK_HEADER,
                    f"Knowledge base:\n{context}",
                    f"Expanded context:\n{expansion.value}",
                    f"Summary:\n{summary.value}",
                    f"Web results:\n{web_text}",
                ]
            ),
        )

    async def _run_direct(self, query: str, on_phase: PhaseCallback | None) -> AgentAnswer:
        visited: list[OrchestratorPhase] = []

        self._enter(OrchestratorPhase.LLM_EXPAND, visited, on_phase)
        messages = self._history.window(self._settings.history_window)
        expansion = await self._run_stage(
            OrchestratorPhase.LLM_EXPAND,
            lambda: self._llm.complete(messages),
            lambda: f"{EXPANSION_UNAVAILABLE} {query}",
        )

        # Direct mode composes without another external call
        self._enter(OrchestratorPhase.COMPOSE, visited, on_phase)
        answer = AgentAnswer(
            answer=expansion.value,
            degraded_phases=[expansion.phase] if expansion.degraded else [],
        )

        self._enter(OrchestratorPhase.DONE, visited, on_phase)
        answer.phases = visited
        return answer

    def _launch_side_effects(self, answer: AgentAnswer) -> None:
        for effect in self._side_effects:
            task = asyncio.create_task(self._run_side_effect(effect, answer))
            self._background_tasks.add(task)
            task.add_done_callback(self._background_tasks.discard)

    async def _run_side_effect(self, effect: SideEffect, answer: AgentAnswer) -> None:
        try:
            await effect(answer)
        except Exception as e:
            logger.error(
                f"{__name__}:_run_side_effect - Side effect failed: {type(e).__name__}: {e}",
                extra={"owner_id": self._owner_id},
            )
