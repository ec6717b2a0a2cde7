"""
Response orchestrator schemas.

Pipeline phases, the per-stage result variant and the final answer.

Dependencies: pydantic
System role: Orchestrator data contracts
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from agent_rag.models.citation import Citation

T = TypeVar("T")


class OrchestratorPhase(str, Enum):
    """States of the answer pipeline."""

    IDLE = "idle"
    RAG_SEARCH = "rag_search"
    LLM_EXPAND = "llm_expand"
    SUMMARIZE = "summarize"
    WEB_SEARCH = "web_search"
    COMPOSE = "compose"
    DONE = "done"


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Outcome of one pipeline stage.

    Either the provider's real output, or a labeled substitute produced
    after the provider failed (`degraded` is then True and `error` says why).
    """

    phase: OrchestratorPhase
    value: T
    degraded: bool = False
    error: str | None = None

    @classmethod
    def ok(cls, phase: OrchestratorPhase, value: T) -> "StageResult[T]":
        return cls(phase=phase, value=value)

    @classmethod
    def fallback(cls, phase: OrchestratorPhase, value: T, error: str) -> "StageResult[T]":
        return cls(phase=phase, value=value, degraded=True, error=error)


class AgentAnswer(BaseModel):
    """Composed answer returned to the caller."""

    answer: str = Field(description="Final answer text")
    citations: list[Citation] = Field(default_factory=list)
    phases: list[OrchestratorPhase] = Field(
        default_factory=list,
        description="Phases entered, in order",
    )
    degraded_phases: list[OrchestratorPhase] = Field(
        default_factory=list,
        description="Phases whose contribution is a degraded substitute",
    )


PhaseCallback = Callable[[OrchestratorPhase], None]
SideEffect = Callable[[AgentAnswer], Awaitable[None]]
