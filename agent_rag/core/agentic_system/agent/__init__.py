"""
Answer pipeline agents.

Exports: ResponseOrchestrator, AgentAnswer, OrchestratorPhase, StageResult
"""

from agent_rag.core.agentic_system.agent.orchestrator_schema import (
    AgentAnswer,
    OrchestratorPhase,
    StageResult,
)
from agent_rag.core.agentic_system.agent.response_orchestrator import ResponseOrchestrator
from agent_rag.core.agentic_system.agent.summarizer import LLMSummarizer, Summarizer

__all__ = [
    "AgentAnswer",
    "LLMSummarizer",
    "OrchestratorPhase",
    "ResponseOrchestrator",
    "StageResult",
    "Summarizer",
]
