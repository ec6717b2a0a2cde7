"""
Application services.

Exports: AgentRegistry, KnowledgeService, ChatService
"""

from agent_rag.application.services.agent_registry import AgentProfile, AgentRegistry
from agent_rag.application.services.chat_service import ChatService
from agent_rag.application.services.knowledge_service import KnowledgeService

__all__ = ["AgentProfile", "AgentRegistry", "ChatService", "KnowledgeService"]
