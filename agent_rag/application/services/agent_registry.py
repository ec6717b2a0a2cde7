"""
Agent registry.

In-memory store of agent profiles. Each agent owns a knowledge namespace
for uploaded documents and a web-search namespace for saved web results.

Dependencies: pydantic, agent_rag.core.namespaces
System role: Agent lookup for knowledge and chat services
"""

import logging
import threading
import time
import uuid

from pydantic import BaseModel, Field

from agent_rag.core.exceptions import ConfigError, NotFoundError
from agent_rag.core.namespaces import (
    DEFAULT_KNOWLEDGE_PREFIX,
    DEFAULT_WEB_PREFIX,
    knowledge_namespace,
    web_namespace,
)

logger = logging.getLogger(__name__)


class AgentProfile(BaseModel):
    """Registered agent."""

    agent_id: str
    name: str
    namespace: str = Field(description="Namespace for uploaded documents")
    web_namespace: str = Field(description="Namespace for saved web results")
    created_at: float = Field(default_factory=time.time)


class AgentRegistry:
    """Thread-safe in-memory agent registry."""

    def __init__(
        self,
        namespace_prefix: str = DEFAULT_KNOWLEDGE_PREFIX,
        web_namespace_prefix: str = DEFAULT_WEB_PREFIX,
    ) -> None:
        self._namespace_prefix = namespace_prefix
        self._web_namespace_prefix = web_namespace_prefix
        self._agents: dict[str, AgentProfile] = {}
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        agent_id: str | None = None,
        namespace: str | None = None,
    ) -> AgentProfile:
        """
        Register an agent, or return the existing profile for its ID.

        Raises:
            ConfigError: When name is blank
        """
        if not name or not name.strip():
            raise ConfigError("Agent name cannot be empty", field="name")
        agent_id = agent_id or str(uuid.uuid4())
        with self._lock:
            existing = self._agents.get(agent_id)
            if existing is not None:
                return existing
            profile = AgentProfile(
                agent_id=agent_id,
                name=name.strip(),
                namespace=namespace or knowledge_namespace(agent_id, self._namespace_prefix),
                web_namespace=web_namespace(agent_id, self._web_namespace_prefix),
            )
            self._agents[agent_id] = profile
        logger.info(f"{__name__}:register - agent_id={agent_id}, namespace={profile.namespace}")
        return profile

    def get(self, agent_id: str) -> AgentProfile:
        """
        Raises:
            NotFoundError: When the agent is not registered
        """
        with self._lock:
            profile = self._agents.get(agent_id)
        if profile is None:
            raise NotFoundError("agent", agent_id)
        return profile

    def list(self) -> list[AgentProfile]:
        with self._lock:
            return sorted(self._agents.values(), key=lambda profile: profile.created_at)
