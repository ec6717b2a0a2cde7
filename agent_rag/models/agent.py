"""
Agent API schemas.

Dependencies: pydantic
System role: Agent registration contracts
"""

from pydantic import BaseModel, Field


class CreateAgentRequest(BaseModel):
    """Request schema for registering an agent."""

    name: str = Field(min_length=1, description="Display name")
    agent_id: str | None = Field(default=None, description="Explicit ID (generated when omitted)")
    namespace: str | None = Field(default=None, description="Knowledge namespace override")


class AgentResponse(BaseModel):
    """Registered agent profile."""

    agent_id: str
    name: str
    namespace: str
    web_namespace: str
    created_at: float
