"""
Agent registration API endpoints.

Routes:
- POST /agents - Register an agent
- GET /agents - List agents
- GET /agents/{agent_id} - Get an agent profile

Dependencies: agent_rag.application.services.agent_registry
System role: Agent management HTTP API
"""

from fastapi import APIRouter, Depends, status

from agent_rag.api.deps import get_agent_registry
from agent_rag.api.routers.error_handling import handle_agent_errors
from agent_rag.application.services.agent_registry import AgentProfile, AgentRegistry
from agent_rag.models.agent import AgentResponse, CreateAgentRequest

router = APIRouter(prefix="/agents", tags=["agents"])


def _to_response(profile: AgentProfile) -> AgentResponse:
    return AgentResponse(**profile.model_dump())


@router.post("", response_model=AgentResponse, status_code=status.HTTP_201_CREATED)
@handle_agent_errors
async def create_agent(
    request: CreateAgentRequest,
    registry: AgentRegistry = Depends(get_agent_registry),
) -> AgentResponse:
    """Register an agent and allocate its namespaces."""
    profile = registry.register(request.name, agent_id=request.agent_id, namespace=request.namespace)
    return _to_response(profile)


@router.get("", response_model=list[AgentResponse])
async def list_agents(registry: AgentRegistry = Depends(get_agent_registry)) -> list[AgentResponse]:
    """List registered agents, oldest first."""
    return [_to_response(profile) for profile in registry.list()]


@router.get("/{agent_id}", response_model=AgentResponse)
@handle_agent_errors
async def get_agent(
    agent_id: str,
    registry: AgentRegistry = Depends(get_agent_registry),
) -> AgentResponse:
    """Get an agent profile."""
    return _to_response(registry.get(agent_id))
