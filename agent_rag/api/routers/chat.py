"""Chat API endpoints.

Routes:
- POST /agents/{agent_id}/chat - Send chat message through the answer pipeline
- POST /agents/{agent_id}/chat/stream - Stream pipeline phases and the answer using Server-Sent Events (SSE)
- GET /agents/{agent_id}/chat/history - Conversation history
- DELETE /agents/{agent_id}/chat/history - Reset conversation

Dependencies: agent_rag.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from agent_rag.api.deps import get_agent_registry, get_chat_service
from agent_rag.api.routers.error_handling import handle_agent_errors
from agent_rag.application.services.agent_registry import AgentRegistry
from agent_rag.application.services.chat_service import ChatService
from agent_rag.core.agentic_system.agent.orchestrator_schema import AgentAnswer
from agent_rag.core.exceptions import AgentRAGException
from agent_rag.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["chat"])


def _to_response(answer: AgentAnswer) -> ChatResponse:
    return ChatResponse(
        answer=answer.answer,
        citations=answer.citations,
        phases=[phase.value for phase in answer.phases],
        degraded_phases=[phase.value for phase in answer.degraded_phases],
    )


def _sse(event: str, data: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


@router.post("/{agent_id}/chat", response_model=ChatResponse)
@handle_agent_errors
async def chat(
    agent_id: str,
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Send chat message to an agent.

    Flow:
    1. Resolve the agent's orchestrator (history is kept per agent)
    2. Run RAG search, expansion, summary, web search and compose (or direct chat)
    3. Return answer with citations and the phases that degraded

    Raises:
        HTTPException(404): Agent not found
        HTTPException(400): Blank message
    """
    answer = await chat_service.send_message(agent_id, request.message, use_rag=request.use_rag)
    return _to_response(answer)


@router.post("/{agent_id}/chat/stream")
@handle_agent_errors
async def chat_stream(
    agent_id: str,
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
    registry: AgentRegistry = Depends(get_agent_registry),
) -> StreamingResponse:
    """Stream pipeline progress using Server-Sent Events (SSE).

    SSE Format:
        event: phase
        data: {"phase": "rag_search"}

        event: complete
        data: {"answer": "...", "citations": [...], "phases": [...], "degraded_phases": [...]}

        event: error
        data: {"code": "...", "message": "..."}
    """
    registry.get(agent_id)
    logger.info(f"{__name__}:chat_stream - START agent_id={agent_id}")

    async def event_generator() -> AsyncGenerator[str, None]:
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        task = asyncio.create_task(
            chat_service.send_message(
                agent_id,
                request.message,
                use_rag=request.use_rag,
                on_phase=lambda phase: queue.put_nowait(phase.value),
            )
        )
        task.add_done_callback(lambda _: queue.put_nowait(None))

        try:
            while (phase := await queue.get()) is not None:
                yield _sse("phase", {"phase": phase})
            answer = await task
            yield _sse("complete", _to_response(answer).model_dump(mode="json"))
            logger.info(f"{__name__}:chat_stream - Stream completed for agent_id={agent_id}")

        except AgentRAGException as e:
            logger.error(f"{__name__}:chat_stream - {type(e).__name__}: {e}")
            yield _sse("error", {"code": type(e).__name__, "message": e.message})

        finally:
            if not task.done():
                task.cancel()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@router.get("/{agent_id}/chat/history", response_model=ChatHistoryResponse)
@handle_agent_errors
async def get_chat_history(
    agent_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """Return the agent's conversation, system turn first."""
    turns = chat_service.get_history(agent_id)
    return ChatHistoryResponse(
        messages=[
            ChatMessageResponse(role=turn.role.value, content=turn.content, timestamp=turn.timestamp)
            for turn in turns
        ],
        total=len(turns),
    )


@router.delete("/{agent_id}/chat/history", status_code=status.HTTP_204_NO_CONTENT)
@handle_agent_errors
async def reset_chat_history(
    agent_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> None:
    """Clear the conversation, keeping the system turn."""
    chat_service.reset_conversation(agent_id)
