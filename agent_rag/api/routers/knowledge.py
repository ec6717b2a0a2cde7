"""
Knowledge base API endpoints.

Routes:
- POST /agents/{agent_id}/knowledge - Ingest document content
- POST /agents/{agent_id}/knowledge/web - Save a web search result
- POST /agents/{agent_id}/knowledge/query - Query the knowledge base
- DELETE /agents/{agent_id}/knowledge - Delete all of an agent's vectors

Dependencies: agent_rag.application.services.knowledge_service
System role: Knowledge base HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from agent_rag.api.deps import get_knowledge_service
from agent_rag.api.routers.error_handling import handle_agent_errors
from agent_rag.application.services.knowledge_service import KnowledgeService
from agent_rag.core.document_processing.models import IngestionResult
from agent_rag.models.knowledge import (
    IngestFileRequest,
    IngestWebResultRequest,
    KnowledgeMatchResponse,
    KnowledgeQueryRequest,
    KnowledgeQueryResponse,
    KnowledgeSource,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["knowledge"])


@router.post(
    "/{agent_id}/knowledge",
    response_model=IngestionResult,
    status_code=status.HTTP_201_CREATED,
)
@handle_agent_errors
async def ingest_document(
    agent_id: str,
    request: IngestFileRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> IngestionResult:
    """
    Chunk, embed and index document content for an agent.

    Raises:
        HTTPException(404): Agent not found
        HTTPException(413): Content over the size limit
        HTTPException(502): Embedding or vector store failure
    """
    return await knowledge_service.ingest_file(
        agent_id,
        request.file_name,
        request.content,
        file_url=request.file_url,
    )


@router.post(
    "/{agent_id}/knowledge/web",
    response_model=IngestionResult,
    status_code=status.HTTP_201_CREATED,
)
@handle_agent_errors
async def ingest_web_result(
    agent_id: str,
    request: IngestWebResultRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> IngestionResult:
    """Save a web search result into the agent's web namespace."""
    return await knowledge_service.ingest_web_result(agent_id, request.result, content=request.content)


@router.post("/{agent_id}/knowledge/query", response_model=KnowledgeQueryResponse)
@handle_agent_errors
async def query_knowledge(
    agent_id: str,
    request: KnowledgeQueryRequest,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> KnowledgeQueryResponse:
    """Search an agent's documents or saved web results."""
    if request.source == KnowledgeSource.WEB:
        matches = await knowledge_service.query_web_knowledge(agent_id, request.query, top_k=request.top_k)
    else:
        matches = await knowledge_service.query_knowledge(agent_id, request.query, top_k=request.top_k)

    return KnowledgeQueryResponse(
        matches=[
            KnowledgeMatchResponse(
                content=match.content,
                source=match.source,
                score=match.score,
                source_url=match.source_url,
            )
            for match in matches
        ],
        total=len(matches),
    )


@router.delete("/{agent_id}/knowledge", status_code=status.HTTP_204_NO_CONTENT)
@handle_agent_errors
async def delete_knowledge(
    agent_id: str,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> None:
    """Delete every vector the agent owns."""
    await knowledge_service.delete_knowledge(agent_id)
