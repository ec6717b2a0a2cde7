"""
Knowledge service.

Ingests uploaded documents and saved web results into an agent's
namespaces, queries them and deletes them.

Dependencies: agent_rag.core.document_processing, agent_rag.core.retriever
System role: Knowledge base use cases
"""

import logging

from agent_rag.application.services.agent_registry import AgentRegistry
from agent_rag.core.document_processing.entrypoint import IngestionPipeline
from agent_rag.core.document_processing.models import (
    IngestionResult,
    ProgressCallback,
    SourceDocument,
    SourceKind,
)
from agent_rag.core.exceptions import ConfigError
from agent_rag.core.retriever import QueryEngine, QueryMatch
from agent_rag.models.web_search import WebSearchResult

logger = logging.getLogger(__name__)


class KnowledgeService:
    """Agent knowledge base operations."""

    def __init__(
        self,
        registry: AgentRegistry,
        pipeline: IngestionPipeline,
        query_engine: QueryEngine,
    ) -> None:
        self._registry = registry
        self._pipeline = pipeline
        self._query_engine = query_engine

    async def ingest_file(
        self,
        agent_id: str,
        file_name: str,
        content: str,
        file_url: str = "",
        progress_callback: ProgressCallback | None = None,
    ) -> IngestionResult:
        """
        Ingest an uploaded document into the agent's knowledge namespace.

        Raises:
            NotFoundError: Unknown agent
            ContentTooLargeError: Content over the file limit
            ServiceError: Embedding or upsert failure
        """
        profile = self._registry.get(agent_id)
        source = SourceDocument(source_id=file_name, name=file_name, url=file_url, kind=SourceKind.FILE)
        return await self._pipeline.ingest(
            agent_id,
            source,
            content,
            namespace=profile.namespace,
            progress_callback=progress_callback,
        )

    async def ingest_web_result(
        self,
        agent_id: str,
        result: WebSearchResult,
        content: str | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> IngestionResult:
        """
        Save a web result into the agent's web-search namespace.

        Page content defaults to the result title and snippet.
        """
        profile = self._registry.get(agent_id)
        if not result.url.strip():
            raise ConfigError("Web result URL cannot be empty", field="url")
        text = content if content is not None else f"{result.title}\n{result.snippet}".strip()
        source = SourceDocument(source_id=result.url, name=result.title, url=result.url, kind=SourceKind.WEB)
        return await self._pipeline.ingest(
            agent_id,
            source,
            text,
            namespace=profile.web_namespace,
            progress_callback=progress_callback,
        )

    async def query_knowledge(self, agent_id: str, query: str, top_k: int = 5) -> list[QueryMatch]:
        profile = self._registry.get(agent_id)
        return await self._query_engine.query(agent_id, query, top_k=top_k, namespace=profile.namespace)

    async def query_web_knowledge(self, agent_id: str, query: str, top_k: int = 5) -> list[QueryMatch]:
        profile = self._registry.get(agent_id)
        return await self._query_engine.query(agent_id, query, top_k=top_k, namespace=profile.web_namespace)

    async def delete_knowledge(self, agent_id: str) -> None:
        """Delete the agent's vectors from both of its namespaces."""
        profile = self._registry.get(agent_id)
        await self._query_engine.delete_owner(agent_id, namespace=profile.namespace)
        await self._query_engine.delete_owner(agent_id, namespace=profile.web_namespace)
        logger.info(f"{__name__}:delete_knowledge - agent_id={agent_id}")
