"""
Knowledge base retrieval with owner isolation.

Embeds a query, searches the owner's namespace filtered on owner_id and
returns ranked matches. The owner filter is re-checked on every match and
the score order is re-asserted, so a misbehaving store can never leak
another owner's vectors or return them out of order.

Dependencies: agent_rag.boundary.vdb, agent_rag.boundary.embeddings
System role: RAG retrieval business logic
"""

import asyncio
import logging

from pydantic import BaseModel, Field

from agent_rag.boundary.embeddings.base import EmbeddingGenerator
from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.boundary.vdb.vector_schemas import REQUIRED_METADATA_FIELDS, VectorMatch
from agent_rag.core.exceptions import ConfigError, EmptyQueryError, ServiceError
from agent_rag.core.namespaces import DEFAULT_KNOWLEDGE_PREFIX, knowledge_namespace
from agent_rag.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class QueryMatch(BaseModel):
    """Ranked knowledge-base passage."""

    content: str = Field(description="Chunk text")
    source: str = Field(description="Source document name")
    score: float = Field(description="Similarity score, higher is closer")
    vector_id: str = ""
    source_id: str = ""
    source_url: str = ""


class QueryEngine:
    """Owner-scoped similarity search over a vector store."""

    def __init__(
        self,
        embedder: EmbeddingGenerator,
        store: VectorStore,
        namespace_prefix: str = DEFAULT_KNOWLEDGE_PREFIX,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._embedder = embedder
        self._store = store
        self._namespace_prefix = namespace_prefix
        self._timeout = timeout_seconds

    async def _embed_query(self, query: str) -> list[float]:
        try:
            return await asyncio.wait_for(self._embedder.generate(query), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ServiceError(
                f"Query embedding timed out after {self._timeout}s",
                provider="embeddings",
                operation="generate",
            ) from e

    async def query(
        self,
        owner_id: str,
        query: str,
        top_k: int = 5,
        namespace: str | None = None,
    ) -> list[QueryMatch]:
        """
        Search an owner's knowledge.

        Args:
            owner_id: Owner whose vectors are searched
            query: Natural language query
            top_k: Maximum matches to return
            namespace: Namespace to search (defaults to the owner's knowledge namespace)

        Returns:
            list[QueryMatch]: Matches sorted by descending score

        Raises:
            EmptyQueryError: When query is blank
            ConfigError: When top_k < 1
            ServiceError: When embedding or the store query fails
        """
        if not query or not query.strip():
            raise EmptyQueryError(details={"owner_id": owner_id})
        if top_k < 1:
            raise ConfigError("top_k must be at least 1", field="top_k")

        namespace = namespace or knowledge_namespace(owner_id, self._namespace_prefix)
        vector = await self._embed_query(query)
        raw = await self._store.query(namespace, vector, top_k, filter={"owner_id": owner_id})

        matches = [self._to_match(match) for match in raw if self._belongs_to(match, owner_id)]
        dropped = len(raw) - len(matches)
        if dropped:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:query - Discarded {dropped} matches with missing metadata or foreign owner",
                owner_id=owner_id,
                namespace=namespace,
                raw_matches=len(raw),
            )

        matches.sort(key=lambda match: match.score, reverse=True)
        logger.info(f"{__name__}:query - owner_id={owner_id}, namespace={namespace}, matches={len(matches[:top_k])}")
        return matches[:top_k]

    async def delete_owner(self, owner_id: str, namespace: str | None = None) -> None:
        """Delete all vectors an owner has in a namespace."""
        namespace = namespace or knowledge_namespace(owner_id, self._namespace_prefix)
        try:
            await self._store.delete_many(namespace, {"owner_id": owner_id})
        except ServiceError:
            raise
        except Exception as e:
            raise ServiceError(
                f"Failed to delete vectors: {e}",
                provider="vector_store",
                operation="delete",
                details={"namespace": namespace, "owner_id": owner_id},
            ) from e
        logger.info(f"{__name__}:delete_owner - owner_id={owner_id}, namespace={namespace}")

    @staticmethod
    def _belongs_to(match: VectorMatch, owner_id: str) -> bool:
        metadata = match.metadata or {}
        if any(not metadata.get(field) for field in REQUIRED_METADATA_FIELDS):
            return False
        return metadata["owner_id"] == owner_id

    @staticmethod
    def _to_match(match: VectorMatch) -> QueryMatch:
        metadata = match.metadata
        return QueryMatch(
            content=str(metadata["content"]),
            source=str(metadata.get("source_name") or metadata.get("source_id") or ""),
            score=match.score,
            vector_id=match.id,
            source_id=str(metadata.get("source_id", "")),
            source_url=str(metadata.get("source_url", "")),
        )
