"""
Vector store interface.

Namespaced upsert/query/delete over vectors and metadata. Implementations
must return query matches sorted by descending score and reject upserts
larger than `max_batch_size`.

Dependencies: agent_rag.boundary.vdb.vector_schemas
System role: Vector store contract
"""

from abc import ABC, abstractmethod
from typing import Any

from agent_rag.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from agent_rag.core.exceptions import ServiceError

DEFAULT_MAX_BATCH_SIZE = 100


class VectorStore(ABC):
    """Abstract namespaced vector store."""

    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE

    @abstractmethod
    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        """Insert or overwrite records by ID."""

    @abstractmethod
    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        """Return up to `top_k` matches sorted by descending score."""

    @abstractmethod
    async def delete_many(self, namespace: str, filter: dict[str, Any]) -> None:
        """Delete every record in the namespace matching the filter."""

    def _check_batch(self, records: list[VectorRecord]) -> None:
        if len(records) > self.max_batch_size:
            raise ServiceError(
                f"Upsert batch of {len(records)} exceeds limit of {self.max_batch_size}",
                provider="vector_store",
                operation="upsert",
            )
