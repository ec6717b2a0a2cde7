"""
In-memory vector store.

Cosine-similarity store kept in process memory. Used by tests and for
local runs where persistence is not needed.

Dependencies: agent_rag.boundary.vdb
System role: Development vector store
"""

import asyncio
import logging
import math
from typing import Any

from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.boundary.vdb.vector_schemas import VectorMatch, VectorRecord, matches_filter
from agent_rag.core.exceptions import ServiceError

logger = logging.getLogger(__name__)


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two equal-length vectors (0.0 for zero vectors)."""
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


class InMemoryVectorStore(VectorStore):
    """Namespaced in-memory vector store."""

    def __init__(self) -> None:
        self._namespaces: dict[str, dict[str, VectorRecord]] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        self._check_batch(records)
        async with self._lock:
            bucket = self._namespaces.setdefault(namespace, {})
            for record in records:
                self._check_dimension(bucket, records[0], record)
            for record in records:
                bucket[record.id] = record.model_copy(deep=True)
        logger.debug(f"{__name__}:upsert - namespace={namespace}, count={len(records)}")

    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        async with self._lock:
            candidates = list(self._namespaces.get(namespace, {}).values())

        scored = []
        for record in candidates:
            if not matches_filter(record.metadata, filter):
                continue
            if len(record.vector) != len(vector):
                raise ServiceError(
                    f"Query dimension {len(vector)} does not match index dimension {len(record.vector)}",
                    provider="vector_store",
                    operation="query",
                )
            scored.append(
                VectorMatch(
                    id=record.id,
                    score=cosine_similarity(vector, record.vector),
                    metadata=dict(record.metadata),
                )
            )

        scored.sort(key=lambda match: match.score, reverse=True)
        return scored[:top_k]

    async def delete_many(self, namespace: str, filter: dict[str, Any]) -> None:
        async with self._lock:
            bucket = self._namespaces.get(namespace, {})
            doomed = [rid for rid, record in bucket.items() if matches_filter(record.metadata, filter)]
            for rid in doomed:
                del bucket[rid]
        logger.info(f"{__name__}:delete_many - namespace={namespace}, deleted={len(doomed)}")

    def count(self, namespace: str) -> int:
        """Number of records stored in a namespace."""
        return len(self._namespaces.get(namespace, {}))

    def ids(self, namespace: str) -> set[str]:
        """IDs stored in a namespace."""
        return set(self._namespaces.get(namespace, {}))

    @staticmethod
    def _check_dimension(
        bucket: dict[str, VectorRecord],
        first: VectorRecord,
        record: VectorRecord,
    ) -> None:
        reference = next(iter(bucket.values())) if bucket else first
        dimension = len(reference.vector)
        if len(record.vector) != dimension:
            raise ServiceError(
                f"Vector {record.id} has dimension {len(record.vector)}, index expects {dimension}",
                provider="vector_store",
                operation="upsert",
            )
