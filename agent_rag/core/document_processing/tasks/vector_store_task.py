"""
Vector store upload task.

Turns embedded chunks into vector records and upserts them in batches, in
chunk order. Batches are committed independently: if one fails, earlier
batches stay in the store and the raised ServiceError reports how many
were committed. Because IDs are deterministic a retry simply overwrites.

Dependencies: agent_rag.boundary.vdb
System role: Final stage of document ingestion pipeline
"""

import logging
import time
from collections.abc import Callable

from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.boundary.vdb.vector_schemas import VectorMetadata, VectorRecord
from agent_rag.core.document_processing.models.chunk import EmbeddedChunk, SourceDocument
from agent_rag.core.exceptions import ConfigError, ServiceError

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Upload embedded chunks to a namespaced vector store."""

    def __init__(
        self,
        store: VectorStore,
        batch_size: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize upload task.

        Args:
            store: Target vector store
            batch_size: Records per upsert call
            clock: Timestamp source for record metadata

        Raises:
            ConfigError: When batch_size is outside 1..store.max_batch_size
        """
        if batch_size < 1 or batch_size > store.max_batch_size:
            raise ConfigError(
                f"Upsert batch size must be between 1 and {store.max_batch_size}",
                field="upsert_batch_size",
            )
        self._store = store
        self._batch_size = batch_size
        self._clock = clock

    def build_records(
        self,
        embedded: list[EmbeddedChunk],
        source: SourceDocument,
    ) -> list[VectorRecord]:
        """
        Build vector records with the metadata retrieval relies on.

        Args:
            embedded: Embedded chunks
            source: Source the chunks came from

        Returns:
            list[VectorRecord]: One record per chunk, same order
        """
        timestamp = self._clock()
        return [
            VectorRecord(
                id=item.chunk.vector_id,
                vector=item.embedding,
                metadata=VectorMetadata(
                    owner_id=item.chunk.owner_id,
                    source_id=item.chunk.source_id,
                    source_name=source.name,
                    source_url=source.url,
                    index=item.chunk.index,
                    content=item.chunk.text,
                    timestamp=timestamp,
                ).model_dump(),
            )
            for item in embedded
        ]

    async def upload(
        self,
        namespace: str,
        records: list[VectorRecord],
    ) -> int:
        """
        Upsert records in ordered batches.

        Args:
            namespace: Target namespace
            records: Records to upsert

        Returns:
            int: Number of batches committed

        Raises:
            ServiceError: When a batch fails; details carry committed_batches
        """
        committed = 0
        written = 0
        for offset in range(0, len(records), self._batch_size):
            batch = records[offset:offset + self._batch_size]
            try:
                await self._store.upsert(namespace, batch)
            except Exception as e:
                logger.error(
                    f"{__name__}:upload - FAILED batch={committed + 1}, "
                    f"committed_batches={committed}: {type(e).__name__}: {e}",
                    extra={"namespace": namespace},
                )
                raise ServiceError(
                    f"Vector upsert failed after {committed} committed batches: {e.args[0] if e.args else e}",
                    provider="vector_store",
                    operation="upsert",
                    details={
                        "namespace": namespace,
                        "committed_batches": committed,
                        "committed_vectors": written,
                    },
                ) from e
            committed += 1
            written += len(batch)

        logger.info(
            f"{__name__}:upload - Upserted {written} vectors in {committed} batches",
            extra={"namespace": namespace},
        )
        return committed
