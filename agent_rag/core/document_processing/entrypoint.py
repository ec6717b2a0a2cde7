"""
Document ingestion pipeline.

Coordinates chunking, embedding and vector upload for one document and
reports progress along the way.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from pathlib import Path

from agent_rag.boundary.embeddings.base import EmbeddingGenerator
from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.core.namespaces import DEFAULT_KNOWLEDGE_PREFIX, knowledge_namespace
from agent_rag.core.exceptions import ConfigError, ContentTooLargeError

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import (
    IngestionOperation,
    IngestionProgress,
    IngestionResult,
    ProgressCallback,
    SourceDocument,
    SourceKind,
)
from .tasks import Chunker, EmbeddingTask, ParsingTask, VectorStoreTask

logger = logging.getLogger(__name__)


def _emit(callback: ProgressCallback | None, progress: IngestionProgress) -> None:
    if callback is None:
        return
    try:
        callback(progress)
    except Exception as e:
        logger.warning(
            f"{__name__}:_emit - Progress callback failed: {type(e).__name__}: {e}",
            extra={"operation": progress.current_operation.value},
        )


class IngestionPipeline:
    """Orchestrate document ingestion: chunk -> embed -> upsert."""

    def __init__(
        self,
        embedder: EmbeddingGenerator,
        store: VectorStore,
        settings: DocumentPipelineSettings | None = None,
        namespace_prefix: str = DEFAULT_KNOWLEDGE_PREFIX,
    ) -> None:
        """
        Initialize pipeline with collaborators and configuration.

        Args:
            embedder: Embedding provider
            store: Vector store to write to
            settings: Pipeline settings (uses defaults if None)
            namespace_prefix: Prefix of the default per-owner namespace

        Raises:
            ConfigError: When chunking or batching settings are invalid
        """
        self._settings = settings or get_pipeline_settings()
        self._namespace_prefix = namespace_prefix

        self._parsing_task = ParsingTask()
        self._chunker = Chunker(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            respect_sentences=self._settings.respect_sentence_boundaries,
        )
        self._embedding_task = EmbeddingTask(
            embedder,
            max_concurrency=self._settings.max_concurrent_embeddings,
            timeout_seconds=self._settings.embedding_timeout_seconds,
            max_attempts=self._settings.embedding_max_attempts,
            retry_initial_seconds=self._settings.embedding_retry_initial_seconds,
        )
        self._vector_store_task = VectorStoreTask(
            store,
            batch_size=self._settings.upsert_batch_size,
        )

    def max_content_length(self, kind: SourceKind) -> int:
        if kind == SourceKind.WEB:
            return self._settings.max_web_content_length
        return self._settings.max_file_content_length

    async def ingest(
        self,
        owner_id: str,
        source: SourceDocument,
        content: str,
        namespace: str | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> IngestionResult:
        """
        Ingest one document.

        Args:
            owner_id: Owner the vectors belong to
            source: Source metadata (kind selects the size limit)
            content: Document text
            namespace: Target namespace (defaults to the owner's knowledge namespace)
            progress_callback: Receives chunking/embedding/indexing progress

        Returns:
            IngestionResult: Chunk count, vector IDs and timing

        Raises:
            ConfigError: When owner_id is blank
            ContentTooLargeError: When content exceeds the limit for its kind
            ServiceError: When embedding or an upsert batch fails
        """
        start_time = time.perf_counter()
        if not owner_id or not owner_id.strip():
            raise ConfigError("Owner ID cannot be empty", field="owner_id")

        limit = self.max_content_length(source.kind)
        if len(content) > limit:
            raise ContentTooLargeError(len(content), limit, source_id=source.source_id)

        namespace = namespace or knowledge_namespace(owner_id, self._namespace_prefix)
        logger.info(
            f"{__name__}:ingest - START owner_id={owner_id}, source_id={source.source_id}, "
            f"content_len={len(content)}, namespace={namespace}"
        )

        if not content:
            return IngestionResult(
                owner_id=owner_id,
                source_id=source.source_id,
                namespace=namespace,
                chunk_count=0,
                processing_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        _emit(progress_callback, IngestionProgress(
            total_chunks=0,
            processed_chunks=0,
            current_operation=IngestionOperation.CHUNKING,
        ))
        chunks = self._chunker.chunk(content, owner_id, source.source_id)
        total = len(chunks)

        _emit(progress_callback, IngestionProgress(
            total_chunks=total,
            processed_chunks=0,
            current_operation=IngestionOperation.EMBEDDING,
        ))
        embedded = await self._embedding_task.embed(
            chunks,
            on_embedded=lambda done: _emit(progress_callback, IngestionProgress(
                total_chunks=total,
                processed_chunks=done,
                current_operation=IngestionOperation.EMBEDDING,
            )),
        )

        _emit(progress_callback, IngestionProgress(
            total_chunks=total,
            processed_chunks=total,
            current_operation=IngestionOperation.INDEXING,
        ))
        records = self._vector_store_task.build_records(embedded, source)
        batches = await self._vector_store_task.upload(namespace, records)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest - END chunks={total}, batches={batches}, elapsed_ms={elapsed_ms:.1f}"
        )
        return IngestionResult(
            owner_id=owner_id,
            source_id=source.source_id,
            namespace=namespace,
            chunk_count=total,
            vector_ids=[record.id for record in records],
            batches_upserted=batches,
            processing_time_ms=elapsed_ms,
        )

    async def ingest_file(
        self,
        owner_id: str,
        file_path: str,
        namespace: str | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> IngestionResult:
        """
        Parse a local text file and ingest it.

        Raises:
            ParsingError: When the file cannot be read
        """
        path = Path(file_path)
        content = self._parsing_task.parse(file_path)
        source = SourceDocument(source_id=path.name, name=path.name, url=str(path))
        return await self.ingest(owner_id, source, content, namespace, progress_callback)
