"""
Embedding generation task with a bounded concurrency pool.

Embeds chunks through any EmbeddingGenerator with at most
`max_concurrency` calls in flight. Each call carries a timeout and is
retried with exponential backoff on ServiceError. Results are paired back
to their chunk by index, never by completion order. When one chunk
exhausts its retries every other in-flight call is cancelled.

Dependencies: tenacity, agent_rag.boundary.embeddings
System role: Second stage of document ingestion pipeline
"""

import asyncio
import logging
from collections.abc import Callable

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from agent_rag.boundary.embeddings.base import EmbeddingGenerator
from agent_rag.core.document_processing.models.chunk import Chunk, EmbeddedChunk
from agent_rag.core.exceptions import ConfigError, ServiceError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Generate embeddings for chunks with bounded parallelism."""

    def __init__(
        self,
        generator: EmbeddingGenerator,
        max_concurrency: int = 5,
        timeout_seconds: float = 30.0,
        max_attempts: int = 3,
        retry_initial_seconds: float = 0.5,
        retry_max_seconds: float = 10.0,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            generator: Embedding provider
            max_concurrency: Embedding calls allowed in flight at once
            timeout_seconds: Timeout for a single embedding call
            max_attempts: Attempts per chunk before failing
            retry_initial_seconds: Initial backoff (jitter scales with it)
            retry_max_seconds: Backoff ceiling

        Raises:
            ConfigError: When max_concurrency or max_attempts is below 1
        """
        if max_concurrency < 1:
            raise ConfigError("Embedding concurrency must be at least 1", field="max_concurrency")
        if max_attempts < 1:
            raise ConfigError("Embedding attempts must be at least 1", field="max_attempts")

        self._generator = generator
        self._max_concurrency = max_concurrency
        self._timeout = timeout_seconds
        self._max_attempts = max_attempts
        self._retry_initial = retry_initial_seconds
        self._retry_max = retry_max_seconds

    async def _embed_once(self, text: str) -> list[float]:
        try:
            return await asyncio.wait_for(self._generator.generate(text), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ServiceError(
                f"Embedding call timed out after {self._timeout}s",
                provider="embeddings",
                operation="generate",
            ) from e

    async def embed_text(self, text: str) -> list[float]:
        """
        Embed one text with timeout and retry.

        Raises:
            ServiceError: After max attempts are exhausted
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(ServiceError),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential_jitter(
                initial=self._retry_initial,
                max=self._retry_max,
                jitter=self._retry_initial,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed_text - Retry {retry_state.attempt_number}/{self._max_attempts} "
                f"after {type(retry_state.outcome.exception()).__name__}"
            ),
            reraise=True,
        )
        return await retrying(self._embed_once, text)

    async def embed(
        self,
        chunks: list[Chunk],
        on_embedded: Callable[[int], None] | None = None,
    ) -> list[EmbeddedChunk]:
        """
        Embed chunks concurrently.

        Args:
            chunks: Chunks to embed
            on_embedded: Called with the running count after each chunk completes

        Returns:
            list[EmbeddedChunk]: Embedded chunks in the same order as `chunks`

        Raises:
            ServiceError: When any chunk fails after retries (other calls are cancelled)
        """
        if not chunks:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run(position: int, chunk: Chunk) -> tuple[int, list[float]]:
            async with semaphore:
                return position, await self.embed_text(chunk.text)

        tasks = [asyncio.create_task(run(position, chunk)) for position, chunk in enumerate(chunks)]
        vectors: dict[int, list[float]] = {}
        try:
            for next_done in asyncio.as_completed(tasks):
                position, vector = await next_done
                vectors[position] = vector
                if on_embedded is not None:
                    on_embedded(len(vectors))
        except BaseException as e:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error(
                f"{__name__}:embed - FAILED after {len(vectors)}/{len(chunks)} chunks, "
                f"cancelled={len(pending)}: {type(e).__name__}: {e}"
            )
            if isinstance(e, Exception) and not isinstance(e, ServiceError):
                raise ServiceError(
                    f"Embedding failed: {e}",
                    provider="embeddings",
                    operation="generate",
                ) from e
            raise

        logger.info(f"{__name__}:embed - Embedded {len(chunks)} chunks")
        return [
            EmbeddedChunk(chunk=chunk, embedding=vectors[position])
            for position, chunk in enumerate(chunks)
        ]
