"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic embedder, scripted LLM, fake web search, manual clock,
in-memory store, pipeline/query engine/orchestrator builders, FastAPI test client
Dependencies: pytest, agent_rag
System role: Test infrastructure and fixture management
"""

import hashlib
import re
from collections.abc import AsyncIterator, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from agent_rag.api.deps import (
    ServiceCache,
    get_agent_registry,
    get_chat_service,
    get_knowledge_service,
    get_result_cache,
    get_service_cache,
)
from agent_rag.api.main import create_app
from agent_rag.boundary.embeddings.base import EmbeddingGenerator
from agent_rag.boundary.llm.base import CompletionOptions, LLMProvider
from agent_rag.boundary.vdb.in_memory_store import InMemoryVectorStore
from agent_rag.boundary.web_search.base import WebSearchProvider
from agent_rag.boundary.web_search.cached import CachedWebSearchProvider
from agent_rag.configs import Settings
from agent_rag.configs.orchestrator import OrchestratorSettings
from agent_rag.core.agentic_system.agent.response_orchestrator import ResponseOrchestrator
from agent_rag.core.agentic_system.agent.summarizer import LLMSummarizer
from agent_rag.core.document_processing.configs import DocumentPipelineSettings
from agent_rag.core.document_processing.entrypoint import IngestionPipeline
from agent_rag.core.exceptions import ServiceError
from agent_rag.core.retriever import QueryEngine
from agent_rag.models.chat import ConversationTurn
from agent_rag.models.web_search import (
    WebSearchPreferences,
    WebSearchResponse,
    WebSearchResult,
)

EMBEDDING_DIMENSION = 32


class KeywordEmbedder(EmbeddingGenerator):
    """Deterministic bag-of-words embedder: texts sharing words point the same way."""

    def __init__(self, dimension: int = EMBEDDING_DIMENSION) -> None:
        self.dimension = dimension
        self.calls: list[str] = []

    async def generate(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * self.dimension
        for word in re.findall(r"\w+", text.lower()):
            bucket = hashlib.md5(word.encode("utf-8")).digest()[0] % self.dimension
            vector[bucket] += 1.0
        return vector


class FailingEmbedder(EmbeddingGenerator):
    """Embedder whose provider is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def generate(self, text: str) -> list[float]:
        self.calls += 1
        raise ServiceError("quota exceeded", provider="embeddings", operation="generate")


class FlakyEmbedder(KeywordEmbedder):
    """Fails the first `failures` calls, then embeds normally."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    async def generate(self, text: str) -> list[float]:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ServiceError("transient failure", provider="embeddings", operation="generate")
        return await super().generate(text)


class ScriptedLLM(LLMProvider):
    """
    LLM returning scripted replies.

    `reply` maps the last message content to an answer; every call is
    recorded with its messages and options.
    """

    def __init__(self, reply: Callable[[str], str] | None = None) -> None:
        self.reply = reply or (lambda prompt: f"reply #{len(self.calls)}")
        self.calls: list[tuple[list[ConversationTurn], CompletionOptions | None]] = []

    async def complete(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> str:
        self.calls.append((list(messages), options))
        return self.reply(messages[-1].content)

    async def stream(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]:
        text = await self.complete(messages, options)
        for word in text.split(" "):
            yield word


class FailingLLM(LLMProvider):
    """LLM whose provider is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def complete(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> str:
        self.calls += 1
        raise ServiceError("model overloaded", provider="llm", operation="complete")

    async def stream(
        self,
        messages: list[ConversationTurn],
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]:
        self.calls += 1
        raise ServiceError("model overloaded", provider="llm", operation="stream")
        yield ""


class FakeWebSearch(WebSearchProvider):
    """Web search returning a fixed response."""

    def __init__(self, response: WebSearchResponse | None = None) -> None:
        self.response = response or WebSearchResponse()
        self.calls: list[tuple[str, WebSearchPreferences | None]] = []

    async def search(
        self,
        query: str,
        preferences: WebSearchPreferences | None = None,
    ) -> WebSearchResponse:
        self.calls.append((query, preferences))
        return self.response.model_copy(deep=True)


class FailingWebSearch(WebSearchProvider):
    """Web search whose provider is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def search(
        self,
        query: str,
        preferences: WebSearchPreferences | None = None,
    ) -> WebSearchResponse:
        self.calls += 1
        raise ServiceError("Search service not configured", provider="web_search", operation="search")


class ManualClock:
    """Clock advanced by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def sample_web_response() -> WebSearchResponse:
    """Two-result search response."""
    return WebSearchResponse(
        results=[
            WebSearchResult(
                title="Gradient descent explained",
                url="https://example.com/gradient-descent",
                snippet="Gradient descent minimizes a loss function step by step.",
                position=1,
            ),
            WebSearchResult(
                title="Learning rate schedules",
                url="https://example.com/learning-rate",
                snippet="Schedules lower the learning rate as training goes on.",
                position=2,
            ),
        ],
        total_results=2,
        search_time=0.12,
    )


@pytest.fixture
def embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    """Small chunks and no retry backoff."""
    return DocumentPipelineSettings(
        chunk_size=100,
        chunk_overlap=10,
        max_concurrent_embeddings=3,
        embedding_timeout_seconds=5.0,
        embedding_max_attempts=3,
        embedding_retry_initial_seconds=0.0,
        upsert_batch_size=100,
    )


@pytest.fixture
def pipeline(embedder, store, pipeline_settings) -> IngestionPipeline:
    return IngestionPipeline(embedder, store, settings=pipeline_settings)


@pytest.fixture
def query_engine(embedder, store) -> QueryEngine:
    return QueryEngine(embedder, store, timeout_seconds=5.0)


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM()


@pytest.fixture
def web_search() -> FakeWebSearch:
    return FakeWebSearch(sample_web_response())


@pytest.fixture
def orchestrator_settings() -> OrchestratorSettings:
    return OrchestratorSettings(stage_timeout_seconds=2.0, rag_top_k=3)


@pytest.fixture
def make_orchestrator(query_engine, llm, web_search, orchestrator_settings):
    """Build an orchestrator for an owner, overriding any collaborator."""

    def build(owner_id: str = "agent-1", **overrides) -> ResponseOrchestrator:
        chosen_llm = overrides.pop("llm", llm)
        params = {
            "owner_id": owner_id,
            "query_engine": query_engine,
            "llm": chosen_llm,
            "summarizer": LLMSummarizer(chosen_llm),
            "web_search": web_search,
            "settings": orchestrator_settings,
        }
        params.update(overrides)
        return ResponseOrchestrator(**params)

    return build


# API fixtures: the real application with fakes behind the ServiceCache


@pytest.fixture
def service_cache() -> ServiceCache:
    """ServiceCache with fake providers and small limits."""
    settings = Settings(
        document_pipeline=DocumentPipelineSettings(
            chunk_size=200,
            chunk_overlap=20,
            embedding_max_attempts=1,
            embedding_retry_initial_seconds=0.0,
            max_file_content_length=10_000,
        ),
    )
    cache = ServiceCache(settings)
    cache._vector_store = InMemoryVectorStore()
    cache._embedder = KeywordEmbedder()
    cache._llm = ScriptedLLM(lambda prompt: "Composed answer.")
    cache._web_search = CachedWebSearchProvider(FakeWebSearch(sample_web_response()), cache.result_cache)
    return cache


@pytest.fixture
def app(service_cache) -> FastAPI:
    """Create the application with dependencies bound to the fake cache."""
    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: service_cache
    app.dependency_overrides[get_agent_registry] = lambda: service_cache.registry
    app.dependency_overrides[get_knowledge_service] = lambda: service_cache.knowledge_service
    app.dependency_overrides[get_chat_service] = lambda: service_cache.chat_service
    app.dependency_overrides[get_result_cache] = lambda: service_cache.result_cache
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def agent_id(client: TestClient) -> str:
    """Register an agent and return its ID."""
    response = client.post("/api/v1/agents", json={"name": "Study buddy", "agent_id": "buddy"})
    assert response.status_code == 201
    return response.json()["agent_id"]
