"""
Dependency injection container.

Factory functions for FastAPI dependencies. Collaborators are built lazily
from settings on first use and shared for the process lifetime.

Dependencies: agent_rag.configs, agent_rag.application, agent_rag.boundary
System role: DI container for service injection
"""

from agent_rag.application.services import AgentRegistry, ChatService, KnowledgeService
from agent_rag.configs import Settings, get_settings
from agent_rag.core.cache.result_cache import ResultCache


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._vector_store = None
        self._embedder = None
        self._llm = None
        self._result_cache = None
        self._web_search = None
        self._registry = None
        self._pipeline = None
        self._query_engine = None
        self._knowledge_service = None
        self._chat_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def vector_store(self):
        """Get cached vector store."""
        if self._vector_store is None:
            from agent_rag.boundary.vdb.vector_store_factory import get_vector_store
            self._vector_store = get_vector_store(self.settings.vector_store)
        return self._vector_store

    @property
    def embedder(self):
        """Get cached Gemini embedding generator."""
        if self._embedder is None:
            from agent_rag.boundary.embeddings.gemini_embedder import GeminiEmbeddingGenerator
            self._embedder = GeminiEmbeddingGenerator.from_settings(self.settings.vector_store)
        return self._embedder

    @property
    def llm(self):
        """Get cached Gemini chat provider."""
        if self._llm is None:
            from agent_rag.boundary.llm.gemini_llm import GeminiLLMProvider
            self._llm = GeminiLLMProvider.from_settings(self.settings.orchestrator)
        return self._llm

    @property
    def result_cache(self) -> ResultCache:
        """Get cached web search result cache."""
        if self._result_cache is None:
            self._result_cache = ResultCache(
                ttl_seconds=self.settings.web_search.cache_ttl_seconds,
                max_entries=self.settings.web_search.cache_max_entries,
            )
        return self._result_cache

    @property
    def web_search(self):
        """Get cached, cache-wrapped Google search provider."""
        if self._web_search is None:
            from agent_rag.boundary.web_search.cached import CachedWebSearchProvider
            from agent_rag.boundary.web_search.google_search import GoogleCustomSearchProvider
            self._web_search = CachedWebSearchProvider(
                GoogleCustomSearchProvider.from_settings(self.settings.web_search),
                self.result_cache,
            )
        return self._web_search

    @property
    def registry(self) -> AgentRegistry:
        """Get cached agent registry."""
        if self._registry is None:
            self._registry = AgentRegistry(
                namespace_prefix=self.settings.vector_store.namespace_prefix,
                web_namespace_prefix=self.settings.vector_store.web_namespace_prefix,
            )
        return self._registry

    @property
    def pipeline(self):
        """Get cached ingestion pipeline."""
        if self._pipeline is None:
            from agent_rag.core.document_processing.entrypoint import IngestionPipeline
            self._pipeline = IngestionPipeline(
                self.embedder,
                self.vector_store,
                settings=self.settings.document_pipeline,
                namespace_prefix=self.settings.vector_store.namespace_prefix,
            )
        return self._pipeline

    @property
    def query_engine(self):
        """Get cached query engine."""
        if self._query_engine is None:
            from agent_rag.core.retriever import QueryEngine
            self._query_engine = QueryEngine(
                self.embedder,
                self.vector_store,
                namespace_prefix=self.settings.vector_store.namespace_prefix,
                timeout_seconds=self.settings.orchestrator.stage_timeout_seconds,
            )
        return self._query_engine

    @property
    def knowledge_service(self) -> KnowledgeService:
        """Get cached knowledge service."""
        if self._knowledge_service is None:
            self._knowledge_service = KnowledgeService(self.registry, self.pipeline, self.query_engine)
        return self._knowledge_service

    @property
    def chat_service(self) -> ChatService:
        """Get cached chat service."""
        if self._chat_service is None:
            self._chat_service = ChatService(self.registry, self.build_orchestrator)
        return self._chat_service

    def build_orchestrator(self, profile):
        """Build a response orchestrator for one agent."""
        from agent_rag.core.agentic_system.agent.response_orchestrator import ResponseOrchestrator
        from agent_rag.core.agentic_system.agent.summarizer import LLMSummarizer
        from agent_rag.models.web_search import SearchEngine, WebSearchPreferences

        web_settings = self.settings.web_search
        return ResponseOrchestrator(
            owner_id=profile.agent_id,
            query_engine=self.query_engine,
            llm=self.llm,
            summarizer=LLMSummarizer(self.llm),
            web_search=self.web_search,
            settings=self.settings.orchestrator,
            namespace=profile.namespace,
            search_preferences=WebSearchPreferences(
                max_results=web_settings.max_results,
                search_engine=SearchEngine(web_settings.search_engine),
                include_images=web_settings.include_images,
                safe_mode_enabled=web_settings.safe_mode_enabled,
            ),
        )

    def clear(self) -> None:
        """Clear all cached instances."""
        self._vector_store = None
        self._embedder = None
        self._llm = None
        self._result_cache = None
        self._web_search = None
        self._registry = None
        self._pipeline = None
        self._query_engine = None
        self._knowledge_service = None
        self._chat_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_service_cache().settings


def get_agent_registry() -> AgentRegistry:
    """Get agent registry."""
    return get_service_cache().registry


def get_knowledge_service() -> KnowledgeService:
    """
    Get knowledge service instance.

    Returns:
        KnowledgeService: Ingestion and retrieval over agent namespaces
    """
    return get_service_cache().knowledge_service


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service with per-agent orchestrators
    """
    return get_service_cache().chat_service


def get_result_cache() -> ResultCache:
    """Get web search result cache."""
    return get_service_cache().result_cache
