"""
Test suite for AgentRegistry and KnowledgeService.

Uses the in-memory vector store and the deterministic keyword embedder.
"""

import pytest

from agent_rag.application.services.agent_registry import AgentRegistry
from agent_rag.application.services.knowledge_service import KnowledgeService
from agent_rag.core.exceptions import ConfigError, ContentTooLargeError, NotFoundError
from agent_rag.models.web_search import WebSearchResult


@pytest.fixture
def registry() -> AgentRegistry:
    return AgentRegistry()


@pytest.fixture
def knowledge_service(registry, pipeline, query_engine) -> KnowledgeService:
    return KnowledgeService(registry, pipeline, query_engine)


@pytest.fixture
def web_result() -> WebSearchResult:
    return WebSearchResult(
        title="Photosynthesis overview",
        url="https://biology.example.com/photosynthesis",
        snippet="Plants convert light into chemical energy.",
        position=1,
    )


class TestAgentRegistry:
    def test_register_allocates_namespaces(self, registry) -> None:
        profile = registry.register("Biology tutor", agent_id="bio")

        assert profile.namespace == "agent-bio"
        assert profile.web_namespace == "web-search-bio"
        assert registry.get("bio") == profile

    def test_register_generates_id(self, registry) -> None:
        profile = registry.register("Tutor")

        assert profile.agent_id
        assert profile.namespace == f"agent-{profile.agent_id}"

    def test_register_is_idempotent(self, registry) -> None:
        first = registry.register("Tutor", agent_id="t1")
        second = registry.register("Renamed", agent_id="t1")

        assert second is first
        assert len(registry.list()) == 1

    def test_namespace_override(self, registry) -> None:
        assert registry.register("Tutor", agent_id="t1", namespace="custom").namespace == "custom"

    def test_blank_name_rejected(self, registry) -> None:
        with pytest.raises(ConfigError):
            registry.register("   ")

    def test_unknown_agent(self, registry) -> None:
        with pytest.raises(NotFoundError, match="Agent not found: ghost"):
            registry.get("ghost")

    def test_custom_prefixes(self) -> None:
        profile = AgentRegistry(namespace_prefix="kb-", web_namespace_prefix="web-").register("T", agent_id="x")

        assert (profile.namespace, profile.web_namespace) == ("kb-x", "web-x")


class TestKnowledgeService:
    @pytest.mark.asyncio
    async def test_ingest_file_then_query(self, registry, knowledge_service, store) -> None:
        registry.register("Biology tutor", agent_id="bio")

        result = await knowledge_service.ingest_file(
            "bio",
            "cells.txt",
            "Mitochondria produce energy for the cell.",
            file_url="https://files.example.com/cells.txt",
        )
        matches = await knowledge_service.query_knowledge("bio", "mitochondria energy")

        assert result.namespace == "agent-bio"
        assert store.count("agent-bio") == result.chunk_count
        assert matches[0].source == "cells.txt"
        assert matches[0].source_url == "https://files.example.com/cells.txt"

    @pytest.mark.asyncio
    async def test_web_results_live_in_web_namespace(self, registry, knowledge_service, store, web_result) -> None:
        registry.register("Biology tutor", agent_id="bio")

        result = await knowledge_service.ingest_web_result("bio", web_result)

        assert result.namespace == "web-search-bio"
        assert result.source_id == web_result.url
        assert store.count("agent-bio") == 0
        web_matches = await knowledge_service.query_web_knowledge("bio", "photosynthesis light")
        assert web_matches[0].content == "Photosynthesis overview\nPlants convert light into chemical energy."
        assert await knowledge_service.query_knowledge("bio", "photosynthesis light") == []

    @pytest.mark.asyncio
    async def test_web_result_with_page_content(self, registry, knowledge_service, web_result) -> None:
        registry.register("Biology tutor", agent_id="bio")

        await knowledge_service.ingest_web_result("bio", web_result, content="Full page text about chlorophyll.")

        matches = await knowledge_service.query_web_knowledge("bio", "chlorophyll")
        assert matches[0].content == "Full page text about chlorophyll."

    @pytest.mark.asyncio
    async def test_web_content_limit(self, registry, knowledge_service, web_result) -> None:
        registry.register("Biology tutor", agent_id="bio")

        with pytest.raises(ContentTooLargeError):
            await knowledge_service.ingest_web_result("bio", web_result, content="x" * 100_001)

    @pytest.mark.asyncio
    async def test_web_result_without_url_rejected(self, registry, knowledge_service, store, web_result) -> None:
        registry.register("Biology tutor", agent_id="bio")

        with pytest.raises(ConfigError):
            await knowledge_service.ingest_web_result("bio", web_result.model_copy(update={"url": "  "}))

        assert store.count("web-search-bio") == 0

    @pytest.mark.asyncio
    async def test_agents_do_not_see_each_other(self, registry, knowledge_service) -> None:
        registry.register("Biology tutor", agent_id="bio")
        registry.register("History tutor", agent_id="hist")
        await knowledge_service.ingest_file("bio", "cells.txt", "Mitochondria produce energy.")

        assert await knowledge_service.query_knowledge("hist", "mitochondria") == []

    @pytest.mark.asyncio
    async def test_delete_knowledge_clears_both_namespaces(
        self, registry, knowledge_service, store, web_result
    ) -> None:
        registry.register("Biology tutor", agent_id="bio")
        await knowledge_service.ingest_file("bio", "cells.txt", "Mitochondria produce energy.")
        await knowledge_service.ingest_web_result("bio", web_result)

        await knowledge_service.delete_knowledge("bio")

        assert store.count("agent-bio") == 0
        assert store.count("web-search-bio") == 0

    @pytest.mark.asyncio
    async def test_unknown_agent(self, knowledge_service) -> None:
        with pytest.raises(NotFoundError):
            await knowledge_service.ingest_file("ghost", "a.txt", "text")
        with pytest.raises(NotFoundError):
            await knowledge_service.query_knowledge("ghost", "text")
