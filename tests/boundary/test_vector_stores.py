"""
Tests for the namespaced vector stores.

Runs the shared contract against InMemoryVectorStore and FAISSVectorStore,
then covers FAISS persistence and the store factory.
"""

import pytest

from agent_rag.boundary.vdb.faiss_store import FAISSVectorStore
from agent_rag.boundary.vdb.in_memory_store import InMemoryVectorStore, cosine_similarity
from agent_rag.boundary.vdb.vector_schemas import VectorRecord, matches_filter
from agent_rag.boundary.vdb.vector_store_factory import get_vector_store
from agent_rag.configs.vector_store import VectorStoreSettings
from agent_rag.core.exceptions import ConfigError, ServiceError


def _record(record_id: str, vector: list[float], owner_id: str = "A", content: str = "text") -> VectorRecord:
    return VectorRecord(
        id=record_id,
        vector=vector,
        metadata={"owner_id": owner_id, "content": content, "source_id": "doc"},
    )


@pytest.fixture(params=["memory", "faiss"])
def vector_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryVectorStore()
    return FAISSVectorStore(persist_directory=str(tmp_path / "faiss"))


class TestVectorStoreContract:
    """Behaviour every VectorStore implementation shares."""

    @pytest.mark.asyncio
    async def test_query_sorted_by_descending_score(self, vector_store) -> None:
        await vector_store.upsert("ns", [
            _record("far", [0.0, 1.0, 0.0]),
            _record("near", [1.0, 0.1, 0.0]),
            _record("mid", [1.0, 1.0, 0.0]),
        ])

        matches = await vector_store.query("ns", [1.0, 0.0, 0.0], top_k=3)

        assert [match.id for match in matches] == ["near", "mid", "far"]
        assert matches[0].score == pytest.approx(cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.1, 0.0]), rel=1e-4)

    @pytest.mark.asyncio
    async def test_top_k_truncates(self, vector_store) -> None:
        await vector_store.upsert("ns", [_record(f"r{i}", [1.0, float(i), 0.0]) for i in range(5)])

        assert len(await vector_store.query("ns", [1.0, 0.0, 0.0], top_k=2)) == 2

    @pytest.mark.asyncio
    async def test_filter_restricts_matches(self, vector_store) -> None:
        await vector_store.upsert("ns", [
            _record("a1", [1.0, 0.0, 0.0], owner_id="A"),
            _record("b1", [1.0, 0.0, 0.0], owner_id="B"),
            _record("a2", [0.5, 0.5, 0.0], owner_id="A"),
        ])

        matches = await vector_store.query("ns", [1.0, 0.0, 0.0], top_k=10, filter={"owner_id": "A"})

        assert {match.id for match in matches} == {"a1", "a2"}
        assert all(match.metadata["owner_id"] == "A" for match in matches)

    @pytest.mark.asyncio
    async def test_namespaces_are_isolated(self, vector_store) -> None:
        await vector_store.upsert("ns-1", [_record("x", [1.0, 0.0, 0.0])])

        assert await vector_store.query("ns-2", [1.0, 0.0, 0.0], top_k=5) == []

    @pytest.mark.asyncio
    async def test_upsert_overwrites_by_id(self, vector_store) -> None:
        await vector_store.upsert("ns", [_record("x", [1.0, 0.0, 0.0], content="old")])
        await vector_store.upsert("ns", [_record("x", [1.0, 0.0, 0.0], content="new")])

        matches = await vector_store.query("ns", [1.0, 0.0, 0.0], top_k=5)

        assert [(match.id, match.metadata["content"]) for match in matches] == [("x", "new")]

    @pytest.mark.asyncio
    async def test_delete_many_by_filter(self, vector_store) -> None:
        await vector_store.upsert("ns", [
            _record("a1", [1.0, 0.0, 0.0], owner_id="A"),
            _record("b1", [0.0, 1.0, 0.0], owner_id="B"),
        ])

        await vector_store.delete_many("ns", {"owner_id": "A"})

        matches = await vector_store.query("ns", [1.0, 1.0, 0.0], top_k=5)
        assert [match.id for match in matches] == ["b1"]

    @pytest.mark.asyncio
    async def test_batch_over_limit_rejected(self, vector_store) -> None:
        records = [_record(f"r{i}", [1.0, 0.0, 0.0]) for i in range(101)]

        with pytest.raises(ServiceError):
            await vector_store.upsert("ns", records)

    @pytest.mark.asyncio
    async def test_dimension_mismatch_rejected(self, vector_store) -> None:
        await vector_store.upsert("ns", [_record("x", [1.0, 0.0, 0.0])])

        with pytest.raises(ServiceError):
            await vector_store.upsert("ns", [_record("y", [1.0, 0.0])])


class TestFAISSPersistence:
    @pytest.mark.asyncio
    async def test_index_reloaded_from_disk(self, tmp_path) -> None:
        directory = str(tmp_path / "faiss")
        first = FAISSVectorStore(persist_directory=directory)
        await first.upsert("agent-A", [_record("x", [0.0, 1.0, 0.0], content="persisted")])

        second = FAISSVectorStore(persist_directory=directory)
        matches = await second.query("agent-A", [0.0, 1.0, 0.0], top_k=1)

        assert [(match.id, match.metadata["content"]) for match in matches] == [("x", "persisted")]
        assert "_vector_id" not in matches[0].metadata

    @pytest.mark.asyncio
    async def test_unsaved_namespace_is_empty(self, tmp_path) -> None:
        store = FAISSVectorStore(persist_directory=str(tmp_path))

        assert await store.query("missing", [1.0, 0.0], top_k=3) == []


class TestHelpers:
    def test_matches_filter_supports_eq_operator(self) -> None:
        metadata = {"owner_id": "A", "index": 2}

        assert matches_filter(metadata, {"owner_id": {"$eq": "A"}})
        assert matches_filter(metadata, {"owner_id": "A", "index": 2})
        assert not matches_filter(metadata, {"owner_id": "B"})
        assert matches_filter(metadata, None)

    def test_cosine_similarity_of_zero_vector(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0

    def test_factory_selects_store(self, tmp_path) -> None:
        assert isinstance(get_vector_store(VectorStoreSettings(store_type="memory")), InMemoryVectorStore)
        faiss_store = get_vector_store(
            VectorStoreSettings(store_type="FAISS", persist_directory=str(tmp_path))
        )
        assert isinstance(faiss_store, FAISSVectorStore)

    def test_factory_rejects_unknown_store(self) -> None:
        with pytest.raises(ConfigError):
            get_vector_store(VectorStoreSettings(store_type="pinecone"))
