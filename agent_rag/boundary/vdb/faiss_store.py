"""
FAISS vector store.

Keeps one LangChain FAISS index per namespace, searched by precomputed
vectors. Vectors are L2-normalized before insertion and search so the
inner-product index yields cosine similarity scores. Indexes are
optionally persisted to disk and reloaded on first use.

Dependencies: faiss-cpu, langchain_community, fastapi.concurrency
System role: Local persistent vector store
"""

import logging
import math
import re
import threading
from pathlib import Path
from typing import Any

import faiss
from fastapi.concurrency import run_in_threadpool
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.embeddings import Embeddings

from agent_rag.boundary.vdb.base import VectorStore
from agent_rag.boundary.vdb.vector_schemas import VectorMatch, VectorRecord, matches_filter
from agent_rag.core.exceptions import ServiceError

logger = logging.getLogger(__name__)

# Metadata key holding the record ID inside the FAISS docstore
_ID_KEY = "_vector_id"


def _normalize(vector: list[float]) -> list[float]:
    norm = math.sqrt(sum(x * x for x in vector))
    if norm == 0:
        return list(vector)
    return [x / norm for x in vector]


def _index_file_name(namespace: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]", "_", namespace)


class FAISSVectorStore(VectorStore):
    """
    FAISS vector store with one index per namespace.

    Wraps LangChain FAISS with namespace partitioning and metadata filtering.
    """

    def __init__(
        self,
        persist_directory: str | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize FAISS vector store.

        Args:
            persist_directory: Directory for index persistence (None keeps indexes in memory)
            embeddings: Optional LangChain embeddings, only needed for text search
        """
        self._persist_dir = Path(persist_directory) if persist_directory else None
        if self._persist_dir is not None:
            self._persist_dir.mkdir(parents=True, exist_ok=True)
        self._embeddings = embeddings
        self._indexes: dict[str, FAISS] = {}
        self._lock = threading.Lock()

    def _load_index(self, namespace: str) -> FAISS | None:
        """Return the namespace index, loading it from disk when persisted."""
        if namespace in self._indexes:
            return self._indexes[namespace]
        if self._persist_dir is None:
            return None

        index_name = _index_file_name(namespace)
        if not (self._persist_dir / f"{index_name}.faiss").exists():
            return None

        logger.info(f"{__name__}:_load_index - Loading index namespace={namespace} from {self._persist_dir}")
        store = FAISS.load_local(
            str(self._persist_dir),
            self._embeddings,
            index_name=index_name,
            allow_dangerous_deserialization=True,
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )
        self._indexes[namespace] = store
        return store

    def _create_index(self, namespace: str, dimension: int) -> FAISS:
        logger.info(f"{__name__}:_create_index - Creating index namespace={namespace}, dimension={dimension}")
        store = FAISS(
            embedding_function=self._embeddings,
            index=faiss.IndexFlatIP(dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
            distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
        )
        self._indexes[namespace] = store
        return store

    def _save(self, namespace: str, store: FAISS) -> None:
        if self._persist_dir is not None:
            store.save_local(str(self._persist_dir), index_name=_index_file_name(namespace))

    def _upsert_sync(self, namespace: str, records: list[VectorRecord]) -> None:
        with self._lock:
            store = self._load_index(namespace)
            dimension = len(records[0].vector)
            if store is None:
                store = self._create_index(namespace, dimension)
            for record in records:
                if len(record.vector) != store.index.d:
                    raise ServiceError(
                        f"Vector {record.id} has dimension {len(record.vector)}, index expects {store.index.d}",
                        provider="vector_store",
                        operation="upsert",
                    )

            existing = set(store.index_to_docstore_id.values())
            replaced = [record.id for record in records if record.id in existing]
            if replaced:
                store.delete(replaced)

            store.add_embeddings(
                text_embeddings=[
                    (str(record.metadata.get("content", "")), _normalize(record.vector))
                    for record in records
                ],
                metadatas=[{**record.metadata, _ID_KEY: record.id} for record in records],
                ids=[record.id for record in records],
            )
            self._save(namespace, store)

    def _query_sync(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        filter_dict: dict[str, Any] | None,
    ) -> list[VectorMatch]:
        with self._lock:
            store = self._load_index(namespace)
            if store is None or store.index.ntotal == 0:
                return []
            if len(vector) != store.index.d:
                raise ServiceError(
                    f"Query dimension {len(vector)} does not match index dimension {store.index.d}",
                    provider="vector_store",
                    operation="query",
                )
            # Exhaustive candidate fetch so filtering never drops in-namespace matches
            results = store.similarity_search_with_score_by_vector(
                _normalize(vector),
                k=top_k,
                filter=lambda metadata: matches_filter(metadata, filter_dict),
                fetch_k=store.index.ntotal,
            )

        matches = []
        for doc, score in results:
            metadata = dict(doc.metadata or {})
            record_id = metadata.pop(_ID_KEY, "")
            matches.append(VectorMatch(id=record_id, score=float(score), metadata=metadata))
        matches.sort(key=lambda match: match.score, reverse=True)
        return matches

    def _delete_sync(self, namespace: str, filter_dict: dict[str, Any]) -> int:
        with self._lock:
            store = self._load_index(namespace)
            if store is None:
                return 0
            doomed = []
            for docstore_id in list(store.index_to_docstore_id.values()):
                doc = store.docstore.search(docstore_id)
                if hasattr(doc, "metadata") and matches_filter(doc.metadata, filter_dict):
                    doomed.append(docstore_id)
            if doomed:
                store.delete(doomed)
                self._save(namespace, store)
            return len(doomed)

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        self._check_batch(records)
        if not records:
            return
        try:
            await run_in_threadpool(self._upsert_sync, namespace, records)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:upsert - FAILED namespace={namespace}: {type(e).__name__}: {e}")
            raise ServiceError(
                f"Failed to upsert vectors: {e}",
                provider="vector_store",
                operation="upsert",
                details={"namespace": namespace, "count": len(records)},
            ) from e

    async def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        try:
            return await run_in_threadpool(self._query_sync, namespace, vector, top_k, filter)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:query - FAILED namespace={namespace}: {type(e).__name__}: {e}")
            raise ServiceError(
                f"Failed to query vectors: {e}",
                provider="vector_store",
                operation="query",
                details={"namespace": namespace},
            ) from e

    async def delete_many(self, namespace: str, filter: dict[str, Any]) -> None:
        try:
            deleted = await run_in_threadpool(self._delete_sync, namespace, filter)
        except Exception as e:
            logger.error(f"{__name__}:delete_many - FAILED namespace={namespace}: {type(e).__name__}: {e}")
            raise ServiceError(
                f"Failed to delete vectors: {e}",
                provider="vector_store",
                operation="delete",
                details={"namespace": namespace},
            ) from e
        logger.info(f"{__name__}:delete_many - namespace={namespace}, deleted={deleted}")
