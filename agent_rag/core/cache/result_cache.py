"""
TTL + capacity bounded result cache.

Responses are keyed by a SHA-256 digest of the query and its settings,
serialized with sorted keys so equal settings always map to the same key.
Expired entries are dropped before every read and after every write; when
the cache is over capacity the oldest entries are evicted.

Dependencies: pydantic
System role: Web search result cache
"""

import hashlib
import json
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from agent_rag.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600.0
DEFAULT_MAX_ENTRIES = 100


@dataclass
class CacheEntry:
    """Cached response with its insertion and expiry times."""

    response: Any
    inserted_at: float
    expires_at: float


class CacheStats(BaseModel):
    """Snapshot of cache occupancy."""

    size: int
    oldest_entry: float | None = None
    newest_entry: float | None = None


def _stable_settings(settings: Any) -> Any:
    if isinstance(settings, BaseModel):
        return settings.model_dump(mode="json")
    return settings


def make_cache_key(query: str, settings: Any = None) -> str:
    """SHA-256 of the query and settings serialized with sorted keys."""
    payload = json.dumps([query, _stable_settings(settings)], sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ResultCache:
    """Thread-safe cache with TTL expiry and oldest-first eviction."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            ttl_seconds: Lifetime of an entry in seconds
            max_entries: Maximum entries held at once
            clock: Returns the current time in seconds

        Raises:
            ConfigError: If ttl_seconds or max_entries is not positive
        """
        if ttl_seconds <= 0:
            raise ConfigError("Cache TTL must be positive", field="ttl_seconds")
        if max_entries < 1:
            raise ConfigError("Cache capacity must be at least 1", field="max_entries")
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def set(self, query: str, response: Any, settings: Any = None) -> None:
        key = make_cache_key(query, settings)
        now = self._clock()
        with self._lock:
            # Re-inserting moves the key to the newest position
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                response=response,
                inserted_at=now,
                expires_at=now + self._ttl,
            )
            self._remove_expired(now)
            self._evict_oldest()

    def get(self, query: str, settings: Any = None) -> Any | None:
        key = make_cache_key(query, settings)
        with self._lock:
            self._remove_expired(self._clock())
            entry = self._entries.get(key)
        if entry is None:
            logger.debug(f"{__name__}:get - MISS key={key[:12]}")
            return None
        logger.debug(f"{__name__}:get - HIT key={key[:12]}")
        return entry.response

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info(f"{__name__}:clear - Cache cleared")

    def stats(self) -> CacheStats:
        with self._lock:
            self._remove_expired(self._clock())
            if not self._entries:
                return CacheStats(size=0)
            inserted = [entry.inserted_at for entry in self._entries.values()]
            return CacheStats(
                size=len(self._entries),
                oldest_entry=min(inserted),
                newest_entry=max(inserted),
            )

    def _remove_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"{__name__}:_remove_expired - removed={len(expired)}")

    def _evict_oldest(self) -> None:
        excess = len(self._entries) - self._max_entries
        if excess <= 0:
            return
        oldest = sorted(self._entries.items(), key=lambda item: item[1].inserted_at)[:excess]
        for key, _ in oldest:
            del self._entries[key]
        logger.debug(f"{__name__}:_evict_oldest - evicted={excess}")
