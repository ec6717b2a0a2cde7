"""Result caching."""

from agent_rag.core.cache.result_cache import CacheEntry, CacheStats, ResultCache, make_cache_key

__all__ = ["CacheEntry", "CacheStats", "ResultCache", "make_cache_key"]
