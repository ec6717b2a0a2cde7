"""
Tests for the Google Custom Search provider and the cache-through wrapper.

HTTP calls are served by httpx.MockTransport.
"""

from unittest.mock import MagicMock

import httpx
import pytest

from conftest import FailingWebSearch, FakeWebSearch, ManualClock, sample_web_response

from agent_rag.boundary.web_search.cached import CachedWebSearchProvider
from agent_rag.boundary.web_search.google_search import GoogleCustomSearchProvider, format_snippet
from agent_rag.configs.web_search import WebSearchSettings
from agent_rag.core.cache.result_cache import ResultCache
from agent_rag.core.exceptions import ConfigError, EmptyQueryError, ServiceError
from agent_rag.models.web_search import SearchEngine, WebSearchPreferences

GOOGLE_PAYLOAD = {
    "searchInformation": {"totalResults": "1200", "searchTime": 0.31},
    "items": [
        {
            "title": "Sourdough basics",
            "link": "https://bread.example.com/sourdough",
            "snippet": "Steps: 1. Feed the starter 2. Mix &amp; rest",
        },
        {
            "title": "Oven temperatures",
            "link": "https://bread.example.com/oven",
            "snippet": "Bake   hot,   then   lower.",
        },
    ],
}


def _provider(handler, api_key: str = "key-123", engine_id: str = "cx-456") -> GoogleCustomSearchProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleCustomSearchProvider(api_key=api_key, engine_id=engine_id, client=client)


class TestFormatSnippet:
    def test_decodes_html_entities(self) -> None:
        assert format_snippet("Fish &amp; Chips &quot;classic&quot;") == 'Fish & Chips "classic"'

    def test_numbered_items_start_new_lines(self) -> None:
        assert format_snippet("Tips: 1. Preheat 2. Stir") == "Tips:\n1. Preheat\n2. Stir"

    def test_bullets_start_new_lines(self) -> None:
        assert format_snippet("Pros: • fast • cheap") == "Pros:\n• fast\n• cheap"

    def test_collapses_spaces_and_drops_blank_lines(self) -> None:
        assert format_snippet("  too    many \n\n  spaces ") == "too many\nspaces"

    def test_decimal_numbers_untouched(self) -> None:
        assert format_snippet("costs 2.5 dollars") == "costs 2.5 dollars"

    def test_prose_with_years_and_dashes_untouched(self) -> None:
        text = "The company was founded in 1998. It grew fast - very fast."

        assert format_snippet(text) == text

    def test_number_ending_a_sentence_is_not_a_list(self) -> None:
        assert format_snippet("We met at gate 5. Then we left.") == "We met at gate 5. Then we left."

    def test_dash_list_after_colon(self) -> None:
        assert format_snippet("Pack: - tent - stove") == "Pack:\n- tent\n- stove"

    def test_numbered_list_after_sentence(self) -> None:
        assert format_snippet("Do this. 1. Mix 2. Bake") == "Do this.\n1. Mix\n2. Bake"


class TestGoogleCustomSearchProvider:
    @pytest.mark.asyncio
    async def test_parses_results(self) -> None:
        provider = _provider(lambda request: httpx.Response(200, json=GOOGLE_PAYLOAD))

        response = await provider.search("sourdough")

        assert [result.position for result in response.results] == [1, 2]
        assert response.results[0].url == "https://bread.example.com/sourdough"
        assert response.results[0].snippet == "Steps:\n1. Feed the starter\n2. Mix & rest"
        assert response.results[1].snippet == "Bake hot, then lower."
        assert response.total_results == 1200
        assert response.search_time == pytest.approx(0.31)

    @pytest.mark.asyncio
    async def test_request_parameters(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={})

        provider = _provider(handler)
        preferences = WebSearchPreferences(max_results=3, include_images=True, safe_mode_enabled=False)

        response = await provider.search("sourdough", preferences)

        assert response.results == []
        assert seen == {
            "key": "key-123",
            "cx": "cx-456",
            "q": "sourdough",
            "num": "3",
            "safe": "off",
            "searchType": "image",
        }

    @pytest.mark.asyncio
    async def test_safe_search_on_by_default(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={})

        await _provider(handler).search("sourdough")

        assert seen["safe"] == "active"
        assert "searchType" not in seen

    @pytest.mark.asyncio
    async def test_error_status_uses_api_message(self) -> None:
        payload = {"error": {"code": 403, "message": "API key not valid"}}
        provider = _provider(lambda request: httpx.Response(403, json=payload))

        with pytest.raises(ServiceError, match="API key not valid") as exc_info:
            await provider.search("sourdough")

        assert exc_info.value.details["status_code"] == 403
        assert exc_info.value.provider == "web_search"

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ServiceError, match="Search request failed"):
            await _provider(handler).search("sourdough")

    @pytest.mark.asyncio
    async def test_invalid_json_wrapped(self) -> None:
        provider = _provider(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(ServiceError):
            await provider.search("sourdough")

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        calls = []
        provider = _provider(lambda request: calls.append(request) or httpx.Response(200, json={}), api_key="")

        with pytest.raises(ServiceError, match="Search service not configured"):
            await provider.search("sourdough")

        assert calls == []

    @pytest.mark.asyncio
    async def test_blank_query(self) -> None:
        with pytest.raises(EmptyQueryError):
            await _provider(lambda request: httpx.Response(200, json={})).search("  ")

    @pytest.mark.asyncio
    async def test_unsupported_engine(self) -> None:
        provider = _provider(lambda request: httpx.Response(200, json={}))

        with pytest.raises(ConfigError):
            await provider.search("sourdough", WebSearchPreferences(search_engine=SearchEngine.BING))

    def test_from_settings(self) -> None:
        settings = WebSearchSettings(api_key="k", engine_id="cx", timeout_seconds=3.0)

        provider = GoogleCustomSearchProvider.from_settings(settings)

        assert provider._api_key == "k"
        assert provider._engine_id == "cx"


class TestCachedWebSearchProvider:
    @pytest.mark.asyncio
    async def test_repeated_search_served_from_cache(self) -> None:
        inner = FakeWebSearch(sample_web_response())
        provider = CachedWebSearchProvider(inner, ResultCache(clock=ManualClock()))

        first = await provider.search("gradient descent")
        second = await provider.search("gradient descent")

        assert first == second
        assert len(inner.calls) == 1
        assert provider.cache.stats().size == 1

    @pytest.mark.asyncio
    async def test_preferences_are_part_of_the_key(self) -> None:
        inner = FakeWebSearch(sample_web_response())
        provider = CachedWebSearchProvider(inner, ResultCache())

        await provider.search("gradient descent", WebSearchPreferences(max_results=5))
        await provider.search("gradient descent", WebSearchPreferences(max_results=2))

        assert len(inner.calls) == 2

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self) -> None:
        clock = ManualClock()
        inner = FakeWebSearch(sample_web_response())
        provider = CachedWebSearchProvider(inner, ResultCache(ttl_seconds=60, clock=clock))

        await provider.search("gradient descent")
        clock.advance(61)
        await provider.search("gradient descent")

        assert len(inner.calls) == 2

    @pytest.mark.asyncio
    async def test_callers_cannot_mutate_cached_response(self) -> None:
        provider = CachedWebSearchProvider(FakeWebSearch(sample_web_response()), ResultCache())

        first = await provider.search("gradient descent")
        first.results.clear()
        second = await provider.search("gradient descent")

        assert len(second.results) == 2

    @pytest.mark.asyncio
    async def test_cache_failure_treated_as_miss(self) -> None:
        cache = MagicMock()
        cache.get.side_effect = RuntimeError("cache corrupted")
        cache.set.side_effect = RuntimeError("cache corrupted")
        inner = FakeWebSearch(sample_web_response())
        provider = CachedWebSearchProvider(inner, cache)

        response = await provider.search("gradient descent")

        assert len(response.results) == 2
        assert len(inner.calls) == 1

    @pytest.mark.asyncio
    async def test_provider_errors_not_cached(self) -> None:
        cache = ResultCache()
        provider = CachedWebSearchProvider(FailingWebSearch(), cache)

        with pytest.raises(ServiceError):
            await provider.search("gradient descent")

        assert cache.stats().size == 0

