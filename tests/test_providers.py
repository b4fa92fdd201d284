from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from keyword_fetcher.providers import (
    DEFAULT_PROVIDER_ORDER,
    MAX_ITEMS,
    build_registry,
    get_fetcher,
    list_providers,
    safe_fetch,
)
from keyword_fetcher.providers.coindesk import fetch_coindesk
from keyword_fetcher.providers.duckduckgo import fetch_duckduckgo
from keyword_fetcher.providers.hackernews import fetch_hackernews
from keyword_fetcher.providers.openlibrary import fetch_openlibrary
from keyword_fetcher.providers.publicapis import fetch_publicapis
from keyword_fetcher.providers.reddit import fetch_reddit
from keyword_fetcher.providers.tvmaze import fetch_tvmaze
from keyword_fetcher.providers.wikipedia import fetch_wikipedia

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _json(payload: Any) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    return handler


def test_registry_default_order() -> None:
    assert DEFAULT_PROVIDER_ORDER == (
        "wikipedia",
        "reddit",
        "duckduckgo",
        "hackernews",
        "publicapis",
        "openlibrary",
        "coindesk",
        "tvmaze",
    )
    assert set(list_providers()) == set(DEFAULT_PROVIDER_ORDER)


@pytest.mark.anyio
async def test_build_registry_follows_configured_order() -> None:
    async with _client(_json({"hits": [{"title": "Show HN"}]})) as client:
        registry = build_registry(client, ("hackernews", "wikipedia"))

        assert [provider.name for provider in registry] == ["hackernews", "wikipedia"]
        data = await registry[0].fetch("python")

    assert data == [{"title": "Show HN", "url": None, "points": None, "author": None}]


def test_build_registry_rejects_unknown_and_duplicate_names() -> None:
    client = httpx.AsyncClient()
    with pytest.raises(ValueError):
        build_registry(client, ("wikipedia", "nope"))
    with pytest.raises(ValueError):
        build_registry(client, ("reddit", "reddit"))


def test_get_fetcher_unknown_provider() -> None:
    with pytest.raises(ValueError) as exc:
        get_fetcher("altavista")

    assert "altavista" in str(exc.value)


@pytest.mark.anyio
async def test_wikipedia_searches_then_fetches_summary() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        if request.url.path == "/w/api.php":
            return httpx.Response(
                200,
                json={"query": {"search": [{"title": "Python (language)"}]}},
            )
        return httpx.Response(
            200,
            json={
                "title": "Python (language)",
                "extract": "A programming language.",
                "content_urls": {
                    "desktop": {"page": "https://en.wikipedia.org/wiki/Python"}
                },
                "thumbnail": {"source": "ignored"},
            },
        )

    async with _client(handler) as client:
        data = await fetch_wikipedia(client, "pyhton language")

    assert data == {
        "title": "Python (language)",
        "extract": "A programming language.",
        "url": "https://en.wikipedia.org/wiki/Python",
    }
    assert seen[0].params["srsearch"] == "pyhton language"
    assert seen[1].path == "/api/rest_v1/page/summary/Python (language)"


@pytest.mark.anyio
async def test_wikipedia_without_hits_returns_none() -> None:
    async with _client(_json({"query": {"search": []}})) as client:
        assert await fetch_wikipedia(client, "zzzz") is None


@pytest.mark.anyio
async def test_http_error_becomes_failure(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with caplog.at_level(logging.ERROR):
        async with _client(handler) as client:
            assert await fetch_wikipedia(client, "python") is None
            assert await fetch_reddit(client, "python") is None

    assert "provider_fetch_failed provider=wikipedia keyword=python" in caplog.text
    assert "provider_fetch_failed provider=reddit keyword=python" in caplog.text


@pytest.mark.anyio
async def test_transport_error_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        assert await fetch_hackernews(client, "python") is None
        assert await fetch_tvmaze(client, "python") is None


@pytest.mark.anyio
async def test_invalid_json_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    async with _client(handler) as client:
        assert await fetch_duckduckgo(client, "python") is None
        assert await fetch_coindesk(client, "python") is None


@pytest.mark.anyio
async def test_unexpected_shape_becomes_failure() -> None:
    async with _client(_json({"unexpected": True})) as client:
        assert await fetch_openlibrary(client, "python") is None
        assert await fetch_reddit(client, "python") is None
        assert await fetch_tvmaze(client, "python") is None


@pytest.mark.anyio
async def test_reddit_trims_and_builds_permalinks() -> None:
    seen: list[httpx.Request] = []
    children = [
        {"data": {"title": f"Post {i}", "permalink": f"/r/python/{i}", "score": i}}
        for i in range(5)
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"children": children}})

    async with _client(handler) as client:
        data = await fetch_reddit(client, "python tips")

    assert data == [
        {"title": "Post 0", "url": "https://reddit.com/r/python/0", "score": 0},
        {"title": "Post 1", "url": "https://reddit.com/r/python/1", "score": 1},
        {"title": "Post 2", "url": "https://reddit.com/r/python/2", "score": 2},
    ]
    assert seen[0].url.params["q"] == "python tips"
    assert seen[0].url.params["limit"] == str(MAX_ITEMS)
    assert seen[0].headers["User-Agent"]


@pytest.mark.anyio
async def test_duckduckgo_keeps_abstract_fields() -> None:
    payload = {
        "Heading": "Python",
        "AbstractText": "Python is a language.",
        "AbstractURL": "https://example.org/python",
        "RelatedTopics": [{"Text": str(i)} for i in range(6)],
        "Image": "ignored",
    }

    async with _client(_json(payload)) as client:
        data = await fetch_duckduckgo(client, "python")

    assert data == {
        "Heading": "Python",
        "AbstractText": "Python is a language.",
        "AbstractURL": "https://example.org/python",
        "RelatedTopics": [{"Text": "0"}, {"Text": "1"}, {"Text": "2"}],
    }


@pytest.mark.anyio
async def test_hackernews_extracts_story_fields() -> None:
    hits = [
        {"title": "A", "url": "https://a", "points": 10, "author": "x", "_tags": []},
        {"title": "B", "url": None, "points": 3, "author": "y"},
    ]

    async with _client(_json({"hits": hits})) as client:
        data = await fetch_hackernews(client, "python")

    assert data == [
        {"title": "A", "url": "https://a", "points": 10, "author": "x"},
        {"title": "B", "url": None, "points": 3, "author": "y"},
    ]


@pytest.mark.anyio
async def test_publicapis_caps_entries_and_handles_null() -> None:
    entries = [{"API": f"api-{i}", "Link": f"https://{i}"} for i in range(4)]

    async with _client(_json({"count": 4, "entries": entries})) as client:
        assert await fetch_publicapis(client, "cat") == entries[:3]

    async with _client(_json({"count": 0, "entries": None})) as client:
        assert await fetch_publicapis(client, "cat") == []


@pytest.mark.anyio
async def test_openlibrary_extracts_book_fields() -> None:
    docs = [
        {
            "title": "Fluent Python",
            "author_name": ["Luciano Ramalho"],
            "first_publish_year": 2015,
            "key": "/works/OL1",
        }
    ]

    async with _client(_json({"docs": docs})) as client:
        data = await fetch_openlibrary(client, "fluent python")

    assert data == [
        {
            "title": "Fluent Python",
            "author_name": ["Luciano Ramalho"],
            "first_publish_year": 2015,
        }
    ]


@pytest.mark.anyio
async def test_coindesk_ignores_keyword() -> None:
    payload = {
        "time": {"updated": "Jan 1, 2024 00:00:00 UTC"},
        "bpi": {
            "USD": {"rate": "42,000.00"},
            "GBP": {"rate": "33,000.00"},
            "EUR": {"rate": "38,000.00"},
        },
    }

    async with _client(_json(payload)) as client:
        data = await fetch_coindesk(client, "anything")

    assert data == {
        "time": "Jan 1, 2024 00:00:00 UTC",
        "USD": "42,000.00",
        "GBP": "33,000.00",
        "EUR": "38,000.00",
    }


@pytest.mark.anyio
async def test_tvmaze_prefers_official_site() -> None:
    payload = [
        {
            "score": 0.9,
            "show": {
                "name": "Silicon Valley",
                "officialSite": "https://hbo.example",
                "url": "https://tvmaze.example/1",
                "summary": "<p>Startups.</p>",
                "genres": ["Comedy"],
                "rating": {"average": 8.5},
            },
        },
        {
            "score": 0.5,
            "show": {
                "name": "Halt",
                "officialSite": None,
                "url": "https://tvmaze.example/2",
                "summary": None,
                "genres": [],
                "rating": None,
            },
        },
    ]

    async with _client(_json(payload)) as client:
        data = await fetch_tvmaze(client, "silicon")

    assert data == [
        {
            "name": "Silicon Valley",
            "url": "https://hbo.example",
            "summary": "<p>Startups.</p>",
            "genres": ["Comedy"],
            "rating": 8.5,
        },
        {
            "name": "Halt",
            "url": "https://tvmaze.example/2",
            "summary": None,
            "genres": [],
            "rating": None,
        },
    ]


@pytest.mark.anyio
async def test_safe_fetch_turns_exceptions_into_failure(
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def broken(keyword: str) -> Any:
        raise RuntimeError("boom")

    async def working(keyword: str) -> Any:
        return [keyword]

    with caplog.at_level(logging.ERROR):
        assert await safe_fetch("broken", broken)("python") is None
        assert await safe_fetch("working", working)("python") == ["python"]

    assert "provider_fetch_failed provider=broken keyword=python" in caplog.text
