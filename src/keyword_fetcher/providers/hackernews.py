from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("hackernews")
async def fetch_hackernews(
    http_client: httpx.AsyncClient, keyword: str
) -> list[dict[str, Any]] | None:
    """Story search via the Algolia Hacker News API."""
    url = "https://hn.algolia.com/api/v1/search"
    params = {"query": keyword, "hitsPerPage": str(MAX_ITEMS)}

    try:
        data = await get_json(http_client, url, params=params)
        return [
            {
                "title": hit.get("title"),
                "url": hit.get("url"),
                "points": hit.get("points"),
                "author": hit.get("author"),
            }
            for hit in data["hits"][:MAX_ITEMS]
        ]
    except Exception:
        logger.exception(
            "provider_fetch_failed provider=hackernews keyword=%s", keyword
        )
        return None
