"""DuckDuckGo Instant Answer API (abstracts, not web results)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("duckduckgo")
async def fetch_duckduckgo(
    http_client: httpx.AsyncClient, keyword: str
) -> dict[str, Any] | None:
    url = "https://api.duckduckgo.com/"
    params = {"q": keyword, "format": "json", "no_redirect": "1"}

    try:
        data = await get_json(http_client, url, params=params)
        return {
            "Heading": data.get("Heading"),
            "AbstractText": data.get("AbstractText"),
            "AbstractURL": data.get("AbstractURL"),
            "RelatedTopics": (data.get("RelatedTopics") or [])[:MAX_ITEMS],
        }
    except Exception:
        logger.exception(
            "provider_fetch_failed provider=duckduckgo keyword=%s", keyword
        )
        return None
