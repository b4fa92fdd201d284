from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from keyword_fetcher.providers.base import get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)

_SEARCH_URL = "https://en.wikipedia.org/w/api.php"
_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/"


@register("wikipedia")
async def fetch_wikipedia(
    http_client: httpx.AsyncClient, keyword: str
) -> dict[str, Any] | None:
    """Summary of the closest article, found through full-text search.

    Searching first lets approximate keywords land on a real article title.
    """
    params = {
        "action": "query",
        "list": "search",
        "srsearch": keyword,
        "format": "json",
    }

    try:
        data = await get_json(http_client, _SEARCH_URL, params=params)
        hits = data.get("query", {}).get("search") or []
        if not hits:
            logger.info("wikipedia_no_hits keyword=%s", keyword)
            return None

        # Phase 2: page summary for the best match
        title = hits[0]["title"]
        summary = await get_json(http_client, _SUMMARY_URL + quote(title, safe=""))
        desktop = (summary.get("content_urls") or {}).get("desktop") or {}
        return {
            "title": summary.get("title"),
            "extract": summary.get("extract"),
            "url": desktop.get("page") or "",
        }
    except Exception:
        logger.exception("provider_fetch_failed provider=wikipedia keyword=%s", keyword)
        return None
