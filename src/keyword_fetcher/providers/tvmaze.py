from __future__ import annotations

import logging
from typing import Any

import httpx

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)


@register("tvmaze")
async def fetch_tvmaze(
    http_client: httpx.AsyncClient, keyword: str
) -> list[dict[str, Any]] | None:
    url = "https://api.tvmaze.com/search/shows"

    try:
        data = await get_json(http_client, url, params={"q": keyword})
        results = []
        for item in data[:MAX_ITEMS]:
            show = item["show"]
            results.append(
                {
                    "name": show.get("name"),
                    "url": show.get("officialSite") or show.get("url"),
                    "summary": show.get("summary"),
                    "genres": show.get("genres"),
                    "rating": (show.get("rating") or {}).get("average"),
                }
            )
        return results
    except Exception:
        logger.exception("provider_fetch_failed provider=tvmaze keyword=%s", keyword)
        return None
