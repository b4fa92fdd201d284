from __future__ import annotations

import logging
from typing import Any

import httpx
from fake_useragent import UserAgent

from keyword_fetcher.providers.base import MAX_ITEMS, get_json
from keyword_fetcher.providers.registry import register

logger = logging.getLogger(__name__)
ua = UserAgent()


@register("reddit")
async def fetch_reddit(
    http_client: httpx.AsyncClient, keyword: str
) -> list[dict[str, Any]] | None:
    url = "https://www.reddit.com/search.json"
    params = {"q": keyword, "limit": str(MAX_ITEMS)}

    try:
        data = await get_json(
            http_client, url, params=params, headers={"User-Agent": ua.random}
        )
        children = data["data"]["children"]
        return [
            {
                "title": child["data"].get("title"),
                "url": f"https://reddit.com{child['data'].get('permalink', '')}",
                "score": child["data"].get("score"),
            }
            for child in children[:MAX_ITEMS]
        ]
    except Exception:
        logger.exception("provider_fetch_failed provider=reddit keyword=%s", keyword)
        return None
